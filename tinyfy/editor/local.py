from pathlib import Path

from tinyfy.editor.base import BaseDocument, BaseFileSystem, BaseNotifier
from tinyfy.editor.models import FileStat, Notification
from tinyfy.logging.logger import Log

SYNTAX_BY_EXTENSION: dict[str, str] = {
    ".js": "javascript",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
}


def syntax_for_path(path: Path) -> str | None:
    """Guess the editor syntax tag for a file on disk."""
    return SYNTAX_BY_EXTENSION.get(path.suffix.lower())


class LocalFileSystem(BaseFileSystem):
    """Filesystem facade over pathlib."""

    def stat(self, path: str) -> FileStat | None:
        try:
            result = Path(path).stat()
        except (FileNotFoundError, NotADirectoryError, PermissionError):
            return None
        return FileStat(size=result.st_size)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)


class FileDocument(BaseDocument):
    """A document backed directly by a file on disk."""

    def __init__(self, path: Path | None, syntax: str | None = None) -> None:
        if syntax is None and path is not None:
            syntax = syntax_for_path(path)
        self._path = path
        self._syntax = syntax
        self.selected_offset: int | None = None

    @property
    def syntax(self) -> str | None:
        return self._syntax

    @property
    def path(self) -> str | None:
        return str(self._path) if self._path is not None else None

    @property
    def text(self) -> str:
        if self._path is None:
            return ""
        return self._path.read_text(encoding="utf-8", errors="replace")

    def select_offset(self, offset: int) -> None:
        self.selected_offset = offset
        Log.info(f"Cursor moved to offset {offset} in {self._path}")


class LogNotifier(BaseNotifier):
    """Writes notifications to the application log."""

    def notify(self, notification: Notification) -> None:
        message = f"[{notification.id}] {notification.title}: {notification.body}"
        if notification.url:
            message += f" ({notification.actions[0]}: {notification.url})"
        if "error" in notification.id:
            Log.warning(message)
        else:
            Log.info(message)
