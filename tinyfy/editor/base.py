"""Contracts for the host collaborators the pipeline depends on."""

from abc import ABC, abstractmethod

from tinyfy.editor.models import FileStat, Notification


class BaseDocument(ABC):
    """An open document as seen by the save handler."""

    @property
    @abstractmethod
    def syntax(self) -> str | None:
        """Content-type tag assigned by the editor, e.g. ``javascript``."""

    @property
    @abstractmethod
    def path(self) -> str | None:
        """Absolute file path, or None for unsaved/virtual buffers."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Full text content of the document."""

    @abstractmethod
    def select_offset(self, offset: int) -> None:
        """Move the cursor to a character offset and scroll it into view."""


class BaseConfigStore(ABC):
    """Typed configuration lookup with caller-supplied defaults."""

    @abstractmethod
    def get_bool(self, key: str, default: bool) -> bool:
        ...

    @abstractmethod
    def get_str(self, key: str, default: str) -> str:
        ...


class BaseFileSystem(ABC):
    """Filesystem facade used for stat, read and write by path."""

    @abstractmethod
    def stat(self, path: str) -> FileStat | None:
        """Return metadata, or None when the path is missing or inaccessible.

        Raises:
            OSError: for any other filesystem failure.
        """

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        ...

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        ...


class BaseNotifier(ABC):
    """Presents notifications to the user."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        ...
