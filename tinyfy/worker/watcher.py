import asyncio
from pathlib import Path

from tinyfy.dispatch.dispatcher import EventDispatcher
from tinyfy.editor.local import SYNTAX_BY_EXTENSION, FileDocument
from tinyfy.logging.logger import Log


class SaveWatcher:
    """Poll loop: scan -> diff mtimes -> fire save events."""

    def __init__(
        self,
        root: Path,
        dispatcher: EventDispatcher,
        poll_interval_seconds: float,
    ) -> None:
        self._root = root
        self._dispatcher = dispatcher
        self._poll_interval_seconds = poll_interval_seconds
        self._mtimes: dict[Path, float] = {}

    async def run(self, max_polls: int | None = None) -> None:
        """Watch until interrupted.

        The first scan only records a baseline. If max_polls is set, stop
        after that many scans that follow it (for testing).
        """
        Log.info(f"Watching {self._root.resolve()} for saves")
        self._mtimes = self.scan()
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                await asyncio.sleep(self._poll_interval_seconds)
                for path in self.poll():
                    Log.debug(f"Detected save of {path}")
                    self._dispatcher.on_save(FileDocument(path))
                polls += 1
            await self._dispatcher.drain()
        except KeyboardInterrupt:
            Log.info("Watcher shutting down gracefully")
        except asyncio.CancelledError:
            Log.info("Watcher shutting down gracefully")
            raise

    def poll(self) -> list[Path]:
        """Rescan and return files that are new or modified since the last scan."""
        current = self.scan()
        changed = [
            path
            for path, mtime in current.items()
            if self._mtimes.get(path) != mtime
        ]
        self._mtimes = current
        return sorted(changed)

    def scan(self) -> dict[Path, float]:
        mtimes: dict[Path, float] = {}
        for path in self._root.rglob("*"):
            if path.suffix.lower() not in SYNTAX_BY_EXTENSION:
                continue
            try:
                if path.is_file():
                    mtimes[path] = path.stat().st_mtime
            except OSError as exc:
                Log.warning(f"Could not stat {path}, ignoring: {exc}")
        return mtimes
