"""File system watching for the Untis export directory."""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


class ChangeHandler(FileSystemEventHandler):
    """Forwards changes of matching files as payload-free notifications.

    Bursts are not coalesced here; the export coordinator drops
    notifications while a run is active.
    """

    def __init__(self, callback: ChangeCallback, pattern: str | None = None) -> None:
        """Initialize the handler.

        Args:
            callback: Function called for every matching event.
            pattern: Optional glob pattern to filter file names.
        """
        super().__init__()
        self.callback = callback
        self.pattern = pattern

    def _should_handle(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False

        if self.pattern:
            paths = [event.src_path, getattr(event, "dest_path", "")]
            names = [
                Path(path if isinstance(path, str) else path.decode()).name
                for path in paths
                if path
            ]
            if not any(fnmatch.fnmatch(name, self.pattern) for name in names):
                return False

        return True

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in ("opened", "closed_no_write"):
            return
        if not self._should_handle(event):
            return

        logger.debug(f"File event: {event.event_type} - {event.src_path!r}")
        self.callback()


class DirectoryWatcher:
    """Watches a single directory and notifies a callback on changes."""

    def __init__(self) -> None:
        self._observer: Any = None
        self._watch: Any = None
        self._handler: ChangeHandler | None = None
        self._path: Path | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running

    @property
    def path(self) -> Path | None:
        return self._path

    def watch(self, path: str | Path, callback: ChangeCallback, pattern: str | None = None) -> None:
        """Register the callback for changes in a directory.

        Replaces any previous registration.

        Args:
            path: Directory to watch (not recursive).
            callback: Called for every matching file event.
            pattern: Optional glob pattern to filter file names.
        """
        self._path = Path(path).expanduser().resolve()
        self._handler = ChangeHandler(callback=callback, pattern=pattern)

        if self._running:
            self._schedule()

        logger.info(f"Watching {self._path} (pattern={pattern})")

    def start(self) -> None:
        """Start the observer."""
        if self._running:
            return

        self._observer = Observer()
        self._schedule()
        self._observer.start()
        self._running = True
        logger.info("File watcher started")

    def stop(self) -> None:
        """Stop the observer."""
        if not self._running:
            return

        self._observer.stop()
        self._observer.join(timeout=5.0)
        self._observer = None
        self._watch = None
        self._running = False
        logger.info("File watcher stopped")

    def _schedule(self) -> None:
        if self._handler is None or self._path is None:
            return

        if self._watch is not None:
            self._observer.unschedule(self._watch)

        self._watch = self._observer.schedule(self._handler, str(self._path), recursive=False)
