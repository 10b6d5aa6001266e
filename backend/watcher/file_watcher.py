"""
AutoClassName Project Watcher.

Cross-platform change notifications using watchdog. Events carry no
payload for the consumer: any relevant change only says "the
filesystem changed".
Requires Python 3.11+.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

from watchdog.events import (
    DirCreatedEvent,
    DirMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from utils.config import get_settings
from utils.logger import LoggerMixin


class ScriptChangeHandler(FileSystemEventHandler, LoggerMixin):
    """
    Forwards events that touch scripts as bare change notifications.

    Directory creations and moves are forwarded too, since they can
    bring scripts along without a per-file event.
    """

    def __init__(self, extension: str, notify: Callable[[], Any]) -> None:
        """
        Initialize the handler.

        Args:
            extension: Watched script extension, including the dot
            notify: Called with no arguments for each relevant event
        """
        super().__init__()
        self._extension = extension
        self._notify = notify

    def _is_script(self, path: str | bytes) -> bool:
        if isinstance(path, bytes):
            path = path.decode(errors="replace")
        return path.endswith(self._extension)

    def is_relevant(self, event: FileSystemEvent) -> bool:
        """Check whether an event should trigger a rescan."""
        if isinstance(event, (DirCreatedEvent, DirMovedEvent)):
            return True
        if event.is_directory:
            return False
        if self._is_script(event.src_path):
            return True
        dest_path = getattr(event, "dest_path", "")
        return bool(dest_path) and self._is_script(dest_path)

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Handle every watchdog event."""
        if event.event_type in ("opened", "closed_no_write"):
            return
        if not self.is_relevant(event):
            return

        self.log.debug(
            "filesystem_changed", event_type=event.event_type, path=event.src_path
        )
        self._notify()


class ProjectWatcher(LoggerMixin):
    """
    Watches a project directory and reports changes to a callback.

    The callback runs on the event loop given to set_event_loop(), or on
    the loop running when start() is called. Without either it runs on
    the observer thread, so it must not need a running loop.
    """

    def __init__(
        self,
        root_path: Path,
        on_change: Callable[[], Any],
        extension: str | None = None,
        recursive: bool | None = None,
    ) -> None:
        """
        Initialize the project watcher.

        Args:
            root_path: Root directory to watch
            on_change: Callback invoked with no arguments per change
            extension: Watched script extension
            recursive: Whether to watch subdirectories
        """
        settings = get_settings()

        self._root_path = root_path
        self._on_change = on_change
        self._extension = extension or settings.classifier.extension
        self._recursive = (
            settings.watcher.recursive if recursive is None else recursive
        )
        self._loop: asyncio.AbstractEventLoop | None = None

        self._handler = ScriptChangeHandler(
            extension=self._extension,
            notify=self._dispatch,
        )

        self._observer: Observer | None = None
        self._running = False

    def set_event_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop the callback is delivered on."""
        self._loop = loop

    def _dispatch(self) -> None:
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._on_change)
        else:
            self._on_change()

    def start(self) -> None:
        """Start watching for file changes."""
        if self._running:
            return

        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                self.log.debug("project_watcher_without_loop")

        self._observer = Observer()
        self._observer.schedule(
            self._handler,
            str(self._root_path),
            recursive=self._recursive,
        )
        self._observer.start()
        self._running = True

        self.log.info(
            "project_watcher_started",
            path=str(self._root_path),
            recursive=self._recursive,
            extension=self._extension,
        )

    def stop(self) -> None:
        """Stop watching for file changes."""
        if not self._running:
            return

        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None

        self._running = False
        self.log.info("project_watcher_stopped")

    @property
    def is_running(self) -> bool:
        """Check if the watcher is running."""
        return self._running

    def __enter__(self) -> "ProjectWatcher":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.stop()
