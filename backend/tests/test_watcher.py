"""
Tests for the Project Watcher.

Requires Python 3.11+.
"""

import asyncio
import logging
from pathlib import Path

import pytest
import structlog
from watchdog.events import (
    DirCreatedEvent,
    DirModifiedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileOpenedEvent,
)

from watcher.file_watcher import ProjectWatcher, ScriptChangeHandler


@pytest.fixture
def calls() -> list[None]:
    return []


@pytest.fixture
def handler(calls: list[None]) -> ScriptChangeHandler:
    """Handler for .gd scripts counting its notifications."""
    return ScriptChangeHandler(".gd", lambda: calls.append(None))


class TestScriptChangeHandler:
    """Test cases for event filtering."""

    def test_script_events_notify(self, handler: ScriptChangeHandler, calls: list[None]):
        """Creations and modifications of scripts notify."""
        handler.dispatch(FileCreatedEvent("/project/a.gd"))
        handler.dispatch(FileModifiedEvent("/project/a.gd"))

        assert len(calls) == 2

    def test_other_files_ignored(self, handler: ScriptChangeHandler, calls: list[None]):
        """Non-script files do not notify."""
        handler.dispatch(FileCreatedEvent("/project/readme.md"))

        assert calls == []

    def test_move_into_script_name(self, handler: ScriptChangeHandler, calls: list[None]):
        """Renaming a file to a script name notifies."""
        handler.dispatch(FileMovedEvent("/project/tmp.txt", "/project/a.gd"))

        assert len(calls) == 1

    def test_directory_events(self, handler: ScriptChangeHandler, calls: list[None]):
        """New directories notify, directory modifications do not."""
        handler.dispatch(DirCreatedEvent("/project/scenes"))
        handler.dispatch(DirModifiedEvent("/project"))

        assert len(calls) == 1

    def test_open_events_ignored(self, handler: ScriptChangeHandler, calls: list[None]):
        """Opening a script for reading is not a change."""
        handler.dispatch(FileOpenedEvent("/project/a.gd"))

        assert calls == []


class TestProjectWatcher:
    """Test cases for the watcher lifecycle."""

    def test_start_stop(self, tmp_path: Path):
        """The watcher starts and stops cleanly."""
        watcher = ProjectWatcher(tmp_path, on_change=lambda: None, extension=".gd")

        with watcher:
            assert watcher.is_running

        assert not watcher.is_running

    async def test_delivers_on_event_loop(self, tmp_path: Path):
        """A change on disk reaches the callback on the event loop."""
        changed = asyncio.Event()
        watcher = ProjectWatcher(tmp_path, on_change=changed.set, extension=".gd")
        watcher.set_event_loop(asyncio.get_running_loop())

        with watcher:
            (tmp_path / "new_script.gd").write_text("extends Node\n")
            await asyncio.wait_for(changed.wait(), timeout=5.0)

        assert changed.is_set()

    async def test_start_inside_loop_uses_that_loop(self, tmp_path: Path):
        """Without set_event_loop(), callbacks land on the loop running start()."""
        loop = asyncio.get_running_loop()
        delivered_on: list[asyncio.AbstractEventLoop] = []
        changed = asyncio.Event()

        def on_change() -> None:
            delivered_on.append(asyncio.get_running_loop())
            changed.set()

        watcher = ProjectWatcher(tmp_path, on_change=on_change, extension=".gd")

        with watcher:
            (tmp_path / "enemy.gd").write_text("")
            await asyncio.wait_for(changed.wait(), timeout=5.0)

        assert delivered_on[0] is loop

    def test_debug_logging_does_not_break_dispatch(
        self, handler: ScriptChangeHandler, calls: list[None]
    ):
        """Event details logged at debug level still reach the callback."""
        structlog.configure(
            wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
            cache_logger_on_first_use=False,
        )
        try:
            handler.dispatch(FileCreatedEvent("/project/enemy.gd"))
        finally:
            structlog.reset_defaults()

        assert len(calls) == 1
