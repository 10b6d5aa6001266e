"""
AutoClassName Plugin.

Ties the registry and classifier to the host's change notifications:
every notification triggers one full rescan of the project tree.
Requires Python 3.11+.
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from classifier.heuristics import ScriptSyntax
from classifier.new_file_classifier import NewFileClassifier, Outcome
from host.editor import EditorNotifier, PluginMetadata
from host.filesystem import FileSystemProvider, LocalFileSystem
from registry.file_registry import FileRegistry, walk_files
from utils.config import Settings, get_settings
from utils.logger import LoggerMixin


METADATA = PluginMetadata(name="AutoClassName", icon="Script")


@dataclass
class ScanResult:
    """Statistics for one pass over the project tree."""

    files_seen: int = 0
    files_declared: int = 0
    excluded: int = 0

    def record(self, outcome: Outcome) -> None:
        self.files_seen += 1
        if outcome is Outcome.EXCLUDED:
            self.excluded += 1
        elif outcome.modified_file:
            self.files_declared += 1


class AutoClassNamePlugin(LoggerMixin):
    """
    Declares class names in scripts created inside a project.

    Owns the registry and classifier for one project root. The host
    calls on_filesystem_changed() for every change notification; each
    call schedules a rescan after yielding once to the event loop.
    Overlapping rescans are neither queued nor merged.
    """

    metadata = METADATA

    def __init__(
        self,
        root: str | Path,
        filesystem: FileSystemProvider | None = None,
        notifier: EditorNotifier | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the plugin for a project.

        Args:
            root: Project root directory
            filesystem: Filesystem provider, local disk by default
            notifier: Editor surface refreshed after a rewrite
            settings: Settings to use instead of the cached ones
            clock: Source of the current time in seconds
        """
        settings = settings or get_settings()
        classifier_settings = settings.classifier

        self._root = str(Path(root).absolute())
        self._filesystem = filesystem or LocalFileSystem()
        self._extension = classifier_settings.extension
        self._registry = FileRegistry(self._filesystem, self._extension)
        self._classifier = NewFileClassifier(
            registry=self._registry,
            filesystem=self._filesystem,
            syntax=ScriptSyntax.from_settings(classifier_settings),
            notifier=notifier,
            excluded_dir=str(Path(self._root) / classifier_settings.plugin_dir),
            recency_window=classifier_settings.recency_window_seconds,
            clock=clock,
        )
        self._tasks: set[asyncio.Task[ScanResult]] = set()

    @property
    def root(self) -> str:
        return self._root

    @property
    def registry(self) -> FileRegistry:
        return self._registry

    @property
    def classifier(self) -> NewFileClassifier:
        return self._classifier

    def enable(self) -> int:
        """
        Record the current state of every script under the root.

        Returns:
            Number of scripts recorded
        """
        count = self._registry.initialize(self._root)
        self.log.info("plugin_enabled", root=self._root, name=self.metadata.name)
        return count

    def scan(self) -> ScanResult:
        """Run every script under the root through the classifier."""
        result = ScanResult()
        for path in walk_files(self._filesystem, self._root, self._extension):
            result.record(self._classifier.process(path))

        self.log.debug(
            "scan_completed",
            files_seen=result.files_seen,
            files_declared=result.files_declared,
        )
        return result

    def on_filesystem_changed(self) -> asyncio.Task[ScanResult]:
        """
        Handle a payload-less filesystem change notification.

        Must be called from within a running event loop.

        Returns:
            The task performing the rescan
        """
        task = asyncio.get_running_loop().create_task(self._rescan())
        # Keep a strong reference until the task finishes
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _rescan(self) -> ScanResult:
        # Let the host's own file cache settle first
        await asyncio.sleep(0)
        return self.scan()

    @property
    def pending_scans(self) -> int:
        """Number of scheduled rescans that have not finished."""
        return len(self._tasks)
