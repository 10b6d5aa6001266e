"""
AutoClassName New File Classifier.

Decides whether a script was just created and, if so, prepends a
class name declaration derived from its file name.
Requires Python 3.11+.
"""

import time
from collections.abc import Callable
from enum import Enum
from pathlib import PurePath

from classifier.heuristics import (
    ScriptSyntax,
    derive_class_name,
    has_declaration,
    looks_freshly_created,
    prepend_declaration,
)
from host.editor import EditorNotifier, NullEditorNotifier
from host.filesystem import FileSystemProvider
from registry.file_registry import FileRegistry, TrackedFileInfo
from utils.logger import LoggerMixin


class Outcome(str, Enum):
    """What processing a single path ended with."""

    EXCLUDED = "excluded"
    NOT_RECENT = "not_recent"
    NOT_NEW = "not_new"
    ALREADY_DECLARED = "already_declared"
    UNREADABLE = "unreadable"
    WRITE_FAILED = "write_failed"
    DECLARED = "declared"

    @property
    def modified_file(self) -> bool:
        return self is Outcome.DECLARED


class NewFileClassifier(LoggerMixin):
    """
    Classifies scripts as newly created and declares their class name.

    A path never seen before is new as soon as it falls inside the
    recency window. A known path is new only when its size changed and
    its content still looks like a fresh stub. The registry entry is
    refreshed on every call, whatever the outcome.
    """

    def __init__(
        self,
        registry: FileRegistry,
        filesystem: FileSystemProvider,
        syntax: ScriptSyntax | None = None,
        notifier: EditorNotifier | None = None,
        excluded_dir: str | None = None,
        recency_window: float = 3.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the classifier.

        Args:
            registry: Registry consulted and refreshed for each path
            filesystem: Provider used to read and rewrite scripts
            syntax: Keywords of the scripting language
            notifier: Editor surface told about rewritten files
            excluded_dir: Directory whose files are never touched
            recency_window: Max age in seconds of a new-file candidate
            clock: Source of the current time in seconds
        """
        self._registry = registry
        self._filesystem = filesystem
        self._syntax = syntax or ScriptSyntax()
        self._notifier = notifier or NullEditorNotifier()
        self._excluded_dir = PurePath(excluded_dir) if excluded_dir else None
        self._recency_window = recency_window
        self._clock = clock

    @property
    def registry(self) -> FileRegistry:
        return self._registry

    def is_excluded(self, path: str) -> bool:
        """Check whether path lies under the excluded directory."""
        if self._excluded_dir is None:
            return False
        return PurePath(path).is_relative_to(self._excluded_dir)

    def process(self, path: str) -> Outcome:
        """
        Classify one path and declare its class name if it is new.

        Args:
            path: Script path as produced by the tree walk

        Returns:
            The Outcome for this path
        """
        observed = self._registry.observe(path)
        previous = self._registry.lookup(path)

        try:
            if self.is_excluded(path):
                return Outcome.EXCLUDED

            age = self._clock() - observed.modified_time
            if age >= self._recency_window:
                return Outcome.NOT_RECENT

            if not self._is_new(path, observed, previous):
                return Outcome.NOT_NEW
        finally:
            self._registry.update(path, observed)

        return self._declare(path)

    def _is_new(
        self,
        path: str,
        observed: TrackedFileInfo,
        previous: TrackedFileInfo | None,
    ) -> bool:
        if previous is None:
            return True

        if observed.size_bytes == previous.size_bytes:
            return False

        try:
            content = self._filesystem.read_all(path)
        except (OSError, UnicodeDecodeError) as e:
            self.log.debug("script_unreadable", path=path, error=str(e))
            return False

        return looks_freshly_created(content, self._syntax)

    def _declare(self, path: str) -> Outcome:
        """Prepend the class name declaration to a new script."""
        # Read again: the content may have changed since classification
        try:
            content = self._filesystem.read_all(path)
        except (OSError, UnicodeDecodeError) as e:
            self.log.debug("script_unreadable", path=path, error=str(e))
            return Outcome.UNREADABLE

        if has_declaration(content, self._syntax):
            return Outcome.ALREADY_DECLARED

        class_name = derive_class_name(path)
        try:
            self._filesystem.write_all(
                path, prepend_declaration(content, class_name, self._syntax)
            )
        except OSError as e:
            self.log.warning("declaration_write_failed", path=path, error=str(e))
            return Outcome.WRITE_FAILED

        self.log.info("class_name_declared", path=path, class_name=class_name)
        self._refresh_editor(path)
        return Outcome.DECLARED

    def _refresh_editor(self, path: str) -> None:
        try:
            self._notifier.reload_if_open(path)
        except Exception as e:
            self.log.warning("editor_reload_failed", path=path, error=str(e))
