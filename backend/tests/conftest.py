"""
AutoClassName Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

from pathlib import Path, PurePosixPath

import pytest

from classifier.heuristics import ScriptSyntax
from host.filesystem import DirectoryEntry
from registry.file_registry import FileRegistry
from utils.config import ClassifierSettings, Settings


NOW = 1_700_000_000.0


class MemoryFileSystem:
    """FileSystemProvider keeping files in a dict, with settable mtimes."""

    def __init__(self) -> None:
        self.files: dict[str, str] = {}
        self.mtimes: dict[str, int] = {}
        self.unreadable: set[str] = set()
        self.unwritable: set[str] = set()
        self.writes: list[str] = []

    def add(self, path: str, text: str, modified_time: float = NOW) -> None:
        self.files[path] = text
        self.mtimes[path] = int(modified_time)

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        if path in self.unreadable:
            raise PermissionError(path)
        parent = PurePosixPath(path)
        children: dict[str, bool] = {}
        for file_path in self.files:
            candidate = PurePosixPath(file_path)
            if not candidate.is_relative_to(parent) or candidate == parent:
                continue
            parts = candidate.relative_to(parent).parts
            children[parts[0]] = children.get(parts[0], False) or len(parts) > 1
        # Directories only exist through the files below them
        if not children:
            raise FileNotFoundError(path)
        return [
            DirectoryEntry(name=name, is_directory=is_dir)
            for name, is_dir in sorted(children.items())
        ]

    def read_all(self, path: str) -> str:
        if path in self.unreadable or path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def write_all(self, path: str, text: str) -> None:
        if path in self.unwritable:
            raise PermissionError(path)
        self.files[path] = text
        self.writes.append(path)

    def stat_modified_time(self, path: str) -> int:
        if path not in self.mtimes:
            raise FileNotFoundError(path)
        return self.mtimes[path]

    def stat_size(self, path: str) -> int:
        if path in self.unreadable or path not in self.files:
            raise FileNotFoundError(path)
        return len(self.files[path].encode("utf-8"))


class RecordingNotifier:
    """EditorNotifier remembering every reload request."""

    def __init__(self) -> None:
        self.reloaded: list[str] = []

    def reload_if_open(self, path: str) -> None:
        self.reloaded.append(path)


class FailingNotifier:
    """EditorNotifier whose host call always fails."""

    def reload_if_open(self, path: str) -> None:
        raise RuntimeError("script editor unavailable")


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier recording reload requests."""
    return RecordingNotifier()


@pytest.fixture
def syntax() -> ScriptSyntax:
    """Default script keywords."""
    return ScriptSyntax()


@pytest.fixture
def registry(memory_fs: MemoryFileSystem) -> FileRegistry:
    """Registry over the in-memory filesystem."""
    return FileRegistry(memory_fs, ".gd")


@pytest.fixture
def generic_settings() -> Settings:
    """Settings using neutral keywords and extension."""
    return Settings(
        classifier=ClassifierSettings(
            extension=".ext",
            class_name_keyword="declare",
            extends_keyword="inherits",
            plugin_dir="addons/auto_class_name",
        )
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Project tree on disk with an old script and a plugin directory."""
    project = tmp_path / "project"
    (project / "scenes").mkdir(parents=True)
    (project / "addons" / "auto_class_name").mkdir(parents=True)

    (project / "scenes" / "level.ext").write_text("inherits Node2D\n\nfunc _ready():\n\tpass\n")
    (project / "notes.txt").write_text("not a script\n")
    return project
