"""
AutoClassName File Registry.

In-memory record of each tracked script's last observed
modification time and size.
Requires Python 3.11+.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from host.filesystem import FileSystemProvider
from utils.logger import LoggerMixin, get_logger


logger = get_logger("registry")


@dataclass(frozen=True, slots=True)
class TrackedFileInfo:
    """Last observed state of one tracked file."""

    path: str
    modified_time: int
    size_bytes: int


def walk_files(
    filesystem: FileSystemProvider,
    root: str,
    extension: str,
) -> Iterator[str]:
    """
    Recursively yield every file under root ending with extension.

    Directories that cannot be listed are skipped with their subtree.

    Args:
        filesystem: Provider used for listing
        root: Directory to start from
        extension: Watched file extension, including the dot

    Yields:
        File paths, depth first
    """
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            entries = filesystem.list_directory(directory)
        except OSError as e:
            logger.debug("directory_unreadable", path=directory, error=str(e))
            continue

        subdirectories: list[str] = []
        for entry in entries:
            child = str(Path(directory) / entry.name)
            if entry.is_directory:
                subdirectories.append(child)
            elif entry.name.endswith(extension):
                yield child

        # Reversed so the stack visits subdirectories in listing order
        pending.extend(reversed(subdirectories))


class FileRegistry(LoggerMixin):
    """
    Maps file paths to their last observed TrackedFileInfo.

    Entries are overwritten on every observation and never removed;
    entries for deleted files linger until the registry is discarded.
    """

    def __init__(self, filesystem: FileSystemProvider, extension: str) -> None:
        """
        Initialize an empty registry.

        Args:
            filesystem: Provider used to stat files
            extension: Watched file extension, including the dot
        """
        self._filesystem = filesystem
        self._extension = extension
        self._entries: dict[str, TrackedFileInfo] = {}

    def initialize(self, root: str) -> int:
        """
        Record every watched file under root.

        Existing entries outside root are left untouched.

        Args:
            root: Project root directory

        Returns:
            Number of files recorded
        """
        count = 0
        for path in walk_files(self._filesystem, root, self._extension):
            self.update(path, self.observe(path))
            count += 1

        self.log.info("registry_initialized", root=root, file_count=count)
        return count

    def observe(self, path: str) -> TrackedFileInfo:
        """
        Stat a file into a TrackedFileInfo without recording it.

        Unreadable sizes count as 0, unreadable timestamps as 0.
        """
        try:
            modified_time = self._filesystem.stat_modified_time(path)
        except OSError:
            modified_time = 0
        try:
            size_bytes = self._filesystem.stat_size(path)
        except OSError:
            size_bytes = 0
        return TrackedFileInfo(
            path=path, modified_time=modified_time, size_bytes=size_bytes
        )

    def lookup(self, path: str) -> TrackedFileInfo | None:
        """Get the recorded info for a path, if any."""
        return self._entries.get(path)

    def update(self, path: str, info: TrackedFileInfo) -> None:
        """Record info for a path, replacing any previous entry."""
        self._entries[path] = info

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
