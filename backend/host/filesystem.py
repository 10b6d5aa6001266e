"""
AutoClassName Filesystem Provider.

The filesystem capability the plugin consumes from its host, plus a
local implementation backed by pathlib.
Requires Python 3.11+.
"""

import contextlib
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One child of a listed directory."""

    name: str
    is_directory: bool


@runtime_checkable
class FileSystemProvider(Protocol):
    """Filesystem operations supplied by the host editor."""

    def list_directory(self, path: str) -> list[DirectoryEntry]: ...

    def read_all(self, path: str) -> str: ...

    def write_all(self, path: str, text: str) -> None: ...

    def stat_modified_time(self, path: str) -> int: ...

    def stat_size(self, path: str) -> int: ...


class LocalFileSystem:
    """
    FileSystemProvider over the local disk.

    Every method raises OSError on failure; callers decide whether a
    failure is skipped or aborts the current file. Text is UTF-8.
    """

    encoding = "utf-8"

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        """List the direct children of a directory, sorted by name."""
        entries = [
            DirectoryEntry(name=child.name, is_directory=child.is_dir())
            for child in Path(path).iterdir()
        ]
        entries.sort(key=lambda entry: entry.name)
        return entries

    # newline="" keeps CRLF files intact across a read/write cycle
    def read_all(self, path: str) -> str:
        with open(path, encoding=self.encoding, newline="") as handle:
            return handle.read()

    def write_all(self, path: str, text: str) -> None:
        """
        Replace the file content atomically.

        The text goes to a sibling temporary file first, so a failed
        write leaves the original file as it was.
        """
        target = Path(path)
        fd, temp_path = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as handle:
                handle.write(text)
            if target.exists():
                shutil.copymode(target, temp_path)
            os.replace(temp_path, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
            raise

    def stat_modified_time(self, path: str) -> int:
        """Modification time in whole seconds."""
        return int(Path(path).stat().st_mtime)

    def stat_size(self, path: str) -> int:
        return Path(path).stat().st_size
