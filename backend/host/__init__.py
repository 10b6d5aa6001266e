"""
AutoClassName Host Package.

Interfaces to the host editor and their local implementations.
Requires Python 3.11+.
"""

from host.filesystem import DirectoryEntry, FileSystemProvider, LocalFileSystem
from host.editor import (
    EditorNotifier,
    NullEditorNotifier,
    LoggingEditorNotifier,
    PluginMetadata,
)

__all__ = [
    "DirectoryEntry",
    "FileSystemProvider",
    "LocalFileSystem",
    "EditorNotifier",
    "NullEditorNotifier",
    "LoggingEditorNotifier",
    "PluginMetadata",
]
