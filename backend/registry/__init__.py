"""
AutoClassName Registry Package.

Tracks script timestamps and sizes between scans.
Requires Python 3.11+.
"""

from registry.file_registry import FileRegistry, TrackedFileInfo, walk_files

__all__ = ["FileRegistry", "TrackedFileInfo", "walk_files"]
