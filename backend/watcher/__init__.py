"""
AutoClassName Watcher Package.

File system change notifications for the plugin.
Requires Python 3.11+.
"""

from watcher.file_watcher import ProjectWatcher, ScriptChangeHandler

__all__ = ["ProjectWatcher", "ScriptChangeHandler"]
