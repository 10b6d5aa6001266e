"""
AutoClassName Editor Surface.

Capabilities the host editor exposes to the plugin: refreshing open
script buffers and the static metadata shown in its plugin list.
Requires Python 3.11+.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from utils.logger import LoggerMixin


@runtime_checkable
class EditorNotifier(Protocol):
    """Asks the host to reload a path if it is open in an editor view."""

    def reload_if_open(self, path: str) -> None: ...


class NullEditorNotifier:
    """Notifier for hosts without an editor surface."""

    def reload_if_open(self, path: str) -> None:
        return None


class LoggingEditorNotifier(LoggerMixin):
    """Notifier that only records the reload request."""

    def reload_if_open(self, path: str) -> None:
        self.log.info("editor_reload_requested", path=path)


@dataclass(frozen=True, slots=True)
class PluginMetadata:
    """Name and icon resource registered with the host plugin list."""

    name: str
    icon: str
