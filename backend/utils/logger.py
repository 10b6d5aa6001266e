"""
AutoClassName Structured Logging Module.

structlog setup shared by the plugin, the watcher and the scripts.
Requires Python 3.11+.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from utils.config import Settings, get_settings


def _app_context(settings: Settings) -> Processor:
    """Build a processor stamping every entry with the app name and version."""

    def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["app"] = settings.app_name
        event_dict["version"] = settings.app_version
        return event_dict

    return add_app_context


def configure_logging(level: str | None = None, settings: Settings | None = None) -> None:
    """
    Configure structured logging to stderr.

    Call this once at startup.

    Args:
        level: Level overriding the configured one
        settings: Settings to use instead of the cached ones
    """
    settings = settings or get_settings()
    numeric_level = getattr(logging, (level or settings.logging.level).upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _app_context(settings),
    ]
    if settings.logging.format == "json":
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # watchdog logs every inotify event through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=numeric_level)
    logging.getLogger("watchdog").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, typically named after the calling module."""
    return structlog.get_logger(name)


class LoggerMixin:
    """
    Gives a class a `log` property bound to the class name.

    Usage:
        class ProjectWatcher(LoggerMixin):
            def start(self):
                self.log.info("project_watcher_started", path=...)
    """

    @property
    def log(self) -> structlog.stdlib.BoundLogger:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
