#!/usr/bin/env python3
"""
AutoClassName Project Watch Script.

Watches a project and declares class names in newly created scripts.
Requires Python 3.11+.

Usage:
    python scripts/watch_project.py /path/to/project
    python scripts/watch_project.py /path/to/project --once
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from host.editor import LoggingEditorNotifier
from plugin.auto_class_name import AutoClassNamePlugin
from utils.config import get_settings
from utils.logger import configure_logging, get_logger
from watcher.file_watcher import ProjectWatcher


logger = get_logger("watch_project")


async def watch_project(plugin: AutoClassNamePlugin) -> None:
    """
    Rescan the project on every change until cancelled.

    Args:
        plugin: Enabled plugin for the project
    """
    watcher = ProjectWatcher(
        root_path=Path(plugin.root),
        on_change=plugin.on_filesystem_changed,
    )
    watcher.set_event_loop(asyncio.get_running_loop())

    with watcher:
        # Runs until the surrounding asyncio.run() is interrupted
        await asyncio.Event().wait()


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Declare class names in newly created scripts of a project"
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the project root",
    )
    parser.add_argument(
        "--plugin-dir",
        default=None,
        help="Plugin installation directory, relative to the project root",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scan without a baseline instead of watching",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if not args.path.is_dir():
        print(f"Error: Path is not a directory: {args.path}")
        sys.exit(1)

    settings = get_settings()
    if args.plugin_dir is not None:
        settings = settings.model_copy(
            update={
                "classifier": settings.classifier.model_copy(
                    update={"plugin_dir": args.plugin_dir}
                )
            }
        )

    plugin = AutoClassNamePlugin(
        args.path,
        notifier=LoggingEditorNotifier(),
        settings=settings,
    )

    if args.once:
        # No baseline: every script inside the recency window counts as new
        result = plugin.scan()
        print(f"Scripts scanned: {result.files_seen}")
        print(f"Class names declared: {result.files_declared}")
        return

    if not settings.watcher.enabled:
        print("Watching is disabled (WATCHER_ENABLED=false)")
        sys.exit(1)

    plugin.enable()

    try:
        asyncio.run(watch_project(plugin))
    except KeyboardInterrupt:
        logger.info("watch_stopped", root=plugin.root)


if __name__ == "__main__":
    main()
