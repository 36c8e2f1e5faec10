#!/usr/bin/env python3
"""
Command-line interface for JournalTask.

Syncs journal text into a task list, imports journals from Google Drive and
shows the resulting tasks, statistics and dependencies.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import ImportConfig, get_data_dir
from .errors import ClassifiedError, ImportConfigError
from .importer import build_import_client
from .logging_setup import setup_logging
from .models import Task, TaskStatus
from .prompts import EXAMPLE_JOURNAL
from .store import SettingsStore
from .sync import SyncOrchestrator, build_orchestrator
from .views import FILTERS, compute_stats, dependency_groups, filter_by_status

logger = logging.getLogger(__name__)

STATUS_MARKERS = {
    TaskStatus.TODO: "○",
    TaskStatus.IN_PROGRESS: "◐",
    TaskStatus.DONE: "✓",
}


def print_error(error: ClassifiedError) -> None:
    print(f"✗ Error [{error.category.tag}]: {error.message}", file=sys.stderr)
    print(f"  Hint: {error.hint}", file=sys.stderr)


def format_task(task: Task) -> str:
    """One-line summary of a task for terminal output."""
    parts = [f"{STATUS_MARKERS[task.status]} {task.title}"]
    if task.is_urgent and task.status is not TaskStatus.DONE:
        parts.append("[URGENT]")
    if task.due_date:
        parts.append(f"(due {task.due_date})")
    parts.append(f"#{task.category}")
    return " ".join(parts)


def _run_sync(orchestrator: SyncOrchestrator, text: str) -> int:
    if not text.strip():
        print("Nothing to sync: journal text is empty.", file=sys.stderr)
        return 1

    print("Processing journal...")
    if orchestrator.sync(text):
        stats = compute_stats(orchestrator.tasks)
        print(f"✓ Synced {stats.total} task(s): {stats.pending} pending, {stats.urgent} urgent")
        print(f"  Last sync: {orchestrator.last_synced_at:%H:%M}")
        return 0

    if orchestrator.error:
        print_error(orchestrator.error)
        return 1

    print("Sync cancelled.")
    return 0


def cmd_sync(args, orchestrator: SyncOrchestrator) -> int:
    if args.example:
        text = EXAMPLE_JOURNAL
    elif args.file in (None, "-"):
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")
    return _run_sync(orchestrator, text)


def cmd_import(args, orchestrator: SyncOrchestrator) -> int:
    settings = SettingsStore(orchestrator.store.storage)
    config = ImportConfig.resolve(stored_client_id=settings.get_client_id(), client_id=args.client_id)

    text = orchestrator.import_journal(build_import_client(config))
    if orchestrator.error:
        print_error(orchestrator.error)
        return 1
    if text is None:
        print("Import cancelled.")
        return 0

    if args.sync:
        return _run_sync(orchestrator, text)

    print(text)
    return 0


def cmd_list(args, orchestrator: SyncOrchestrator) -> int:
    tasks = orchestrator.tasks
    if not tasks:
        print("No tasks yet. Sync your journal to extract tasks.")
        return 0

    visible = filter_by_status(tasks, args.filter)
    if not visible:
        print("No entries found in this view.")
        return 0

    for task in visible:
        print(format_task(task))
        if args.verbose_tasks and task.description:
            print(f"    {task.description}")
    return 0


def cmd_stats(args, orchestrator: SyncOrchestrator) -> int:
    stats = compute_stats(orchestrator.tasks)
    print(f"Total tasks:   {stats.total}")
    print(f"Completed:     {stats.completed}")
    print(f"Pending:       {stats.pending}")
    print(f"High priority: {stats.urgent}")
    print(f"Done:          {stats.completion_percent}%")
    if orchestrator.last_synced_at:
        print(f"Last sync:     {orchestrator.last_synced_at:%H:%M}")
    return 0


def cmd_deps(args, orchestrator: SyncOrchestrator) -> int:
    groups = dependency_groups(orchestrator.tasks)
    if not groups:
        print("No task dependencies detected.")
        return 0

    for task, predecessors in groups:
        print(f"{', '.join(predecessors)} → {task.title}")
    return 0


def cmd_reset(args, orchestrator: SyncOrchestrator) -> int:
    if not args.yes:
        answer = input("Are you sure you want to clear all tasks and content? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Reset aborted.")
            return 0

    orchestrator.reset()
    print("✓ Workspace cleared.")
    return 0


def cmd_client_id(args, orchestrator: SyncOrchestrator) -> int:
    settings = SettingsStore(orchestrator.store.storage)

    if args.clear:
        settings.clear_client_id()
        print("✓ Google Client ID cleared.")
        return 0

    if args.value:
        settings.set_client_id(args.value)
        print("✓ Google Client ID saved.")
        try:
            ImportConfig(client_id=args.value.strip()).validate()
        except ImportConfigError as e:
            print(f"  Warning: {e}", file=sys.stderr)
        return 0

    config = ImportConfig.resolve(stored_client_id=settings.get_client_id())
    print(config.client_id or "(not set)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journaltask",
        description="Turn journal entries into a dependency-aware task list",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory for tasks, journal text and settings (default: $JOURNALTASK_HOME or ~/.journaltask)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging on the console")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser("sync", help="Extract tasks from journal text")
    sync_parser.add_argument("file", nargs="?", help="Journal file to sync (default: read stdin)")
    sync_parser.add_argument("--example", action="store_true", help="Sync the built-in example journal")
    sync_parser.set_defaults(handler=cmd_sync)

    import_parser = subparsers.add_parser("import", help="Import a journal from Google Drive")
    import_parser.add_argument("--sync", action="store_true", help="Sync the imported text right away")
    import_parser.add_argument("--client-id", default=None, help="OAuth Client ID for this run only")
    import_parser.set_defaults(handler=cmd_import)

    list_parser = subparsers.add_parser("list", help="List extracted tasks")
    list_parser.add_argument("--filter", choices=FILTERS, default="all", help="Status filter (default: all)")
    list_parser.add_argument("--descriptions", dest="verbose_tasks", action="store_true",
                             help="Show task descriptions")
    list_parser.set_defaults(handler=cmd_list)

    stats_parser = subparsers.add_parser("stats", help="Show productivity statistics")
    stats_parser.set_defaults(handler=cmd_stats)

    deps_parser = subparsers.add_parser("deps", help="Show task dependencies")
    deps_parser.set_defaults(handler=cmd_deps)

    reset_parser = subparsers.add_parser("reset", help="Clear all tasks and journal content")
    reset_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    reset_parser.set_defaults(handler=cmd_reset)

    client_parser = subparsers.add_parser("client-id", help="Show, set or clear the Google OAuth Client ID")
    client_parser.add_argument("value", nargs="?", help="Client ID ending in .apps.googleusercontent.com")
    client_parser.add_argument("--clear", action="store_true", help="Remove the saved Client ID")
    client_parser.set_defaults(handler=cmd_client_id)

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    data_dir = args.data_dir or get_data_dir()

    setup_logging(data_dir, console_level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        orchestrator = build_orchestrator(data_dir)
        exit_code = args.handler(args, orchestrator)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
