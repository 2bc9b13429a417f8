"""
Command-line interface for the journal.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime

from weather_journal import __version__
from weather_journal.config import get_settings
from weather_journal.errors import JournalError
from weather_journal.journal import Journal
from weather_journal.log import setup_logging
from weather_journal.schemas import Metric

# Commands that write to the store
MUTATING_COMMANDS = frozenset({"add", "delete"})


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather-journal",
        description="Log readings with the current weather and chart them",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    add_parser = subparsers.add_parser("add", help="Log a new reading")
    add_parser.add_argument("value", help="The reading; non-numeric characters are ignored")
    add_parser.add_argument("--note", default="", help="Free-text note")

    delete_parser = subparsers.add_parser("delete", help="Delete a reading")
    delete_parser.add_argument("id", help="Document ID")
    delete_parser.add_argument("rev", help="Current document revision")

    subparsers.add_parser("list", help="List readings, newest first")

    scatter_parser = subparsers.add_parser("scatter", help="Value vs. weather pairs")
    scatter_parser.add_argument(
        "metric",
        choices=["temperature", "humidity"],
        help="Weather metric for the y axis",
    )

    subparsers.add_parser("bar", help="Average value per calendar month")
    subparsers.add_parser("info", help="Show application info")

    return parser


def cmd_add(journal: Journal, args: argparse.Namespace) -> int:
    """Handle the 'add' command."""
    obs = journal.create_observation(args.value, args.note)
    print(
        f"Saved {obs.id} ({obs.revision}): value={obs.value}, "
        f"{obs.temperature} C, {obs.relative_humidity}%"
    )
    return 0


def cmd_delete(journal: Journal, args: argparse.Namespace) -> int:
    """Handle the 'delete' command."""
    journal.delete_observation(args.id, args.rev)
    print(f"Deleted {args.id}")
    return 0


def cmd_list(journal: Journal, _args: argparse.Namespace) -> int:
    """Handle the 'list' command."""
    tz = journal.settings.tz
    for obs in journal.list_observations():
        when = datetime.fromtimestamp(obs.timestamp, tz=tz).strftime("%Y-%m-%d %H:%M")
        print(
            f"{when}  {obs.value:>6}  {obs.temperature:>5.1f} C  {obs.relative_humidity:>5.1f}%"
            f"  {obs.note}  [{obs.id} {obs.revision}]"
        )
    return 0


def cmd_scatter(journal: Journal, args: argparse.Namespace) -> int:
    """Handle the 'scatter' command."""
    metric = Metric(args.metric)
    print(f"value\t{metric.label}")
    for point in journal.scatter_series(metric):
        print(f"{point.x}\t{point.y}")
    return 0


def cmd_bar(journal: Journal, _args: argparse.Namespace) -> int:
    """Handle the 'bar' command."""
    summary = journal.monthly_summary()
    for entry in summary.series:
        print(f"{entry.month}\t{entry.average}")
    if summary.skipped:
        print(f"({len(summary.skipped)} document(s) without a timestamp skipped)", file=sys.stderr)
    return 0


def cmd_info(journal: Journal, _args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = journal.settings
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Store: {'in-memory' if settings.uses_memory_store else settings.store_db}")
    print(f"Weather: {settings.weather_provider} at ({settings.lat}, {settings.lon})")
    print(f"Time zone: {settings.timezone}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    setup_logging("DEBUG" if args.debug or settings.debug else settings.log_level)

    commands = {
        "add": cmd_add,
        "delete": cmd_delete,
        "list": cmd_list,
        "scatter": cmd_scatter,
        "bar": cmd_bar,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    if args.command in MUTATING_COMMANDS and settings.uses_memory_store:
        print(
            "Error: no document store configured, so the change would be lost on exit. "
            "Set JOURNAL_STORE_URL to a CouchDB/Cloudant URL.",
            file=sys.stderr,
        )
        return 1

    try:
        journal = Journal.from_settings(settings)
        return handler(journal, args)
    except JournalError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
