"""Command-line interface for sportsday.

Runs the named spreadsheet queries from the terminal.

Usage:
    sportsday events
    sportsday event-results longJump 9 --no-cache
    sportsday form-results 8 W --format json
"""

import argparse
import asyncio
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import pandas as pd
from pydantic import BaseModel, ValidationError

from sportsday import __version__
from sportsday.api import LookupValidationError, SportsDayAPI, open_api
from sportsday.cache import create_store
from sportsday.clients import SheetsAPIError
from sportsday.config import Settings, get_settings
from sportsday.models import EventResults
from sportsday.pipeline import Pipeline

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=1)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_LOOKUP = 2
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="sportsday",
        description="sportsday — cached queries over the sports day spreadsheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sportsday events
  sportsday event-results longJump 9 --no-cache
  sportsday form-results 8 W --format json

Configuration is read from SPORTSDAY_* environment variables or .env.
        """,
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Fetch fresh data instead of using cached ranges",
    )
    parser.add_argument(
        "--cache-dir",
        type=str,
        default=None,
        help="Directory for the cache (default: from settings)",
    )
    parser.add_argument(
        "--cache-backend",
        type=str,
        choices=["memory", "file", "sqlite"],
        default=None,
        help="Cache backend (default: from settings)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("events", help="List all events")
    subparsers.add_parser("forms", help="List all forms")
    subparsers.add_parser("bonus-points", help="Show record bonus point allocations")
    subparsers.add_parser("standings", help="Show overall standings per form")
    subparsers.add_parser("records-summary", help="Show records broken/equalled per year group")

    event_parser = subparsers.add_parser(
        "event-results",
        help="Show one event's results for a year group",
    )
    event_parser.add_argument("event", type=str, help="Event db name (e.g. longJump, 100m)")
    event_parser.add_argument("year", type=int, help="Year group (7-10)")

    records_parser = subparsers.add_parser("records", help="Show a year group's records")
    records_parser.add_argument("year", type=int, help="Year group (7-10)")

    form_parser = subparsers.add_parser("form-results", help="Show one form's results")
    form_parser.add_argument("year", type=int, help="Year group (7-10)")
    form_parser.add_argument("form", type=str, help="Form letters (e.g. W for 8W)")

    subparsers.add_parser("clear-cache", help="Delete every cached range")
    subparsers.add_parser("version", help="Show version information")

    return parser


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context.

    Spins up a new event loop in a dedicated thread to avoid conflicts
    with any existing event loop.
    """
    def _target():
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()

    future = _executor.submit(_target)
    return future.result()


def build_query(api: SportsDayAPI, args: argparse.Namespace) -> Pipeline:
    """Map a parsed command onto its query pipeline."""
    if args.command == "events":
        return api.get_events_list()
    if args.command == "forms":
        return api.get_forms_list()
    if args.command == "bonus-points":
        return api.get_bonus_points_allocations()
    if args.command == "standings":
        return api.get_summary_standings()
    if args.command == "records-summary":
        return api.get_records_summary_stats()
    if args.command == "event-results":
        return api.get_event_results(args.event, args.year)
    if args.command == "records":
        return api.get_year_group_records(args.year)
    if args.command == "form-results":
        return api.get_form_results(args.year, args.form)
    raise ValueError(f"Not a query command: {args.command}")


def to_jsonable(result: Any) -> Any:
    """Convert query results into plain JSON-compatible data."""
    if isinstance(result, BaseModel):
        return result.model_dump()
    if isinstance(result, list):
        return [to_jsonable(item) for item in result]
    return result


def to_frame(result: Any) -> pd.DataFrame:
    """Lay query results out as a table.

    Event results get one row per form and sub-event.
    """
    if isinstance(result, EventResults):
        frames = [
            pd.DataFrame([r.model_dump() for r in getattr(result, tab)]).assign(subevent=tab)
            for tab in ("a", "b", "c", "rb", "total")
        ]
        frame = pd.concat(frames, ignore_index=True)
        return frame[["subevent", "letter", "pos", "pts"]] if not frame.empty else frame
    if isinstance(result, BaseModel):
        return pd.DataFrame([result.model_dump()])
    return pd.DataFrame(to_jsonable(result))


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.cache_dir:
        updates["cache_dir"] = args.cache_dir
    if args.cache_backend:
        updates["cache_backend"] = args.cache_backend
    return settings.model_copy(update=updates) if updates else settings


async def _run_query(settings: Settings, args: argparse.Namespace) -> Any:
    async with open_api(settings) as api:
        return await build_query(api, args).run(allow_cache=not args.no_cache)


def cmd_query(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a query command.

    Args:
        args: Parsed command-line arguments
        settings: Loaded configuration

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        logger.info(
            "Running %s (backend=%s, cache=%s)",
            args.command, settings.cache_backend, not args.no_cache,
        )
        result = _run_async(_run_query(settings, args))

        if args.format == "json":
            print(json.dumps(to_jsonable(result), indent=2))
        else:
            print(to_frame(result).to_string(index=False))

        return EXIT_OK

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    except LookupValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_LOOKUP
    except SheetsAPIError as e:
        logger.error("Sheets API request failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.error("Query failed: %s", e, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE


def cmd_clear_cache(args: argparse.Namespace, settings: Settings) -> int:
    """Delete every entry from the configured cache store."""
    store = create_store(settings.cache_backend, settings.cache_dir)
    _run_async(store.clear())
    print(f"Cleared {settings.cache_backend} cache at {settings.cache_dir}")
    return EXIT_OK


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    print(f"sportsday v{__version__}")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK
    if args.command == "version":
        return cmd_version(args)

    try:
        settings = _apply_overrides(get_settings(), args)
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "clear-cache":
        return cmd_clear_cache(args, settings)
    return cmd_query(args, settings)


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
