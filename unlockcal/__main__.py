"""Command-line entry for unlockcal.

Reads an ICS feed from a local file (or stdin) and prints the upcoming agent
unlock activities. Fetching the feed over HTTP is left to the caller, e.g.
``curl -s URL | python -m unlockcal -``.
"""

from __future__ import annotations

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Optional

from dateutil import parser as date_parser

from . import _init_logging
from .calendar.datetime_utils import format_display_date
from .core.config_loader import apply_env_overrides, load_config
from .core.exceptions import ConfigError
from .core.lite_logging import configure_lite_logging
from .domain.feed_view import FeedView, build_feed_view

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for unlockcal CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="unlockcal",
        description="Show upcoming Launch/Unstake/Sell activities from an ICS feed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m unlockcal basic.ics                          # Upcoming activities from today
  python -m unlockcal basic.ics --now 2025-06-01         # Pin the reference day
  python -m unlockcal basic.ics --search june --limit 3  # Search, first three matches
  curl -s URL | python -m unlockcal - --json             # Read stdin, JSON output
        """,
    )
    parser.add_argument("feed", help="Path to an ICS file, or '-' for stdin")
    parser.add_argument(
        "--now",
        metavar="ISO",
        help="Reference date/time (ISO 8601); defaults to the current local time",
    )
    parser.add_argument("--search", metavar="TERM", help="Free-text filter on summary or date")
    parser.add_argument(
        "--limit",
        type=int,
        metavar="N",
        help="Size of the next-events window (default: from config, 5)",
    )
    parser.add_argument(
        "--keyword",
        action="append",
        dest="keywords",
        metavar="WORD",
        help="Category keyword; repeat for several (default: Launch, Unstake, Sell)",
    )
    parser.add_argument("--config", metavar="PATH", help="YAML/JSON config file")
    parser.add_argument("--json", action="store_true", help="Print the full view as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _read_feed(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _resolve_now(raw: Optional[str]) -> datetime.datetime:
    # The CLI is the only place the clock is read.
    if raw:
        return date_parser.isoparse(raw)
    return datetime.datetime.now()


def _render_text(view: FeedView) -> str:
    stats = view.stats
    lines = [
        f"Total activities: {stats.total}  "
        f"(launches {stats.launches}, unstakes {stats.unstakes}, sells {stats.sells})",
        "",
        "Next events:",
    ]
    if not view.next_events:
        lines.append("  No upcoming events.")
    for event in view.next_events:
        lines.append(f"  [{event.activity_type.value}] {event.summary}")
        lines.append(f"      {format_display_date(event.start)}")
    if view.parse_result.discarded_blocks:
        lines.append("")
        lines.append(f"({view.parse_result.discarded_blocks} malformed event block(s) skipped)")
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the unlockcal CLI.

    Returns:
        Process exit code
    """
    args = _create_parser().parse_args(argv)

    try:
        cfg = apply_env_overrides(load_config(args.config))
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    _init_logging("DEBUG" if args.debug else cfg.log_level)
    configure_lite_logging(debug_mode=args.debug, level_name=cfg.log_level)

    try:
        feed_text = _read_feed(args.feed)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Unable to read feed %s: %s", args.feed, exc)
        return 1

    try:
        now = _resolve_now(args.now)
    except ValueError as exc:
        print(f"Invalid --now value {args.now!r}: {exc}", file=sys.stderr)
        return 2

    limit = args.limit if args.limit is not None else cfg.next_events_count
    if limit < 0:
        print("--limit must be >= 0", file=sys.stderr)
        return 2

    view = build_feed_view(
        feed_text,
        now,
        search_term=args.search if args.search is not None else cfg.search_term,
        keywords=args.keywords or cfg.keywords,
        next_events_count=limit,
        source_name=args.feed,
    )

    if args.json:
        print(view.model_dump_json(indent=2))
    else:
        print(_render_text(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
