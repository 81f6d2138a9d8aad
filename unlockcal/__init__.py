"""unlockcal - ICS feed parsing and filtering for agent unlock calendars.

The package turns raw iCalendar text into typed, ordered ``CalendarEvent``
records and exposes the category/upcoming/search/truncation stages used to
present them. It never performs network I/O and never reads the clock on its
own: callers supply the feed text and the reference "now".
"""

__version__ = "0.1.0"

from typing import Optional


def _init_logging(level_name: Optional[str]) -> None:
    """Initialize root logging to stream to console.

    Uses the colorlog formatter for console output and honors the
    UNLOCKCAL_DEBUG environment variable (truthy values: "1", "true", "yes",
    "on"), which forces DEBUG verbosity.
    """
    import logging
    import os
    import sys

    debug_env = os.environ.get("UNLOCKCAL_DEBUG", "")
    if isinstance(debug_env, str) and debug_env.strip().lower() in ("1", "true", "yes", "on"):
        level_name = "DEBUG"

    root = logging.getLogger()
    # Only configure basic handler if no handlers are present to avoid duplicate output.
    if not root.handlers:
        handler = logging.StreamHandler(stream=sys.stderr)
        from colorlog import ColoredFormatter

        # HH:MM:SS  LEVEL   logger.name: message
        # Only the level is colorized.
        fmt = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"
        log_colors = {
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        }
        formatter = ColoredFormatter(fmt, datefmt="%H:%M:%S", log_colors=log_colors)

        handler.setFormatter(formatter)
        root.addHandler(handler)

    level = logging.INFO
    if isinstance(level_name, str):
        level = getattr(logging, level_name.upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)
    logging.getLogger(__name__).debug(
        "Logging initialized at level %s", logging.getLevelName(level)
    )


from .calendar.ics_parser import parse_events, parse_ics  # noqa: E402
from .calendar.unlock_models import (  # noqa: E402
    ActivityType,
    CalendarEvent,
    DateOnly,
    DateTime,
    ParseResult,
)
from .domain.activity_classifier import classify_activity  # noqa: E402
from .domain.feed_view import FeedView, build_feed_view  # noqa: E402

__all__ = [
    "ActivityType",
    "CalendarEvent",
    "DateOnly",
    "DateTime",
    "FeedView",
    "ParseResult",
    "build_feed_view",
    "classify_activity",
    "parse_events",
    "parse_ics",
]
