"""DTSTART token parsing and display-date formatting.

Tokens are interpreted as naive local wall-clock values. A trailing ``Z`` is
stripped without converting from UTC, so a feed-declared ``15:00Z`` stays
``15:00``.
"""

from __future__ import annotations

import datetime
import logging
import re
from typing import NamedTuple, Optional, Union

from dateutil import parser as date_parser

from .unlock_models import DateOnly, DateTime

logger = logging.getLogger(__name__)

_DATE_ONLY_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_DATE_TIME_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})T(\d{2})(\d{2})(\d{2})")

# Fixed fill-in for fields missing from free-form tokens; never the current date.
_GENERIC_DEFAULT = datetime.datetime(1970, 1, 1)

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class ParsedStart(NamedTuple):
    """A parsed DTSTART value and its all-day flag."""

    start: Union[DateOnly, DateTime]
    all_day: bool


def parse_date_token(token: str, value_is_date: bool = False) -> Optional[ParsedStart]:
    """Parse the value part of a DTSTART line.

    Shapes are tried in priority order:
    - ``YYYYMMDD`` gives an all-day ``DateOnly``
    - ``YYYYMMDDTHHMMSS`` (or any token starting with it) gives a ``DateTime``
    - anything else goes through dateutil, with ``value_is_date`` deciding
      whether the result is all-day

    Args:
        token: Text after the colon of the DTSTART line
        value_is_date: True when the line carried a ``VALUE=DATE`` parameter

    Returns:
        ParsedStart, or None when the token is empty or cannot be read
    """
    if not isinstance(token, str):
        raise TypeError(f"DTSTART token must be str, got {type(token).__name__}")

    cleaned = token.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1].strip()
    if not cleaned:
        return None

    try:
        match = _DATE_ONLY_RE.match(cleaned)
        if match:
            year, month, day = (int(part) for part in match.groups())
            return ParsedStart(DateOnly.of(year, month, day), True)

        match = _DATE_TIME_RE.match(cleaned)
        if match:
            year, month, day, hour, minute, second = (int(part) for part in match.groups())
            return ParsedStart(DateTime.of(year, month, day, hour, minute, second), False)
    except ValueError as e:
        logger.warning("DTSTART token %r has out-of-range fields: %s", token, e)
        return None

    return _parse_generic(cleaned, value_is_date)


def _parse_generic(token: str, value_is_date: bool) -> Optional[ParsedStart]:
    """Fallback for tokens outside the two compact iCalendar shapes."""
    try:
        parsed = date_parser.parse(token, default=_GENERIC_DEFAULT)
    except (ValueError, OverflowError) as e:
        logger.warning("Unable to parse DTSTART token %r: %s", token, e)
        return None

    if value_is_date:
        return ParsedStart(DateOnly(value=parsed.date()), True)
    return ParsedStart(DateTime(value=parsed), False)


def is_value_date(params: str) -> bool:
    """Check whether DTSTART parameters declare ``VALUE=DATE``.

    Args:
        params: The part of the line between ``DTSTART`` and the colon,
                e.g. ``;VALUE=DATE`` or ``;TZID=Europe/Paris``
    """
    return any(param.strip().upper() == "VALUE=DATE" for param in params.split(";"))


def reference_day(now: Union[datetime.date, datetime.datetime]) -> datetime.datetime:
    """Midnight of the caller-supplied reference time's wall-clock date.

    Aware datetimes are not converted; only their local calendar date is used.
    """
    if isinstance(now, datetime.datetime):
        day = now.date()
    elif isinstance(now, datetime.date):
        day = now
    else:
        raise TypeError(f"now must be a date or datetime, got {type(now).__name__}")
    return datetime.datetime.combine(day, datetime.time.min)


def format_display_date(start: Union[DateOnly, DateTime]) -> str:
    """Format a start value the way the event list shows it (en-US long form).

    Examples:
        >>> format_display_date(DateOnly.of(2025, 6, 1))
        'Sunday, June 1, 2025'
        >>> format_display_date(DateTime.of(2025, 6, 1, 15, 0))
        'Sunday, June 1, 2025 at 03:00 PM'
    """
    day = start.calendar_date()
    text = f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}, {day.year}"
    if isinstance(start, DateOnly):
        return text

    value = start.value
    hour = value.hour % 12 or 12
    am_pm = "AM" if value.hour < 12 else "PM"
    return f"{text} at {hour:02d}:{value.minute:02d} {am_pm}"
