"""Shared fixtures for unlockcal tests."""

from datetime import datetime
from typing import Any, Optional

import pytest

from unlockcal.calendar.unlock_models import CalendarEvent, DateOnly, DateTime


def pytest_configure(config: Any) -> None:
    """Configure pytest with project markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")


@pytest.fixture
def reference_now() -> datetime:
    """Fixed reference time so temporal tests never depend on the clock."""
    return datetime(2025, 6, 1, 12, 30, 0)


@pytest.fixture
def sample_ics_feed() -> str:
    """
    Return a feed shaped like the public unlock calendar.

    Contains, in deliberately unsorted order:
    - "Unstake Agent Y" timed 2025-06-03 09:00 (UTC marker)
    - "Launch Agent X" all-day 2025-06-01
    - "Random Meeting" timed 2025-06-02 10:00
    - "Sell Agent Z" all-day 2025-05-20 (before the reference day)
    - a block with no SUMMARY
    """
    return "\r\n".join(
        [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            "PRODID:-//Google Inc//Google Calendar 70.9054//EN",
            "X-WR-CALNAME:Virtual Agent Unlocks",
            "BEGIN:VEVENT",
            "DTSTART:20250603T090000Z",
            "DTEND:20250603T100000Z",
            "UID:unstake-y@google.com",
            "SUMMARY:Unstake Agent Y",
            "DESCRIPTION:Unstake window opens",
            "END:VEVENT",
            "BEGIN:VEVENT",
            "DTSTART;VALUE=DATE:20250601",
            "DTEND;VALUE=DATE:20250602",
            "UID:launch-x@google.com",
            "SUMMARY:Launch Agent X",
            "END:VEVENT",
            "BEGIN:VEVENT",
            "DTSTART:20250602T100000",
            "SUMMARY:Random Meeting",
            "END:VEVENT",
            "BEGIN:VEVENT",
            "DTSTART;VALUE=DATE:20250520",
            "SUMMARY:Sell Agent Z",
            "END:VEVENT",
            "BEGIN:VEVENT",
            "DTSTART;VALUE=DATE:20250605",
            "DESCRIPTION:No title here",
            "END:VEVENT",
            "END:VCALENDAR",
            "",
        ]
    )


@pytest.fixture
def make_event():
    """Factory for CalendarEvent values.

    ``start`` may be a ``date`` tuple (y, m, d) for all-day events or a
    ``datetime`` for timed ones.
    """

    def _make(summary: str, start: Any, description: Optional[str] = None) -> CalendarEvent:
        if isinstance(start, datetime):
            value: Any = DateTime(value=start)
        else:
            value = DateOnly.of(*start)
        return CalendarEvent.create(summary, value, description)

    return _make
