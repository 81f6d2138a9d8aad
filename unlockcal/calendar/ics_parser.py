"""Line-oriented VEVENT scanner for unlock calendar feeds.

Only the subset the feed emits is understood: ``BEGIN:VEVENT``/``END:VEVENT``
delimiters and the ``SUMMARY``, ``DESCRIPTION`` and ``DTSTART`` properties.
Everything else is ignored. Folded continuation lines are NOT unfolded; they
are counted and otherwise skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from .datetime_utils import is_value_date, parse_date_token
from .parser_telemetry import ParserTelemetry
from .unlock_models import CalendarEvent, DateOnly, DateTime, ParseResult

logger = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r?\n")

_BEGIN_EVENT = "BEGIN:VEVENT"
_END_EVENT = "END:VEVENT"
_SUMMARY = "SUMMARY:"
_DESCRIPTION = "DESCRIPTION:"
_DTSTART = "DTSTART"


@dataclass
class _EventAccumulator:
    """Fields collected for the VEVENT block currently being scanned."""

    summary: Optional[str] = None
    description: Optional[str] = None
    start: Optional[Union[DateOnly, DateTime]] = None
    all_day: bool = False
    # Depth of nested sub-components such as VALARM
    nested_depth: int = 0


class UnlockICSParser:
    """Two-state scanner turning ICS text into sorted CalendarEvent records.

    The parser holds no state between calls; each ``parse`` is an independent
    pass over the supplied text.
    """

    def __init__(self, source_name: Optional[str] = None) -> None:
        """Initialize parser.

        Args:
            source_name: Optional feed name used in log messages
        """
        self.source_name = source_name

    def parse(self, ics_content: str) -> ParseResult:
        """Parse ICS text into events sorted by start.

        Args:
            ics_content: Complete feed text, lines separated by CRLF or LF

        Returns:
            ParseResult with the sorted events and feed-quality counters

        Raises:
            TypeError: If ics_content is not a str
        """
        if not isinstance(ics_content, str):
            raise TypeError(f"ICS content must be str, got {type(ics_content).__name__}")

        telemetry = ParserTelemetry(self.source_name)
        events: list[CalendarEvent] = []
        current: Optional[_EventAccumulator] = None

        for line in _LINE_SPLIT_RE.split(ics_content):
            telemetry.record_line()

            if line.startswith((" ", "\t")):
                telemetry.record_folded_line()
                continue

            if line.startswith(_BEGIN_EVENT):
                if current is not None:
                    telemetry.record_unterminated()
                current = _EventAccumulator()
                telemetry.record_block()
                continue

            if current is None:
                continue

            if line.startswith(_END_EVENT):
                event = self._finish_block(current, telemetry)
                if event is not None:
                    events.append(event)
                current = None
                continue

            self._apply_property(current, line, telemetry)

        if current is not None:
            telemetry.record_unterminated()

        result = ParseResult(events=sort_by_start(events))
        telemetry.apply_to(result)
        telemetry.log_summary()
        return result

    def _apply_property(
        self, current: _EventAccumulator, line: str, telemetry: ParserTelemetry
    ) -> None:
        """Fold one property line into the accumulator."""
        if line.startswith("BEGIN:"):
            current.nested_depth += 1
            return
        if line.startswith("END:"):
            if current.nested_depth:
                current.nested_depth -= 1
            return
        if current.nested_depth:
            return

        if line.startswith(_SUMMARY):
            current.summary = line[len(_SUMMARY):]
        elif line.startswith(_DESCRIPTION):
            current.description = line[len(_DESCRIPTION):]
        elif line.startswith(_DTSTART):
            name_and_params, sep, token = line.partition(":")
            if not sep:
                telemetry.record_skipped_token(line)
                return
            parsed = parse_date_token(token, is_value_date(name_and_params[len(_DTSTART):]))
            if parsed is None:
                telemetry.record_skipped_token(token)
                return
            current.start, current.all_day = parsed

    def _finish_block(
        self, current: _EventAccumulator, telemetry: ParserTelemetry
    ) -> Optional[CalendarEvent]:
        """Materialize the accumulator, or count why it was discarded."""
        if not current.summary:
            telemetry.record_dropped()
            return None
        if current.start is None:
            telemetry.record_undated(current.summary)
            return None

        telemetry.record_event()
        logger.debug("Parsed event %r starting %s", current.summary, current.start.value)
        return CalendarEvent(
            summary=current.summary,
            start=current.start,
            all_day=current.all_day,
            description=current.description,
        )


def sort_by_start(events: list[CalendarEvent]) -> list[CalendarEvent]:
    """Stable ascending sort by start; all-day events compare at midnight."""
    return sorted(events, key=lambda e: e.comparison_key())


def parse_ics(ics_content: str, source_name: Optional[str] = None) -> ParseResult:
    """Parse ICS text, returning events plus diagnostics."""
    return UnlockICSParser(source_name).parse(ics_content)


def parse_events(ics_content: str) -> list[CalendarEvent]:
    """Parse ICS text into a sorted list of events."""
    return parse_ics(ics_content).events
