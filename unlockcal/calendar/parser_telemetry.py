"""Feed-quality counters for ICS parse passes.

Malformed blocks are dropped silently from the event list; the counters kept
here make those drops visible in logs and in ``ParseResult``.
"""

import logging
from typing import Optional

from .unlock_models import ParseResult

logger = logging.getLogger(__name__)


class ParserTelemetry:
    """Tracks blocks seen and discarded during one parse pass."""

    def __init__(self, source_name: Optional[str] = None, progress_log_interval: int = 100):
        """Initialize parser telemetry.

        Args:
            source_name: Feed name for logging context
            progress_log_interval: Log progress every N event blocks
        """
        self.source_name = source_name or "unknown"
        self.progress_log_interval = progress_log_interval

        self.total_lines = 0
        self.total_blocks = 0
        self.emitted_events = 0
        self.dropped_blocks = 0
        self.undated_blocks = 0
        self.unterminated_blocks = 0
        self.skipped_tokens = 0
        self.folded_lines = 0

    def record_line(self) -> None:
        self.total_lines += 1

    def record_block(self) -> None:
        """Record that a BEGIN:VEVENT block was opened."""
        self.total_blocks += 1
        if self.progress_log_interval > 0 and self.total_blocks % self.progress_log_interval == 0:
            logger.debug(
                "Parse progress - source=%s, blocks=%d, events=%d",
                self.source_name,
                self.total_blocks,
                self.emitted_events,
            )

    def record_event(self) -> None:
        self.emitted_events += 1

    def record_dropped(self) -> None:
        """Record a block closed without a summary."""
        self.dropped_blocks += 1

    def record_undated(self, summary: str) -> None:
        """Record a block with a summary but no usable start."""
        self.undated_blocks += 1
        logger.debug("Discarding event without usable DTSTART: %r", summary)

    def record_unterminated(self) -> None:
        self.unterminated_blocks += 1

    def record_skipped_token(self, token: str) -> None:
        self.skipped_tokens += 1
        logger.debug("Skipped DTSTART token %r", token)

    def record_folded_line(self) -> None:
        self.folded_lines += 1

    @property
    def discarded_blocks(self) -> int:
        return self.dropped_blocks + self.undated_blocks + self.unterminated_blocks

    def apply_to(self, result: ParseResult) -> ParseResult:
        """Copy counters onto a parse result and attach matching warnings.

        Args:
            result: Parse result to update

        Returns:
            The same result, for chaining
        """
        result.total_blocks = self.total_blocks
        result.dropped_blocks = self.dropped_blocks
        result.undated_blocks = self.undated_blocks
        result.unterminated_blocks = self.unterminated_blocks
        result.skipped_tokens = self.skipped_tokens
        result.folded_lines = self.folded_lines

        if self.undated_blocks:
            result.add_warning(f"{self.undated_blocks} event(s) discarded for missing DTSTART")
        if self.unterminated_blocks:
            result.add_warning(f"{self.unterminated_blocks} VEVENT block(s) never terminated")
        if self.folded_lines:
            result.add_warning(
                f"{self.folded_lines} folded continuation line(s) ignored; "
                "line folding is not supported"
            )
        return result

    def log_summary(self) -> None:
        """Log the final counters for this parse pass."""
        logger.info(
            "Parsed ICS feed - source=%s, lines=%d, blocks=%d, events=%d, discarded=%d "
            "(no_summary=%d, no_start=%d, unterminated=%d), skipped_tokens=%d",
            self.source_name,
            self.total_lines,
            self.total_blocks,
            self.emitted_events,
            self.discarded_blocks,
            self.dropped_blocks,
            self.undated_blocks,
            self.unterminated_blocks,
            self.skipped_tokens,
        )
        if self.folded_lines:
            logger.warning(
                "Feed %s contains %d folded continuation lines which are not unfolded",
                self.source_name,
                self.folded_lines,
            )
