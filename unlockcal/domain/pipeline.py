"""Stage pipeline for processing parsed unlock events.

Stages run synchronously in the order they were added, each reading
``context.events`` and replacing it with a new list. The pipeline keeps no
state between runs, so re-running it with the same context inputs yields the
same events.

Usage:
    pipeline = EventProcessingPipeline()
    pipeline.add_stage(CategoryFilterStage()).add_stage(UpcomingFilterStage())

    context = ProcessingContext(events=parsed.events, now=reference_time)
    result = pipeline.process(context)
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Union

from unlockcal.calendar.unlock_models import CalendarEvent

logger = logging.getLogger(__name__)


@dataclass
class ProcessingContext:
    """Inputs and working state shared by pipeline stages."""

    events: list[CalendarEvent] = field(default_factory=list)

    # Reference time, always supplied by the caller
    now: Optional[Union[datetime.date, datetime.datetime]] = None

    # Stage options
    keywords: Optional[list[str]] = None
    search_term: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class ProcessingResult:
    """Result from a pipeline stage or a complete pipeline run."""

    success: bool = True
    events: list[CalendarEvent] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    events_in: int = 0
    events_out: int = 0
    events_filtered: int = 0
    stage_name: str = ""

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)
        logger.warning("[%s] %s", self.stage_name, message)

    def add_error(self, message: str) -> None:
        """Add an error message and mark as failed."""
        self.errors.append(message)
        self.success = False
        logger.error("[%s] %s", self.stage_name, message)


class EventProcessor(Protocol):
    """A single pipeline stage."""

    def process(self, context: ProcessingContext) -> ProcessingResult:
        """Transform ``context.events`` and report what happened."""
        ...

    @property
    def name(self) -> str:
        """Name of this processing stage for logging."""
        ...


class EventProcessingPipeline:
    """Runs stages in sequence over a shared context."""

    def __init__(self) -> None:
        """Initialize empty pipeline."""
        self.stages: list[EventProcessor] = []

    def add_stage(self, stage: EventProcessor) -> EventProcessingPipeline:
        """Add a processing stage to the pipeline (builder pattern).

        Args:
            stage: Event processor to add

        Returns:
            Self for method chaining
        """
        self.stages.append(stage)
        logger.debug("Added stage to pipeline: %s", stage.name)
        return self

    def process(self, context: ProcessingContext) -> ProcessingResult:
        """Execute all stages in order.

        A stage reporting ``success=False`` stops the run. Exceptions raised by
        a stage are contract violations and propagate to the caller.

        Args:
            context: Processing context with initial events and options

        Returns:
            Aggregated result from all stages
        """
        aggregated = ProcessingResult(stage_name="Pipeline", events_in=len(context.events))

        for stage_num, stage in enumerate(self.stages, start=1):
            stage_result = stage.process(context)

            logger.debug(
                "Stage %s/%s (%s) completed: success=%s, events_in=%s, events_out=%s",
                stage_num,
                len(self.stages),
                stage.name,
                stage_result.success,
                stage_result.events_in,
                stage_result.events_out,
            )

            aggregated.warnings.extend(stage_result.warnings)
            aggregated.errors.extend(stage_result.errors)
            aggregated.metadata[stage.name] = stage_result.events_out

            if not stage_result.success:
                aggregated.success = False
                logger.error("Pipeline stopped at stage %s (%s)", stage_num, stage.name)
                return aggregated

        aggregated.events = list(context.events)
        aggregated.events_out = len(aggregated.events)
        aggregated.events_filtered = aggregated.events_in - aggregated.events_out
        logger.debug(
            "Pipeline completed: %s -> %s events", aggregated.events_in, aggregated.events_out
        )
        return aggregated

    def clear_stages(self) -> None:
        """Remove all stages from the pipeline."""
        self.stages.clear()

    def __repr__(self) -> str:
        """String representation of pipeline."""
        stage_names = [stage.name for stage in self.stages]
        return f"EventProcessingPipeline(stages={stage_names})"
