"""
Schedule models for day planning inputs and outputs.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from dayplan.models.enums import BlockKind

CLOCK_REGEX = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"


class FixedEvent(BaseModel):
    """Externally fixed appointment on the planning day."""

    start: str = Field(..., pattern=CLOCK_REGEX, description="Start clock (HH:mm)")
    end: str = Field(..., pattern=CLOCK_REGEX, description="End clock (HH:mm)")
    title: str = Field(..., min_length=1, max_length=500)


class WorkItem(BaseModel):
    """
    Pending backlog item handed to the generator.

    Lists of work items must already be filtered to today's pending work and
    sorted by descending priority rank, then ascending creation time.
    """

    title: str = Field(..., min_length=1, max_length=500)
    duration_minutes: int = Field(..., gt=0)
    priority_rank: int = 0
    category: str = "now"


class ScheduleSlot(BaseModel):
    """One rendered entry of the generated timeline."""

    start: str
    end: str
    title: str
    kind: BlockKind
    color: str


class ClockTime(BaseModel):
    """Hour and minute of a wall-clock moment."""

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)


class GenerationMetadata(BaseModel):
    """Run metadata attached to a generated schedule."""

    generated_at: datetime
    plan_start: str
    pressed_at: ClockTime
    lunch_planned: ClockTime
    pressed_time: str = Field("", description="Display label for the request time")
    lunch_planned_time: str = Field("", description="Display label for the lunch target")


class GenerationResult(BaseModel):
    """Generated day schedule with placement warnings."""

    schedule: list[ScheduleSlot] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    metadata: GenerationMetadata
