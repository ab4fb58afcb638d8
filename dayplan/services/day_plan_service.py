"""
Day plan generation service.

Builds a conflict-free timeline for the rest of today from fixed events,
meals, reply windows and the pending backlog.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Sequence, Union

from dayplan.core.exceptions import ValidationError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import BlockKind
from dayplan.models.schedule import (
    ClockTime,
    FixedEvent,
    GenerationMetadata,
    GenerationResult,
    ScheduleSlot,
    WorkItem,
)
from dayplan.services.slot_finder import (
    DINNER_MINUTES,
    SLOT_STEP_MINUTES,
    Interval,
    PlacedBlock,
    find_dinner_slot,
    find_slot,
    has_conflict,
)
from dayplan.utils.datetime_utils import (
    END_OF_DAY_CLOCK,
    ceil_to_quarter_hour,
    format_clock,
    parse_clock,
    to_wall_clock,
)

logger = setup_logger(__name__)

DEFAULT_REPLY_INTERVAL_MINUTES = 180
DEFAULT_DEEP_WORK_THRESHOLD_MINUTES = 45

REACTION_BUFFER = timedelta(minutes=15)
LUNCH_OFFSET = timedelta(hours=6)
DAY_END_CLOCK = "20:00"
FAMILY_START_CLOCK = "20:00"

REPLY_MINUTES = 15
LUNCH_MINUTES = 60

KIND_COLORS = {
    BlockKind.FIXED: "#ef4444",
    BlockKind.REPLY: "#3b82f6",
    BlockKind.LUNCH: "#10b981",
    BlockKind.DINNER: "#f59e0b",
    BlockKind.FAMILY: "#8b5cf6",
}
CATEGORY_COLORS = {
    "future": "#ef4444",
    "now": "#3b82f6",
    "maintain": "#10b981",
    "chore": "#9ca3af",
}
DEFAULT_COLOR = "#9ca3af"

LUNCH_WARNING = "Lunch slot could not be secured"
DINNER_WARNING = (
    "Dinner slot could not be secured "
    "(it may have been replaced by another commitment such as a dinner engagement)"
)


@dataclass(frozen=True)
class Placed:
    block: PlacedBlock
    title: str
    color: str


@dataclass(frozen=True)
class SoftSkip:
    reason: str


@dataclass(frozen=True)
class Warn:
    message: str


PlacementOutcome = Union[Placed, SoftSkip, Warn]


@dataclass
class _Run:
    """Mutable state owned by a single generate() call."""

    blocks: list[PlacedBlock]
    slots: list[ScheduleSlot]
    warnings: list[str]


class DayPlanService:
    """
    Service for generating today's timeline.

    Stages run in a fixed order, each one seeing everything committed by the
    stages before it:
    fixed events -> reply windows -> lunch -> dinner -> family -> backlog.
    """

    def __init__(
        self,
        reply_interval_minutes: int = DEFAULT_REPLY_INTERVAL_MINUTES,
        deep_work_threshold_minutes: int = DEFAULT_DEEP_WORK_THRESHOLD_MINUTES,
    ):
        """
        Initialize day plan service.

        Args:
            reply_interval_minutes: Gap between consecutive reply windows
            deep_work_threshold_minutes: Items at least this long count as deep work
        """
        if reply_interval_minutes <= 0 or reply_interval_minutes % SLOT_STEP_MINUTES:
            raise ValueError("reply_interval_minutes must be a positive multiple of 15")
        self.reply_interval_minutes = reply_interval_minutes
        self.deep_work_threshold_minutes = deep_work_threshold_minutes

    def generate(
        self,
        now: datetime,
        fixed_events: Sequence[FixedEvent],
        backlog: Sequence[WorkItem],
    ) -> GenerationResult:
        """
        Generate the schedule for the rest of the day.

        Args:
            now: Invocation time on the caller's local wall clock
            fixed_events: Immovable appointments, taken as ground truth
            backlog: Today's pending items, sorted by descending priority rank
                and then by creation time; this order is never changed

        Returns:
            GenerationResult with slots sorted by start clock

        Raises:
            ValidationError: If a fixed event is malformed or the backlog is
                not sorted by priority rank
        """
        now = to_wall_clock(now)
        day = now.date()
        day_end = parse_clock(DAY_END_CLOCK, day)
        plan_start = ceil_to_quarter_hour(now + REACTION_BUFFER)

        fixed_blocks = [self._parse_fixed_event(event, day) for event in fixed_events]
        self._ensure_backlog_order(backlog)

        run = _Run(blocks=[], slots=[], warnings=[])

        for event, block in zip(fixed_events, fixed_blocks):
            run.blocks.append(block)
            run.slots.append(
                ScheduleSlot(
                    start=event.start,
                    end=event.end,
                    title=event.title,
                    kind=BlockKind.FIXED,
                    color=KIND_COLORS[BlockKind.FIXED],
                )
            )

        step = plan_start
        while step < day_end:
            self._commit(run, self._place_reply(step, plan_start, day_end, run.blocks), day)
            step += timedelta(minutes=self.reply_interval_minutes)

        self._commit(run, self._place_lunch(now, plan_start, day_end, run.blocks), day)
        self._commit(run, self._place_dinner(day, run.blocks), day)

        # Advisory only: never enters the working set.
        run.slots.append(
            ScheduleSlot(
                start=FAMILY_START_CLOCK,
                end=END_OF_DAY_CLOCK,
                title="Family time",
                kind=BlockKind.FAMILY,
                color=KIND_COLORS[BlockKind.FAMILY],
            )
        )

        cursor = plan_start
        for item in self._order_backlog(backlog):
            outcome = self._place_work_item(item, cursor, day_end, run.blocks)
            self._commit(run, outcome, day)
            if isinstance(outcome, Placed):
                cursor = outcome.block.end

        run.slots.sort(key=lambda slot: slot.start)

        lunch_target = now + LUNCH_OFFSET
        logger.info(
            f"Generated day plan: {len(run.slots)} slots, {len(run.warnings)} warnings "
            f"(plan start {format_clock(plan_start)})"
        )
        return GenerationResult(
            schedule=run.slots,
            warnings=run.warnings,
            metadata=GenerationMetadata(
                generated_at=now,
                plan_start=format_clock(plan_start, day),
                pressed_at=ClockTime(hour=now.hour, minute=now.minute),
                lunch_planned=ClockTime(hour=lunch_target.hour, minute=lunch_target.minute),
                pressed_time=f"Requested at {now:%H:%M}",
                lunch_planned_time=f"Lunch targeted around {lunch_target:%H:%M}",
            ),
        )

    def _parse_fixed_event(self, event: FixedEvent, day: date) -> PlacedBlock:
        return PlacedBlock(
            start=parse_clock(event.start, day),
            end=parse_clock(event.end, day),
            label=event.title,
            kind=BlockKind.FIXED,
        )

    def _ensure_backlog_order(self, backlog: Sequence[WorkItem]) -> None:
        for previous, current in zip(backlog, backlog[1:]):
            if current.priority_rank > previous.priority_rank:
                raise ValidationError(
                    "Backlog must be sorted by descending priority rank",
                    details={"title": current.title, "priority_rank": current.priority_rank},
                )

    def _order_backlog(self, backlog: Sequence[WorkItem]) -> list[WorkItem]:
        """Deep work first, then light work, each group in incoming order."""
        threshold = self.deep_work_threshold_minutes
        deep = [item for item in backlog if item.duration_minutes >= threshold]
        light = [item for item in backlog if item.duration_minutes < threshold]
        return deep + light

    def _commit(self, run: _Run, outcome: PlacementOutcome, day: date) -> None:
        if isinstance(outcome, Placed):
            block = outcome.block
            run.blocks.append(block)
            run.slots.append(
                ScheduleSlot(
                    start=format_clock(block.start, day),
                    end=format_clock(block.end, day),
                    title=outcome.title,
                    kind=block.kind,
                    color=outcome.color,
                )
            )
        elif isinstance(outcome, Warn):
            logger.warning(outcome.message)
            run.warnings.append(outcome.message)
        else:
            logger.debug(f"Skipped placement: {outcome.reason}")

    def _place_reply(
        self,
        step: datetime,
        plan_start: datetime,
        day_end: datetime,
        blocks: list[PlacedBlock],
    ) -> PlacementOutcome:
        start: Optional[datetime] = step
        if has_conflict(Interval.of_minutes(step, REPLY_MINUTES), blocks):
            start = find_slot(step, REPLY_MINUTES, blocks, plan_start, day_end)
        if start is None:
            return SoftSkip(f"no reply window near {format_clock(step)}")
        block = PlacedBlock(
            start=start,
            end=start + timedelta(minutes=REPLY_MINUTES),
            label="Reply window",
            kind=BlockKind.REPLY,
        )
        return Placed(block, block.label, KIND_COLORS[BlockKind.REPLY])

    def _place_lunch(
        self,
        now: datetime,
        plan_start: datetime,
        day_end: datetime,
        blocks: list[PlacedBlock],
    ) -> PlacementOutcome:
        preferred = ceil_to_quarter_hour(now + LUNCH_OFFSET)
        start = find_slot(preferred, LUNCH_MINUTES, blocks, plan_start, day_end)
        if start is None:
            return Warn(LUNCH_WARNING)
        block = PlacedBlock(
            start=start,
            end=start + timedelta(minutes=LUNCH_MINUTES),
            label="Lunch",
            kind=BlockKind.LUNCH,
        )
        return Placed(block, block.label, KIND_COLORS[BlockKind.LUNCH])

    def _place_dinner(self, day: date, blocks: list[PlacedBlock]) -> PlacementOutcome:
        start = find_dinner_slot(day, blocks)
        if start is None:
            return Warn(DINNER_WARNING)
        block = PlacedBlock(
            start=start,
            end=start + timedelta(minutes=DINNER_MINUTES),
            label="Dinner",
            kind=BlockKind.DINNER,
        )
        return Placed(block, block.label, KIND_COLORS[BlockKind.DINNER])

    def _place_work_item(
        self,
        item: WorkItem,
        cursor: datetime,
        day_end: datetime,
        blocks: list[PlacedBlock],
    ) -> PlacementOutcome:
        """Scan forward from the cursor; the cursor itself is never moved here."""
        kind = (
            BlockKind.WORK_DEEP
            if item.duration_minutes >= self.deep_work_threshold_minutes
            else BlockKind.WORK_LIGHT
        )
        candidate = cursor
        while candidate + timedelta(minutes=item.duration_minutes) <= day_end:
            interval = Interval.of_minutes(candidate, item.duration_minutes)
            if not has_conflict(interval, blocks):
                block = PlacedBlock(
                    start=interval.start,
                    end=interval.end,
                    label=item.title,
                    kind=kind,
                )
                return Placed(
                    block,
                    f"{item.title} ({item.duration_minutes} min)",
                    CATEGORY_COLORS.get(item.category, DEFAULT_COLOR),
                )
            candidate += timedelta(minutes=SLOT_STEP_MINUTES)
        return Warn(
            f'Task "{item.title}" ({item.duration_minutes} min) could not be placed'
        )
