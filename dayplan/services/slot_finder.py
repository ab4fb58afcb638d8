"""
Free-slot search over a working set of placed blocks.

Every placement decision funnels through has_conflict().
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional

from dayplan.core.exceptions import ValidationError
from dayplan.models.enums import BlockKind
from dayplan.utils.datetime_utils import END_OF_DAY_CLOCK, overlaps, parse_clock

SLOT_STEP_MINUTES = 15
FORWARD_SEARCH_MINUTES = 90
BACKWARD_SEARCH_MINUTES = 180

DINNER_MINUTES = 60
# 21:00 is the ideal; the rest spread out up to two hours either side.
DINNER_CANDIDATES = ("21:00", "20:30", "21:30", "20:00", "22:00", "23:00")


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValidationError(
                f"Interval must start before it ends ({self.start:%H:%M} >= {self.end:%H:%M})"
            )

    @classmethod
    def of_minutes(cls, start: datetime, minutes: int) -> "Interval":
        return cls(start, start + timedelta(minutes=minutes))


@dataclass(frozen=True)
class PlacedBlock(Interval):
    """Interval committed to the working set of one generation run."""

    label: str
    kind: BlockKind

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


def has_conflict(candidate: Interval, blocks: Iterable[Interval]) -> bool:
    """Return True if the candidate overlaps any block."""
    return any(
        overlaps(candidate.start, candidate.end, block.start, block.end)
        for block in blocks
    )


def _search_offsets() -> Iterator[int]:
    yield 0
    yield from range(SLOT_STEP_MINUTES, FORWARD_SEARCH_MINUTES + 1, SLOT_STEP_MINUTES)
    yield from range(-SLOT_STEP_MINUTES, -BACKWARD_SEARCH_MINUTES - 1, -SLOT_STEP_MINUTES)


def find_slot(
    preferred_start: datetime,
    duration_minutes: int,
    blocks: list[Interval],
    lower_bound: Optional[datetime] = None,
    upper_bound: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Find the nearest free start around a preferred time.

    Tries the preferred start, then up to 90 minutes later, then up to
    180 minutes earlier, in 15-minute steps.

    Args:
        preferred_start: Ideal start time
        duration_minutes: Length of the block to place
        blocks: Current working set
        lower_bound: Earliest allowed start
        upper_bound: Latest allowed end

    Returns:
        First usable start, or None if every candidate is rejected
    """
    for offset in _search_offsets():
        candidate = Interval.of_minutes(
            preferred_start + timedelta(minutes=offset), duration_minutes
        )
        if lower_bound is not None and candidate.start < lower_bound:
            continue
        if upper_bound is not None and candidate.end > upper_bound:
            continue
        if not has_conflict(candidate, blocks):
            return candidate.start
    return None


def find_dinner_slot(day: date, blocks: list[Interval]) -> Optional[datetime]:
    """Return the first free dinner start from the fixed candidate list."""
    day_end = parse_clock(END_OF_DAY_CLOCK, day)
    for clock in DINNER_CANDIDATES:
        candidate = Interval.of_minutes(parse_clock(clock, day), DINNER_MINUTES)
        if candidate.end > day_end:
            continue
        if not has_conflict(candidate, blocks):
            return candidate.start
    return None
