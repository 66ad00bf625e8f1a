"""
View resolution for the rose chart.

Every other component reads the chart's current data through this module:
a (dataset, view mode) pair resolves to one ordered sequence of time-slot
records plus the circular statistics that belong to that view.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from rose_chart.core.dataset import (
    BLOCK_COUNT,
    HOURLY_SLOT_COUNT,
    CircularStats,
    Dataset,
    TimeSlotRecord,
)
from rose_chart.core.errors import InvalidDayIndex, UnknownVariant

logger = logging.getLogger(__name__)

ALL_DAYS = "all"

DayFilter = Union[str, int]


class ViewKind(Enum):
    """Which slice of the dataset the chart shows."""
    HOURLY = "hourly"   # 24 hourly slots, global stats
    BLOCKS = "blocks"   # 6 four-hour blocks, global stats
    DAILY = "daily"     # 24 hourly slots for all days or one day


_KIND_ALIASES = {
    "hourly": ViewKind.HOURLY,
    "overall": ViewKind.HOURLY,
    "blocks": ViewKind.BLOCKS,
    "timeblocks": ViewKind.BLOCKS,
    "time_blocks": ViewKind.BLOCKS,
    "daily": ViewKind.DAILY,
}


def parse_view_kind(value: Union[str, ViewKind]) -> ViewKind:
    """
    Convert a view kind name to ViewKind.

    Raises:
        UnknownVariant: If the name is not a known view kind
    """
    if isinstance(value, ViewKind):
        return value
    if isinstance(value, str):
        kind = _KIND_ALIASES.get(value.strip().lower())
        if kind is not None:
            return kind
    raise UnknownVariant("view mode", value, sorted(_KIND_ALIASES))


def parse_day_filter(value: DayFilter) -> DayFilter:
    """
    Normalize a day filter to ALL_DAYS or an integer day index.

    Accepts "all", an int, a digit string, or the dashboard's "dayN" form.
    Range checking is left to resolve().

    Raises:
        UnknownVariant: If the value is not a recognizable day filter
    """
    if isinstance(value, bool):
        raise UnknownVariant("day filter", value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == ALL_DAYS:
            return ALL_DAYS
        if text.startswith("day"):
            text = text[3:]
        if text.isdigit():
            return int(text)
    raise UnknownVariant("day filter", value)


@dataclass(frozen=True)
class ViewMode:
    """
    Tagged view selection: Hourly, Blocks, or Daily(day_filter).

    The day filter is retained when switching to a non-daily kind so that
    returning to the daily view restores the previous day; it is only
    consulted when ``kind`` is DAILY.
    """
    kind: ViewKind = ViewKind.HOURLY
    day_filter: DayFilter = ALL_DAYS

    def __post_init__(self):
        object.__setattr__(self, "kind", parse_view_kind(self.kind))
        object.__setattr__(self, "day_filter", parse_day_filter(self.day_filter))

    @classmethod
    def hourly(cls) -> "ViewMode":
        return cls(ViewKind.HOURLY)

    @classmethod
    def blocks(cls) -> "ViewMode":
        return cls(ViewKind.BLOCKS)

    @classmethod
    def daily(cls, day_filter: DayFilter = ALL_DAYS) -> "ViewMode":
        return cls(ViewKind.DAILY, day_filter)

    @classmethod
    def parse(cls, text: str) -> "ViewMode":
        """
        Parse a view mode such as 'hourly', 'blocks', 'daily' or 'daily:3'.

        Raises:
            UnknownVariant: If the text does not name a view mode
        """
        name, _, day = text.partition(":")
        kind = parse_view_kind(name)
        if day and kind is not ViewKind.DAILY:
            raise UnknownVariant("view mode", text)
        return cls(kind, day or ALL_DAYS)

    def with_kind(self, kind: Union[str, ViewKind]) -> "ViewMode":
        """Same day filter, different kind."""
        return replace(self, kind=parse_view_kind(kind))

    def with_day_filter(self, day_filter: DayFilter) -> "ViewMode":
        """Same kind, different day filter."""
        return replace(self, day_filter=parse_day_filter(day_filter))

    @property
    def is_blocks(self) -> bool:
        return self.kind is ViewKind.BLOCKS

    @property
    def day_index(self) -> Optional[int]:
        """Selected day index, or None unless a single day is shown."""
        if self.kind is ViewKind.DAILY and self.day_filter != ALL_DAYS:
            return int(self.day_filter)
        return None

    @property
    def slot_count(self) -> int:
        return BLOCK_COUNT if self.is_blocks else HOURLY_SLOT_COUNT

    @property
    def wedge_angle(self) -> float:
        """Angular width of one wedge in radians."""
        return 2 * math.pi / self.slot_count

    @property
    def hour_step(self) -> int:
        """Spacing of hour markers around the dial."""
        return 24 // self.slot_count

    @property
    def shows_mean_direction(self) -> bool:
        return not self.is_blocks

    def __str__(self) -> str:
        if self.kind is ViewKind.DAILY:
            return f"daily:{self.day_filter}"
        return self.kind.value


@dataclass(frozen=True)
class ResolvedView:
    """
    Slots and statistics for one view of a dataset.

    Attributes:
        view_mode: The view that was resolved
        slots: Ordered slot records; slot index is the position in this tuple
        stats: Statistics belonging to the view
        day_label: Label of the selected day for single-day views
    """
    view_mode: ViewMode
    slots: Tuple[TimeSlotRecord, ...]
    stats: CircularStats
    day_label: Optional[str] = None

    @property
    def wedge_angle(self) -> float:
        return self.view_mode.wedge_angle

    @property
    def max_count(self) -> int:
        """Largest slot count, or 1 for an all-zero view."""
        return max((slot.count for slot in self.slots), default=0) or 1

    @property
    def shows_mean_direction(self) -> bool:
        return self.view_mode.shows_mean_direction

    def slot(self, index: Optional[int]) -> Optional[TimeSlotRecord]:
        """Slot at ``index``, or None when the index is None or out of range."""
        if index is None or not 0 <= index < len(self.slots):
            return None
        return self.slots[index]


def _block_slots(dataset: Dataset) -> Tuple[TimeSlotRecord, ...]:
    return tuple(
        TimeSlotRecord(
            hour_of_day=block.midpoint_hour,
            label=block.label,
            count=block.count,
            percentage=block.percentage,
        )
        for block in dataset.blocks
    )


def resolve(dataset: Dataset, view_mode: ViewMode) -> ResolvedView:
    """
    Resolve the slots and statistics shown by ``view_mode``.

    Args:
        dataset: Validated dataset
        view_mode: Current view selection

    Returns:
        ResolvedView for the view

    Raises:
        InvalidDayIndex: If a single-day view references a missing day
    """
    if view_mode.kind is ViewKind.BLOCKS:
        return ResolvedView(view_mode, _block_slots(dataset), dataset.summary)

    day_index = view_mode.day_index
    if day_index is None:
        # Hourly and Daily("all") show the same global distribution
        return ResolvedView(view_mode, dataset.hourly, dataset.summary)

    if not 0 <= day_index < dataset.day_count:
        raise InvalidDayIndex(day_index, dataset.day_count)

    day = dataset.days[day_index]
    logger.debug(f"Resolved daily view for {day.label!r} (index {day_index})")
    return ResolvedView(view_mode, day.hourly, day.stats, day_label=day.label)


__all__ = [
    "ALL_DAYS",
    "ViewKind",
    "ViewMode",
    "ResolvedView",
    "parse_view_kind",
    "parse_day_filter",
    "resolve",
]
