"""
Overlay composition for the rose chart.

Builds the auxiliary content drawn around the wedges: chart title, legend,
hover tooltip, selection detail panel, mean-direction indicator and the
statistics summary. Everything here is derived from the resolved view and
the interaction state; nothing is computed beyond simple shares and
formatting.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from rose_chart.analysis.peaks import peak_block, top_hourly_peaks
from rose_chart.core.colors import (
    COLOR_CENTER,
    COLOR_GRID,
    COLOR_MEAN_DIRECTION,
)
from rose_chart.core.dataset import Dataset, TimeSlotRecord
from rose_chart.core.geometry import angle_for_hour
from rose_chart.core.state import InteractionState
from rose_chart.core.timefmt import format_time_of_day
from rose_chart.core.view_resolver import ResolvedView, ViewKind

logger = logging.getLogger(__name__)

UNIFORMITY_ALPHA = 0.05

VERDICT_NON_UNIFORM = "Non-uniform distribution (p < 0.05)"
VERDICT_UNIFORM = "Uniform distribution"
VERDICT_UNAVAILABLE = "Not available"


class LegendSwatch(Enum):
    """Shape drawn next to a legend entry."""
    POINT = "point"
    MEAN_LINE = "mean_line"
    HIGHLIGHT = "highlight"
    GRID_LINE = "grid_line"


@dataclass(frozen=True)
class LegendEntry:
    swatch: LegendSwatch
    label: str
    color: str


@dataclass(frozen=True)
class Legend:
    """Legend entries plus the concentration readout (e.g. 'R=0.30')."""
    entries: Tuple[LegendEntry, ...]
    concentration_text: str

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(entry.label for entry in self.entries)


@dataclass(frozen=True)
class Tooltip:
    """Hover tooltip for one slot."""
    slot_index: int
    title: str
    body: str
    hint: str = "Click for details"


@dataclass(frozen=True)
class DayBreakdownEntry:
    day_label: str
    count: int

    @property
    def has_activity(self) -> bool:
        return self.count > 0

    @property
    def text(self) -> str:
        return f"{self.count} occurrences"


@dataclass(frozen=True)
class DetailPanel:
    """
    Detail content for the selected slot.

    Attributes:
        slot_index: Selected slot
        title: e.g. '8pm-9pm Details'
        count: Slot count
        share: Percentage of the view's total, one decimal place
        day_breakdown: Per-day counts for the same hour (hourly view only)
    """
    slot_index: int
    title: str
    count: int
    share: float
    day_breakdown: Tuple[DayBreakdownEntry, ...] = ()

    @property
    def count_text(self) -> str:
        return f"Total occurrences: {self.count}"

    @property
    def share_text(self) -> str:
        return f"This represents {self.share:.1f}% of all activity"


@dataclass(frozen=True)
class MeanDirection:
    hour: float
    angle: float
    label: str


@dataclass(frozen=True)
class StatsSummary:
    """Text values for the statistics panel."""
    mean_time: str
    concentration: str
    variance: str
    total: str
    peak_hour: str
    peak_block: str
    uniformity: str


@dataclass(frozen=True)
class Overlay:
    title: str
    legend: Legend
    tooltip: Optional[Tooltip]
    detail: Optional[DetailPanel]
    mean_direction: Optional[MeanDirection]
    stats: StatsSummary


# =============================================================================
# Composition
# =============================================================================


def chart_title(view: ResolvedView) -> str:
    kind = view.view_mode.kind
    if kind is ViewKind.HOURLY:
        return "Overall Activity by Hour"
    if kind is ViewKind.BLOCKS:
        return "Activity by 4-Hour Blocks"
    if view.day_label is not None:
        return f"Activity by Hour ({view.day_label})"
    return "Activity by Hour (All Days)"


def build_legend(view: ResolvedView, state: InteractionState) -> Legend:
    entries = [LegendEntry(LegendSwatch.POINT, "Data point", COLOR_CENTER)]
    if view.shows_mean_direction:
        entries.append(LegendEntry(LegendSwatch.MEAN_LINE, "Mean direction",
                                   COLOR_MEAN_DIRECTION))
    selected_label = "Selected block" if view.view_mode.is_blocks else "Selected hour"
    entries.append(LegendEntry(LegendSwatch.HIGHLIGHT, selected_label,
                               state.color_scheme.highlight.to_hex()))
    entries.append(LegendEntry(LegendSwatch.GRID_LINE, "Count levels", COLOR_GRID))
    return Legend(tuple(entries), f"R={view.stats.concentration:.2f}")


def _occurrences(slot: TimeSlotRecord) -> str:
    text = f"{slot.count} occurrences"
    if slot.percentage is not None:
        text += f" ({slot.percentage:g}%)"
    return text


def build_tooltip(view: ResolvedView, index: Optional[int]) -> Optional[Tooltip]:
    slot = view.slot(index)
    if slot is None:
        return None
    return Tooltip(index, slot.label, _occurrences(slot))


def share_of_total(count: int, total: int) -> float:
    """Percentage of ``total`` rounded to one decimal; 0 when total is 0."""
    if total <= 0:
        return 0.0
    return round(count / total * 100, 1)


def _day_breakdown(dataset: Dataset, slot: TimeSlotRecord) -> Tuple[DayBreakdownEntry, ...]:
    entries = []
    for day in dataset.days:
        count = next(
            (record.count for record in day.hourly
             if int(record.hour_of_day) == int(slot.hour_of_day)),
            0,
        )
        entries.append(DayBreakdownEntry(day.label, count))
    return tuple(entries)


def build_detail(dataset: Dataset, view: ResolvedView,
                 index: Optional[int]) -> Optional[DetailPanel]:
    slot = view.slot(index)
    if slot is None:
        return None

    breakdown: Tuple[DayBreakdownEntry, ...] = ()
    if view.view_mode.kind is ViewKind.HOURLY:
        breakdown = _day_breakdown(dataset, slot)

    return DetailPanel(
        slot_index=index,
        title=f"{slot.label} Details",
        count=slot.count,
        share=share_of_total(slot.count, view.stats.total),
        day_breakdown=breakdown,
    )


def build_mean_direction(view: ResolvedView) -> Optional[MeanDirection]:
    if not view.shows_mean_direction:
        return None
    hour = view.stats.mean_time_hour
    return MeanDirection(hour, angle_for_hour(hour), format_time_of_day(hour))


def uniformity_verdict(dataset: Dataset) -> str:
    if dataset.uniformity is None:
        return VERDICT_UNAVAILABLE
    if dataset.uniformity.is_non_uniform(UNIFORMITY_ALPHA):
        return VERDICT_NON_UNIFORM
    return VERDICT_UNIFORM


def build_stats(dataset: Dataset, view: ResolvedView) -> StatsSummary:
    stats = view.stats
    peaks = top_hourly_peaks(dataset, 1)
    peak_hour = f"{peaks[0].label} ({peaks[0].count})" if peaks else "-"
    block = peak_block(dataset)
    return StatsSummary(
        mean_time=format_time_of_day(stats.mean_time_hour),
        concentration=f"{stats.concentration:.3f}",
        variance=f"{stats.variance:.3f}",
        total=str(stats.total),
        peak_hour=peak_hour,
        peak_block=block.label if block is not None else "-",
        uniformity=uniformity_verdict(dataset),
    )


def compose_overlay(dataset: Dataset, view: ResolvedView,
                    state: InteractionState) -> Overlay:
    """
    Compose the overlay for a resolved view and interaction state.

    Args:
        dataset: The dataset the view was resolved from
        view: Result of resolve(dataset, state.view_mode)
        state: Current interaction state

    Returns:
        Overlay with tooltip keyed to the hovered slot and detail content
        keyed to the selected slot
    """
    return Overlay(
        title=chart_title(view),
        legend=build_legend(view, state),
        tooltip=build_tooltip(view, state.hovered_index),
        detail=build_detail(dataset, view, state.selected_index),
        mean_direction=build_mean_direction(view),
        stats=build_stats(dataset, view),
    )


__all__ = [
    "LegendSwatch",
    "LegendEntry",
    "Legend",
    "Tooltip",
    "DayBreakdownEntry",
    "DetailPanel",
    "MeanDirection",
    "StatsSummary",
    "Overlay",
    "chart_title",
    "share_of_total",
    "uniformity_verdict",
    "compose_overlay",
]
