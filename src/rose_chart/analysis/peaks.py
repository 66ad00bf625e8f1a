"""
Peak ranking for rose chart datasets.

Ranks the supplied counts; nothing here estimates circular statistics.
The results feed the statistics panel and the console report:

- the busiest hourly slots, highest first
- the busiest four-hour block
- the days with the highest and lowest concentration
- the earliest and latest mean times across days

Ties are broken by position in the dataset (earlier slot wins).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from rose_chart.core.dataset import BlockRecord, Dataset, DayRecord

logger = logging.getLogger(__name__)


DEFAULT_PEAK_COUNT = 4


@dataclass(frozen=True)
class Peak:
    """
    One ranked hourly slot.

    Attributes:
        rank: 1 for the busiest slot
        label: Slot label, e.g. '8pm-9pm'
        hour_of_day: Start hour of the slot
        count: Slot count
        share: Percentage of the dataset total (0 when the total is 0)
    """
    rank: int
    label: str
    hour_of_day: float
    count: int
    share: float


def _rank_descending(values: Sequence[float]) -> np.ndarray:
    """Indices ordering ``values`` from largest to smallest, stable on ties."""
    array = np.asarray(values, dtype=np.float64)
    return np.argsort(-array, kind="stable")


def top_hourly_peaks(dataset: Dataset, n: int = DEFAULT_PEAK_COUNT) -> List[Peak]:
    """
    Return the ``n`` busiest hourly slots of the global distribution.

    Args:
        dataset: Source dataset
        n: Number of peaks to return

    Returns:
        Peaks ordered by count, highest first
    """
    if n <= 0 or not dataset.hourly:
        return []

    counts = [slot.count for slot in dataset.hourly]
    total = dataset.summary.total
    peaks = []
    for rank, index in enumerate(_rank_descending(counts)[:n], start=1):
        slot = dataset.hourly[int(index)]
        share = round(slot.count / total * 100, 1) if total > 0 else 0.0
        peaks.append(Peak(rank, slot.label, slot.hour_of_day, slot.count, share))
    return peaks


def peak_block(dataset: Dataset) -> Optional[BlockRecord]:
    """The block with the highest count, or None when there are no blocks."""
    if not dataset.blocks:
        return None
    index = int(_rank_descending([block.count for block in dataset.blocks])[0])
    return dataset.blocks[index]


def concentration_extremes(dataset: Dataset) -> Optional[Tuple[DayRecord, DayRecord]]:
    """
    Days with the highest and lowest concentration.

    Returns:
        (most concentrated, least concentrated), or None without day data
    """
    if not dataset.days:
        return None
    order = _rank_descending([day.concentration for day in dataset.days])
    return dataset.days[int(order[0])], dataset.days[int(order[-1])]


def mean_time_range(dataset: Dataset) -> Optional[Tuple[DayRecord, DayRecord]]:
    """
    Days with the earliest and latest mean time of day.

    Mean times are compared linearly on [0, 24).

    Returns:
        (earliest, latest), or None without day data
    """
    if not dataset.days:
        return None
    means = np.array([day.mean_time_hour for day in dataset.days], dtype=np.float64)
    earliest = int(np.argmin(means))
    latest = int(np.argmax(means))
    return dataset.days[earliest], dataset.days[latest]


__all__ = [
    "DEFAULT_PEAK_COUNT",
    "Peak",
    "top_hourly_peaks",
    "peak_block",
    "concentration_extremes",
    "mean_time_range",
]
