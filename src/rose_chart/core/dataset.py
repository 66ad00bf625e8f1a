"""
Dataset model and ingestion for the rose chart engine.

The dataset is produced upstream by the circular statistics source and is
treated as read-only by the chart. This module provides:

- Frozen dataclasses for hourly slots, 4-hour blocks, per-day records and
  the global summary
- Eager validation of the input contract (record counts, non-negative
  counts, hourly sum, block partition)
- Ingestion of the two JSON document shapes the statistics source emits,
  validated with pydantic before conversion

Input-contract violations raise DatasetError (or MalformedBlockSpan) at
ingestion time, so layout code never sees a malformed dataset.
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rose_chart.core.errors import DatasetError, MalformedBlockSpan
from rose_chart.core.timefmt import (
    HOURS_PER_DAY,
    parse_slot_range,
    parse_time_of_day,
)

logger = logging.getLogger(__name__)

HOURLY_SLOT_COUNT = 24
BLOCK_COUNT = 6
BLOCK_SPAN_HOURS = HOURS_PER_DAY / BLOCK_COUNT


# =============================================================================
# Dataset Records
# =============================================================================


@dataclass(frozen=True)
class TimeSlotRecord:
    """
    One angular slot of the chart.

    Attributes:
        hour_of_day: Angular position basis, in [0, 24)
        label: Display label (e.g. "8pm-9pm")
        count: Number of events in the slot
        percentage: Share of all events, present only for block records
    """
    hour_of_day: float
    label: str
    count: int
    percentage: Optional[float] = None


@dataclass(frozen=True)
class BlockRecord:
    """A contiguous multi-hour span of the day with its event count."""
    start_hour: float
    end_hour: float
    label: str
    count: int
    percentage: Optional[float] = None

    @property
    def span(self) -> float:
        """Length of the block in hours, accounting for wraparound."""
        return (self.end_hour - self.start_hour + HOURS_PER_DAY) % HOURS_PER_DAY

    @property
    def midpoint_hour(self) -> float:
        """Hour of day at the middle of the block."""
        return (self.start_hour + self.span / 2) % HOURS_PER_DAY


@dataclass(frozen=True)
class CircularStats:
    """Circular statistics for one view, as computed upstream."""
    mean_time_hour: float
    concentration: float
    variance: float
    total: int


@dataclass(frozen=True)
class DayRecord:
    """Per-day hourly breakdown and statistics."""
    label: str
    mean_time_hour: float
    concentration: float
    variance: float
    total: int
    hourly: Tuple[TimeSlotRecord, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "hourly", tuple(self.hourly))

    @property
    def stats(self) -> CircularStats:
        """Statistics of this day as a CircularStats value."""
        return CircularStats(
            mean_time_hour=self.mean_time_hour,
            concentration=self.concentration,
            variance=self.variance,
            total=self.total,
        )


@dataclass(frozen=True)
class UniformityTests:
    """Uniformity test results supplied by the statistics source."""
    rayleigh_z: float
    rayleigh_p: float
    hodges_ajne_m: Optional[float] = None
    hodges_ajne_ratio: Optional[float] = None

    def is_non_uniform(self, alpha: float = 0.05) -> bool:
        """True if the Rayleigh test rejects uniformity at ``alpha``."""
        return self.rayleigh_p < alpha


@dataclass(frozen=True)
class SymmetryStats:
    """Symmetry of the distribution around its mean direction."""
    ratio: float
    counts_before: int
    counts_after: int


@dataclass(frozen=True)
class Dataset:
    """
    Complete chart input.

    Construction validates the input contract; an invalid dataset cannot
    be created.

    Attributes:
        summary: Global circular statistics
        hourly: 24 hourly slot records
        blocks: 6 block records partitioning the day
        days: Per-day records, possibly empty
        uniformity: Optional uniformity test results
        symmetry: Optional symmetry statistics
        circular_std_hours: Optional circular standard deviation in hours
        mean_direction_radians: Optional mean direction in radians
        confidence_interval: Optional (lower, upper) interval in hours
        data_source: Free-form description of the data source
        analysis_date: Date the statistics were produced
    """
    summary: CircularStats
    hourly: Tuple[TimeSlotRecord, ...]
    blocks: Tuple[BlockRecord, ...]
    days: Tuple[DayRecord, ...] = ()
    uniformity: Optional[UniformityTests] = None
    symmetry: Optional[SymmetryStats] = None
    circular_std_hours: Optional[float] = None
    mean_direction_radians: Optional[float] = None
    confidence_interval: Optional[Tuple[float, float]] = None
    data_source: str = ""
    analysis_date: str = ""

    def __post_init__(self):
        object.__setattr__(self, "hourly", tuple(self.hourly))
        object.__setattr__(self, "blocks", tuple(self.blocks))
        object.__setattr__(self, "days", tuple(self.days))
        validate_dataset(self)

    @property
    def day_count(self) -> int:
        """Number of per-day records."""
        return len(self.days)

    @property
    def day_labels(self) -> List[str]:
        """Labels of all days, in dataset order."""
        return [day.label for day in self.days]


# =============================================================================
# Validation
# =============================================================================


def _check_mean_time(value: float, owner: str) -> None:
    if not (0.0 <= value < HOURS_PER_DAY) or not math.isfinite(value):
        raise DatasetError(f"{owner}: mean time {value} outside [0, 24)")


def _check_slots(slots: Tuple[TimeSlotRecord, ...], owner: str) -> None:
    if len(slots) != HOURLY_SLOT_COUNT:
        raise DatasetError(
            f"{owner}: expected {HOURLY_SLOT_COUNT} hourly records, got {len(slots)}"
        )
    for slot in slots:
        if slot.count < 0:
            raise DatasetError(f"{owner}: negative count {slot.count} for {slot.label}")
        if not (0.0 <= slot.hour_of_day < HOURS_PER_DAY):
            raise DatasetError(
                f"{owner}: hour {slot.hour_of_day} outside [0, 24) for {slot.label}"
            )
    hours = sorted(int(slot.hour_of_day) for slot in slots)
    if hours != list(range(HOURLY_SLOT_COUNT)):
        missing = sorted(set(range(HOURLY_SLOT_COUNT)) - set(hours))
        raise DatasetError(
            f"{owner}: hourly records must cover each clock hour once "
            f"(missing hours: {missing})"
        )


def check_block_partition(blocks: Tuple[BlockRecord, ...]) -> None:
    """
    Verify that fixed 4-hour block spans cover the 24-hour circle exactly once.

    Blocks are ordered by start hour; each block must end where the next
    one starts (wrapping past midnight), and the spans must sum to 24.

    Raises:
        MalformedBlockSpan: On any gap, overlap, empty or uneven span
    """
    if len(blocks) != BLOCK_COUNT:
        raise MalformedBlockSpan(f"Expected {BLOCK_COUNT} blocks, got {len(blocks)}")

    for block in blocks:
        if not (0.0 <= block.start_hour < HOURS_PER_DAY):
            raise MalformedBlockSpan(
                f"Block {block.label}: start hour {block.start_hour} outside [0, 24)"
            )
        if not (0.0 <= block.end_hour <= HOURS_PER_DAY):
            raise MalformedBlockSpan(
                f"Block {block.label}: end hour {block.end_hour} outside [0, 24]"
            )
        if block.span <= 0:
            raise MalformedBlockSpan(f"Block {block.label} has an empty span")
        if not math.isclose(block.span, BLOCK_SPAN_HOURS, abs_tol=1e-9):
            raise MalformedBlockSpan(
                f"Block {block.label} spans {block.span} hours instead of {BLOCK_SPAN_HOURS:g}"
            )
        if block.count < 0:
            raise DatasetError(f"Block {block.label}: negative count {block.count}")

    ordered = sorted(blocks, key=lambda b: b.start_hour)
    for current, following in zip(ordered, ordered[1:] + ordered[:1]):
        end = current.end_hour % HOURS_PER_DAY
        if not math.isclose(end, following.start_hour, abs_tol=1e-9):
            raise MalformedBlockSpan(
                f"Block {current.label} ends at {current.end_hour} but "
                f"{following.label} starts at {following.start_hour}"
            )

    covered = sum(block.span for block in blocks)
    if not math.isclose(covered, HOURS_PER_DAY, abs_tol=1e-9):
        raise MalformedBlockSpan(f"Blocks cover {covered} hours instead of 24")


def validate_dataset(dataset: Dataset) -> None:
    """
    Validate the input contract of a dataset.

    Raises:
        DatasetError: If counts, record lengths or totals are inconsistent
        MalformedBlockSpan: If the blocks do not partition the day
    """
    summary = dataset.summary
    _check_mean_time(summary.mean_time_hour, "summary")
    if summary.total < 0:
        raise DatasetError(f"summary: negative total {summary.total}")

    _check_slots(dataset.hourly, "hourly")
    hourly_sum = sum(slot.count for slot in dataset.hourly)
    if hourly_sum != summary.total:
        raise DatasetError(
            f"Hourly counts sum to {hourly_sum} but summary total is {summary.total}"
        )

    check_block_partition(dataset.blocks)

    for day in dataset.days:
        owner = f"day {day.label!r}"
        _check_mean_time(day.mean_time_hour, owner)
        _check_slots(day.hourly, owner)
        day_sum = sum(slot.count for slot in day.hourly)
        if day_sum != day.total:
            # The day total comes from the stats source; the chart only uses
            # it for percentages, so a mismatch is reported but tolerated.
            logger.warning(
                f"{owner}: hourly counts sum to {day_sum} but total is {day.total}"
            )


# =============================================================================
# Document Models (pydantic)
# =============================================================================


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class RayleighEntry(_DocumentModel):
    z_statistic: float = Field(alias="zStatistic")
    p_value: float = Field(alias="pValue", ge=0.0, le=1.0)


class HodgesAjneEntry(_DocumentModel):
    m_statistic: float = Field(alias="mStatistic")
    ratio: float


class UniformityEntry(_DocumentModel):
    rayleigh: RayleighEntry
    hodges_ajne: Optional[HodgesAjneEntry] = Field(default=None, alias="hodgesAjne")


class MetadataEntry(_DocumentModel):
    total_observations: Optional[int] = Field(default=None, alias="totalObservations", ge=0)
    data_source: str = Field(default="", alias="dataSource")
    analysis_date: str = Field(default="", alias="analysisDate")


class SymmetryEntry(_DocumentModel):
    ratio: float
    counts_before: int = Field(alias="countsBefore", ge=0)
    counts_after: int = Field(alias="countsAfter", ge=0)


# Canonical document ---------------------------------------------------------


class SlotModel(_DocumentModel):
    hour_of_day: float = Field(alias="hourOfDay", ge=0.0, lt=24.0)
    label: str
    count: int = Field(ge=0)
    percentage: Optional[float] = None


class BlockModel(_DocumentModel):
    start_hour: float = Field(alias="startHour", ge=0.0, lt=24.0)
    end_hour: float = Field(alias="endHour", ge=0.0, le=24.0)
    label: str
    count: int = Field(ge=0)
    percentage: Optional[float] = None


class StatsModel(_DocumentModel):
    mean_time_hour: float = Field(alias="meanTimeHour", ge=0.0, lt=24.0)
    concentration: float = Field(ge=0.0)
    variance: float = Field(ge=0.0)
    total: int = Field(ge=0)


class DayModel(StatsModel):
    label: str
    hourly: List[SlotModel]


class CanonicalDocument(_DocumentModel):
    summary: StatsModel
    hourly: List[SlotModel]
    blocks: List[BlockModel]
    days: List[DayModel] = Field(default_factory=list)
    uniformity_tests: Optional[UniformityEntry] = Field(default=None, alias="uniformityTests")
    symmetry: Optional[SymmetryEntry] = None
    metadata: Optional[MetadataEntry] = None


# Dashboard document ---------------------------------------------------------


class TimeSlotEntry(_DocumentModel):
    time_slot: str = Field(alias="timeSlot")
    count: int = Field(ge=0)


class TimeBlockEntry(_DocumentModel):
    time_block: str = Field(alias="timeBlock")
    count: int = Field(ge=0)
    percentage: Optional[float] = None


class DayStatsEntry(_DocumentModel):
    day: str
    mean_time: str = Field(alias="meanTime")
    concentration: float = Field(ge=0.0)
    variance: float = Field(ge=0.0)
    total: int = Field(ge=0)
    hourly_breakdown: List[TimeSlotEntry] = Field(alias="hourlyBreakdown")


class MeanDirectionEntry(_DocumentModel):
    time: str
    radians: Optional[float] = None


class ConcentrationEntry(_DocumentModel):
    mean_resultant_length: float = Field(alias="meanResultantLength", ge=0.0)


class StandardDeviationEntry(_DocumentModel):
    hours: Optional[float] = None


class VarianceEntry(_DocumentModel):
    circular_variance: float = Field(alias="circularVariance", ge=0.0)
    circular_standard_deviation: Optional[StandardDeviationEntry] = Field(
        default=None, alias="circularStandardDeviation"
    )


class ConfidenceIntervalEntry(_DocumentModel):
    lower_bound: str = Field(alias="lowerBound")
    upper_bound: str = Field(alias="upperBound")


class DashboardSummary(_DocumentModel):
    mean_direction: MeanDirectionEntry = Field(alias="meanDirection")
    concentration: ConcentrationEntry
    variance: VarianceEntry
    confidence_interval: Optional[ConfidenceIntervalEntry] = Field(
        default=None, alias="confidenceInterval"
    )
    symmetry: Optional[SymmetryEntry] = None


class DashboardDocument(_DocumentModel):
    summary: DashboardSummary
    metadata: MetadataEntry
    hourly_distribution: List[TimeSlotEntry] = Field(alias="hourlyDistribution")
    time_blocks: List[TimeBlockEntry] = Field(alias="timeBlocks")
    day_stats: List[DayStatsEntry] = Field(default_factory=list, alias="dayStats")
    uniformity_tests: Optional[UniformityEntry] = Field(default=None, alias="uniformityTests")


# =============================================================================
# Conversion
# =============================================================================


def _uniformity_from(entry: Optional[UniformityEntry]) -> Optional[UniformityTests]:
    if entry is None:
        return None
    return UniformityTests(
        rayleigh_z=entry.rayleigh.z_statistic,
        rayleigh_p=entry.rayleigh.p_value,
        hodges_ajne_m=entry.hodges_ajne.m_statistic if entry.hodges_ajne else None,
        hodges_ajne_ratio=entry.hodges_ajne.ratio if entry.hodges_ajne else None,
    )


def _symmetry_from(entry: Optional[SymmetryEntry]) -> Optional[SymmetryStats]:
    if entry is None:
        return None
    return SymmetryStats(
        ratio=entry.ratio,
        counts_before=entry.counts_before,
        counts_after=entry.counts_after,
    )


def _from_canonical(doc: CanonicalDocument) -> Dataset:
    def slots(models: List[SlotModel]) -> List[TimeSlotRecord]:
        return [
            TimeSlotRecord(m.hour_of_day, m.label, m.count, m.percentage)
            for m in models
        ]

    metadata = doc.metadata or MetadataEntry()
    return Dataset(
        summary=CircularStats(
            mean_time_hour=doc.summary.mean_time_hour,
            concentration=doc.summary.concentration,
            variance=doc.summary.variance,
            total=doc.summary.total,
        ),
        hourly=slots(doc.hourly),
        blocks=[
            BlockRecord(b.start_hour, b.end_hour, b.label, b.count, b.percentage)
            for b in doc.blocks
        ],
        days=[
            DayRecord(
                label=d.label,
                mean_time_hour=d.mean_time_hour,
                concentration=d.concentration,
                variance=d.variance,
                total=d.total,
                hourly=slots(d.hourly),
            )
            for d in doc.days
        ],
        uniformity=_uniformity_from(doc.uniformity_tests),
        symmetry=_symmetry_from(doc.symmetry),
        data_source=metadata.data_source,
        analysis_date=metadata.analysis_date,
    )


def _hourly_from_entries(entries: List[TimeSlotEntry]) -> List[TimeSlotRecord]:
    records = []
    for entry in entries:
        start, _ = parse_slot_range(entry.time_slot)
        records.append(TimeSlotRecord(float(start), entry.time_slot, entry.count))
    # Slot index doubles as the hour of day for 24-slot views
    return sorted(records, key=lambda r: r.hour_of_day)


def _confidence_interval_from(
    entry: Optional[ConfidenceIntervalEntry],
) -> Optional[Tuple[float, float]]:
    if entry is None:
        return None
    try:
        return (
            parse_time_of_day(entry.lower_bound),
            parse_time_of_day(entry.upper_bound),
        )
    except ValueError as e:
        logger.warning(f"Ignoring unparseable confidence interval: {e}")
        return None


def _from_dashboard(doc: DashboardDocument) -> Dataset:
    hourly = _hourly_from_entries(doc.hourly_distribution)
    total = doc.metadata.total_observations
    if total is None:
        total = sum(record.count for record in hourly)

    blocks = []
    for entry in doc.time_blocks:
        start, end = parse_slot_range(entry.time_block)
        blocks.append(
            BlockRecord(float(start), float(end), entry.time_block, entry.count, entry.percentage)
        )

    days = [
        DayRecord(
            label=entry.day,
            mean_time_hour=parse_time_of_day(entry.mean_time),
            concentration=entry.concentration,
            variance=entry.variance,
            total=entry.total,
            hourly=_hourly_from_entries(entry.hourly_breakdown),
        )
        for entry in doc.day_stats
    ]

    summary = doc.summary
    std_dev = summary.variance.circular_standard_deviation
    return Dataset(
        summary=CircularStats(
            mean_time_hour=parse_time_of_day(summary.mean_direction.time),
            concentration=summary.concentration.mean_resultant_length,
            variance=summary.variance.circular_variance,
            total=total,
        ),
        hourly=hourly,
        blocks=blocks,
        days=days,
        uniformity=_uniformity_from(doc.uniformity_tests),
        symmetry=_symmetry_from(summary.symmetry),
        circular_std_hours=std_dev.hours if std_dev else None,
        mean_direction_radians=summary.mean_direction.radians,
        confidence_interval=_confidence_interval_from(summary.confidence_interval),
        data_source=doc.metadata.data_source,
        analysis_date=doc.metadata.analysis_date,
    )


def is_dashboard_document(data: Mapping[str, Any]) -> bool:
    """True if ``data`` uses the dashboard layout (hourlyDistribution etc.)."""
    return "hourlyDistribution" in data


def dataset_from_dict(data: Mapping[str, Any]) -> Dataset:
    """
    Build a validated Dataset from a parsed JSON document.

    Both the canonical layout (summary/hourly/blocks/days) and the
    dashboard layout (hourlyDistribution/timeBlocks/dayStats) are accepted.

    Raises:
        DatasetError: If the document is malformed
        MalformedBlockSpan: If the blocks do not partition the day
    """
    if not isinstance(data, Mapping):
        raise DatasetError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        if is_dashboard_document(data):
            return _from_dashboard(DashboardDocument.model_validate(data))
        return _from_canonical(CanonicalDocument.model_validate(data))
    except ValidationError as e:
        raise DatasetError(f"Invalid dataset document: {e}") from e
    except ValueError as e:
        if isinstance(e, DatasetError):
            raise
        raise DatasetError(f"Invalid time label in dataset: {e}") from e


def load_dataset(path: Union[str, Path]) -> Dataset:
    """
    Load and validate a dataset from a JSON file.

    Args:
        path: Path to the JSON document

    Returns:
        Validated Dataset

    Raises:
        OSError: If the file cannot be read
        DatasetError: If the document is malformed
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetError(f"Invalid JSON in {path}: {e}") from e

    dataset = dataset_from_dict(data)
    logger.info(
        f"Loaded dataset from {path}: {dataset.summary.total} observations, "
        f"{dataset.day_count} days"
    )
    return dataset


__all__ = [
    "HOURLY_SLOT_COUNT",
    "BLOCK_COUNT",
    "BLOCK_SPAN_HOURS",
    "TimeSlotRecord",
    "BlockRecord",
    "CircularStats",
    "DayRecord",
    "UniformityTests",
    "SymmetryStats",
    "Dataset",
    "check_block_partition",
    "validate_dataset",
    "is_dashboard_document",
    "dataset_from_dict",
    "load_dataset",
]
