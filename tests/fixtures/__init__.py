"""
Test fixtures for the rose chart.

Provides sample dataset documents and datasets for testing without a
statistics source.
"""

from tests.fixtures.sample_data import (
    HOURLY_COUNTS,
    TOTAL,
    MAX_COUNT,
    PEAK_HOUR,
    MEAN_TIME_HOUR,
    CONCENTRATION,
    VARIANCE,
    BLOCK_COUNTS,
    BLOCK_PERCENTAGES,
    DAY_LABELS,
    DAY_CONCENTRATIONS,
    DAY_MEAN_HOURS,
    day_counts,
    canonical_document,
    dashboard_document,
    create_sample_dataset,
    create_zero_dataset,
    modified_document,
)

__all__ = [
    "HOURLY_COUNTS",
    "TOTAL",
    "MAX_COUNT",
    "PEAK_HOUR",
    "MEAN_TIME_HOUR",
    "CONCENTRATION",
    "VARIANCE",
    "BLOCK_COUNTS",
    "BLOCK_PERCENTAGES",
    "DAY_LABELS",
    "DAY_CONCENTRATIONS",
    "DAY_MEAN_HOURS",
    "day_counts",
    "canonical_document",
    "dashboard_document",
    "create_sample_dataset",
    "create_zero_dataset",
    "modified_document",
]
