"""
Sample datasets for testing the rose chart.

Provides the dataset documents the statistics source emits, in both the
canonical and the dashboard layout, built from one fixed distribution:

- 558 events, busiest hour 8pm-9pm (49 events)
- six days labelled "1hb" to "6hb"; "5hb" is the least concentrated
  (0.061) and "3hb" the most (0.51)
"""

import copy
from typing import Any, Dict, List

from rose_chart.core.dataset import Dataset, dataset_from_dict
from rose_chart.core.timefmt import block_label, format_time_of_day, slot_label

HOURLY_COUNTS: List[int] = [
    38, 30, 24, 16, 10, 6, 5, 8, 12, 15, 18, 20,
    22, 21, 20, 24, 30, 36, 40, 44, 49, 42, 15, 13,
]
TOTAL = sum(HOURLY_COUNTS)          # 558
MAX_COUNT = max(HOURLY_COUNTS)      # 49, at 8pm
PEAK_HOUR = HOURLY_COUNTS.index(MAX_COUNT)

MEAN_TIME_HOUR = 19.9333            # 7:56pm
CONCENTRATION = 0.298
VARIANCE = 0.702

BLOCK_STARTS = [0, 4, 8, 12, 16, 20]
BLOCK_COUNTS = [sum(HOURLY_COUNTS[s:s + 4]) for s in BLOCK_STARTS]
BLOCK_PERCENTAGES = [round(c / TOTAL * 100, 1) for c in BLOCK_COUNTS]

DAY_LABELS = ["1hb", "2hb", "3hb", "4hb", "5hb", "6hb"]
DAY_CONCENTRATIONS = [0.42, 0.35, 0.51, 0.28, 0.061, 0.39]
DAY_VARIANCES = [round(1 - c, 3) for c in DAY_CONCENTRATIONS]
DAY_MEAN_HOURS = [20.5, 21.25, 19.0, 22.75, 3.5, 18.25]


def day_counts(day_index: int) -> List[int]:
    """Hourly counts of one day."""
    return [(hour * (day_index + 2)) % 9 for hour in range(24)]


def canonical_document() -> Dict[str, Any]:
    """Dataset document in the canonical summary/hourly/blocks/days layout."""
    def hourly(counts: List[int]) -> List[Dict[str, Any]]:
        return [
            {"hourOfDay": float(hour), "label": slot_label(hour), "count": count}
            for hour, count in enumerate(counts)
        ]

    days = []
    for index, label in enumerate(DAY_LABELS):
        counts = day_counts(index)
        days.append({
            "label": label,
            "meanTimeHour": DAY_MEAN_HOURS[index],
            "concentration": DAY_CONCENTRATIONS[index],
            "variance": DAY_VARIANCES[index],
            "total": sum(counts),
            "hourly": hourly(counts),
        })

    return {
        "summary": {
            "meanTimeHour": MEAN_TIME_HOUR,
            "concentration": CONCENTRATION,
            "variance": VARIANCE,
            "total": TOTAL,
        },
        "hourly": hourly(HOURLY_COUNTS),
        "blocks": [
            {
                "startHour": float(start),
                "endHour": float(start + 4),
                "label": block_label(start, (start + 4) % 24),
                "count": count,
                "percentage": pct,
            }
            for start, count, pct in zip(BLOCK_STARTS, BLOCK_COUNTS, BLOCK_PERCENTAGES)
        ],
        "days": days,
        "uniformityTests": {
            "rayleigh": {"zStatistic": 49.55, "pValue": 0.0001},
            "hodgesAjne": {"mStatistic": 198.0, "ratio": 0.355},
        },
        "symmetry": {"ratio": 1.12, "countsBefore": 262, "countsAfter": 296},
        "metadata": {
            "totalObservations": TOTAL,
            "dataSource": "Sample heartbeat log",
            "analysisDate": "2024-03-01",
        },
    }


def dashboard_document() -> Dict[str, Any]:
    """The same dataset in the dashboard's hourlyDistribution/timeBlocks layout."""
    def entries(counts: List[int]) -> List[Dict[str, Any]]:
        return [
            {"timeSlot": slot_label(hour), "count": count}
            for hour, count in enumerate(counts)
        ]

    return {
        "metadata": {
            "totalObservations": TOTAL,
            "dataSource": "Sample heartbeat log",
            "analysisDate": "2024-03-01",
        },
        "summary": {
            "meanDirection": {"time": "7:56pm", "radians": 5.2185},
            "concentration": {"meanResultantLength": CONCENTRATION},
            "variance": {
                "circularVariance": VARIANCE,
                "circularStandardDeviation": {"hours": 5.94},
            },
            "confidenceInterval": {"lowerBound": "7:12pm", "upperBound": "8:40pm"},
            "symmetry": {"ratio": 1.12, "countsBefore": 262, "countsAfter": 296},
        },
        "hourlyDistribution": entries(HOURLY_COUNTS),
        "timeBlocks": [
            {
                "timeBlock": block_label(start, (start + 4) % 24),
                "count": count,
                "percentage": pct,
            }
            for start, count, pct in zip(BLOCK_STARTS, BLOCK_COUNTS, BLOCK_PERCENTAGES)
        ],
        "dayStats": [
            {
                "day": label,
                "meanTime": format_time_of_day(DAY_MEAN_HOURS[index]),
                "concentration": DAY_CONCENTRATIONS[index],
                "variance": DAY_VARIANCES[index],
                "total": sum(day_counts(index)),
                "hourlyBreakdown": entries(day_counts(index)),
            }
            for index, label in enumerate(DAY_LABELS)
        ],
        "uniformityTests": {
            "rayleigh": {"zStatistic": 49.55, "pValue": 0.0001},
            "hodgesAjne": {"mStatistic": 198.0, "ratio": 0.355},
        },
    }


def create_sample_dataset() -> Dataset:
    """Validated dataset built from the canonical document."""
    return dataset_from_dict(canonical_document())


def create_zero_dataset() -> Dataset:
    """Dataset with every count zero and no day data."""
    document = canonical_document()
    document["summary"]["total"] = 0
    for slot in document["hourly"]:
        slot["count"] = 0
    for block in document["blocks"]:
        block["count"] = 0
        block["percentage"] = 0.0
    document["days"] = []
    document.pop("uniformityTests")
    return dataset_from_dict(document)


def modified_document(**changes: Any) -> Dict[str, Any]:
    """Deep copy of the canonical document with top-level keys replaced."""
    document = copy.deepcopy(canonical_document())
    document.update(changes)
    return document
