"""
Analysis module for the rose chart.

Submodules:
    peaks: Ranking of hourly slots, blocks and day extremes
    reporter: Console report of the dataset's statistics
"""

from rose_chart.analysis.peaks import (
    Peak,
    top_hourly_peaks,
    peak_block,
    concentration_extremes,
    mean_time_range,
)

from rose_chart.analysis.reporter import (
    build_report_tables,
    print_report,
)

__all__ = [
    "Peak",
    "top_hourly_peaks",
    "peak_block",
    "concentration_extremes",
    "mean_time_range",
    "build_report_tables",
    "print_report",
]
