"""
Console reporting for rose chart datasets.

This module prints the statistics that accompany the chart:
- Circular summary (mean time, concentration, variance, spread)
- Uniformity tests and symmetry supplied by the statistics source
- Hourly peaks and the four-hour block table
- Per-day statistics with concentration and mean-time extremes

Tables are built with rich so they can be rendered to a terminal or
captured from a recording Console in tests.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from rose_chart.analysis.peaks import (
    DEFAULT_PEAK_COUNT,
    concentration_extremes,
    mean_time_range,
    peak_block,
    top_hourly_peaks,
)
from rose_chart.core.dataset import Dataset
from rose_chart.core.timefmt import format_time_of_day

logger = logging.getLogger(__name__)


def _optional(value: Optional[float], fmt: str = "{:.4f}") -> str:
    return fmt.format(value) if value is not None else "-"


# =============================================================================
# Tables
# =============================================================================


def summary_table(dataset: Dataset) -> Table:
    """Circular summary statistics."""
    table = Table(title="Circular Statistics")
    table.add_column("Measure")
    table.add_column("Value", justify="right")

    summary = dataset.summary
    table.add_row("Mean time", format_time_of_day(summary.mean_time_hour))
    if dataset.mean_direction_radians is not None:
        table.add_row("Mean direction (rad)", f"{dataset.mean_direction_radians:.4f}")
    table.add_row("Concentration (R)", f"{summary.concentration:.4f}")
    table.add_row("Circular variance", f"{summary.variance:.4f}")
    if dataset.circular_std_hours is not None:
        table.add_row("Circular std (hours)", f"{dataset.circular_std_hours:.2f}")
    if dataset.confidence_interval is not None:
        lower, upper = dataset.confidence_interval
        table.add_row(
            "95% confidence interval",
            f"{format_time_of_day(lower)} - {format_time_of_day(upper)}",
        )
    table.add_row("Total observations", str(summary.total))
    return table


def uniformity_table(dataset: Dataset) -> Optional[Table]:
    """Uniformity tests and symmetry, when the source supplied them."""
    if dataset.uniformity is None and dataset.symmetry is None:
        return None

    table = Table(title="Uniformity & Symmetry")
    table.add_column("Test")
    table.add_column("Statistic", justify="right")
    table.add_column("Result", justify="right")

    tests = dataset.uniformity
    if tests is not None:
        verdict = "Non-uniform (p < 0.05)" if tests.is_non_uniform() else "Uniform"
        table.add_row("Rayleigh Z", f"{tests.rayleigh_z:.4f}",
                      f"p = {tests.rayleigh_p:.4e} ({verdict})")
        if tests.hodges_ajne_m is not None:
            table.add_row("Hodges-Ajne M", _optional(tests.hodges_ajne_m, "{:g}"),
                          f"ratio = {_optional(tests.hodges_ajne_ratio)}")

    symmetry = dataset.symmetry
    if symmetry is not None:
        table.add_row("Symmetry ratio", f"{symmetry.ratio:.4f}",
                      f"{symmetry.counts_before} before / {symmetry.counts_after} after")
    return table


def peaks_table(dataset: Dataset, n: int = DEFAULT_PEAK_COUNT) -> Table:
    """Busiest hourly slots."""
    table = Table(title="Hourly Peaks")
    table.add_column("Rank", justify="right")
    table.add_column("Time Slot")
    table.add_column("Count", justify="right")
    table.add_column("Percentage", justify="right")

    for peak in top_hourly_peaks(dataset, n):
        table.add_row(str(peak.rank), peak.label, str(peak.count), f"{peak.share:.1f}%")
    return table


def blocks_table(dataset: Dataset) -> Table:
    """Four-hour blocks; the busiest block is highlighted."""
    table = Table(title="Time Block Analysis")
    table.add_column("Time Block")
    table.add_column("Count", justify="right")
    table.add_column("Percentage", justify="right")

    busiest = peak_block(dataset)
    for block in dataset.blocks:
        percentage = f"{block.percentage:g}%" if block.percentage is not None else "-"
        style = "bold cyan" if block == busiest else None
        table.add_row(block.label, str(block.count), percentage, style=style)
    return table


def days_table(dataset: Dataset) -> Optional[Table]:
    """Per-day circular statistics."""
    if not dataset.days:
        return None

    table = Table(title="Daily Statistics")
    table.add_column("Day")
    table.add_column("Mean Time")
    table.add_column("Concentration", justify="right")
    table.add_column("Variance", justify="right")
    table.add_column("Total", justify="right")

    for day in dataset.days:
        table.add_row(
            day.label,
            format_time_of_day(day.mean_time_hour),
            f"{day.concentration:.3f}",
            f"{day.variance:.3f}",
            str(day.total),
        )
    return table


def build_report_tables(dataset: Dataset,
                        peak_count: int = DEFAULT_PEAK_COUNT) -> List[Table]:
    """All report tables in display order, skipping those without data."""
    tables = [
        summary_table(dataset),
        uniformity_table(dataset),
        peaks_table(dataset, peak_count),
        blocks_table(dataset),
        days_table(dataset),
    ]
    return [table for table in tables if table is not None]


def day_findings(dataset: Dataset) -> List[str]:
    """Short sentences about the day extremes."""
    findings = []
    extremes = concentration_extremes(dataset)
    if extremes is not None:
        most, least = extremes
        findings.append(f"Day {most.label} has the highest concentration "
                        f"(least variance) in its time distribution.")
        findings.append(f"Day {least.label} has the lowest concentration "
                        f"(most variance) in its time distribution.")
    time_range = mean_time_range(dataset)
    if time_range is not None:
        earliest, latest = time_range
        findings.append(
            f"Mean times range from {format_time_of_day(earliest.mean_time_hour)} "
            f"to {format_time_of_day(latest.mean_time_hour)}."
        )
    return findings


# =============================================================================
# Output
# =============================================================================


def print_report(dataset: Dataset, console: Optional[Console] = None,
                 peak_count: int = DEFAULT_PEAK_COUNT) -> None:
    """
    Print the full statistics report.

    Args:
        dataset: Dataset to report on
        console: Target console (a new stdout Console by default)
        peak_count: Number of hourly peaks to list
    """
    console = console or Console()

    header = "Rose Chart Report"
    if dataset.data_source:
        header += f" - {dataset.data_source}"
    console.rule(header)
    if dataset.analysis_date:
        console.print(f"Analysis date: {dataset.analysis_date}")

    for table in build_report_tables(dataset, peak_count):
        console.print(table)

    for finding in day_findings(dataset):
        console.print(f"- {finding}")

    logger.info(f"Printed report for {dataset.summary.total} observations")


__all__ = [
    "summary_table",
    "uniformity_table",
    "peaks_table",
    "blocks_table",
    "days_table",
    "build_report_tables",
    "day_findings",
    "print_report",
]
