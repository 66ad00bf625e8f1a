"""
Unit tests for the console report.

Reports are rendered into a recording rich Console and checked as text.
"""

import pytest
from rich.console import Console

from rose_chart.analysis.reporter import (
    blocks_table,
    build_report_tables,
    day_findings,
    peaks_table,
    print_report,
)
from tests.fixtures import create_sample_dataset, create_zero_dataset


@pytest.fixture
def dataset():
    return create_sample_dataset()


def render(dataset, **kwargs) -> str:
    """Print the report to a recording console and return its text."""
    console = Console(record=True, width=120, force_terminal=False)
    print_report(dataset, console=console, **kwargs)
    return console.export_text()


class TestReportTables:
    """Test which tables are built."""

    def test_all_tables(self, dataset):
        titles = [table.title for table in build_report_tables(dataset)]

        assert titles == [
            "Circular Statistics",
            "Uniformity & Symmetry",
            "Hourly Peaks",
            "Time Block Analysis",
            "Daily Statistics",
        ]

    def test_tables_without_day_data(self):
        titles = [table.title for table in build_report_tables(create_zero_dataset())]
        assert "Daily Statistics" not in titles

    def test_peak_count(self, dataset):
        assert peaks_table(dataset).row_count == 4
        assert peaks_table(dataset, 2).row_count == 2

    def test_blocks_table(self, dataset):
        assert blocks_table(dataset).row_count == 6


class TestFindings:
    """Test the day extreme sentences."""

    def test_findings(self, dataset):
        findings = day_findings(dataset)

        assert findings[0].startswith("Day 3hb has the highest concentration")
        assert findings[1].startswith("Day 5hb has the lowest concentration")
        assert findings[2] == "Mean times range from 3:30am to 10:45pm."

    def test_no_findings_without_days(self):
        assert day_findings(create_zero_dataset()) == []


class TestPrintReport:
    """Test the rendered report text."""

    def test_header(self, dataset):
        text = render(dataset)

        assert "Rose Chart Report - Sample heartbeat log" in text
        assert "Analysis date: 2024-03-01" in text

    def test_contents(self, dataset):
        text = render(dataset)

        assert "7:56pm" in text
        assert "8pm-9pm" in text
        assert "4pm-8pm" in text
        assert "5hb" in text
        assert "Rayleigh Z" in text
        assert "- Mean times range from 3:30am to 10:45pm." in text

    def test_peak_count_option(self, dataset):
        text = render(dataset, peak_count=1)

        assert "8pm-9pm" in text
        assert "7pm-8pm" not in text.split("Time Block Analysis")[0].split("Hourly Peaks")[1]
