"""
Unit tests for clock label parsing and formatting.
"""

import pytest

from rose_chart.core.timefmt import (
    block_label,
    format_hour,
    format_time_of_day,
    parse_clock_hour,
    parse_slot_range,
    parse_time_of_day,
    slot_label,
)


class TestFormatHour:
    """Test 12-hour clock labels."""

    @pytest.mark.parametrize("hour,expected", [
        (0, "12am"),
        (1, "1am"),
        (11, "11am"),
        (12, "12pm"),
        (13, "1pm"),
        (20, "8pm"),
        (23, "11pm"),
        (24, "12am"),
    ])
    def test_format_hour(self, hour, expected):
        """Test whole hours map to clock labels."""
        assert format_hour(hour) == expected

    def test_slot_label_wraps_at_midnight(self):
        """Test the last slot of the day ends at 12am."""
        assert slot_label(20) == "8pm-9pm"
        assert slot_label(23) == "11pm-12am"

    def test_block_label(self):
        assert block_label(20, 0) == "8pm-12am"
        assert block_label(8, 12) == "8am-12pm"


class TestParsing:
    """Test parsing of labels produced by the statistics source."""

    @pytest.mark.parametrize("text,expected", [
        ("12am", 0),
        ("8pm", 20),
        ("12pm", 12),
        (" 9AM ", 9),
        ("14", 14),
    ])
    def test_parse_clock_hour(self, text, expected):
        assert parse_clock_hour(text) == expected

    @pytest.mark.parametrize("text", ["13pm", "0am", "25", "noon", ""])
    def test_parse_clock_hour_rejects_invalid(self, text):
        """Test invalid clock hours raise ValueError."""
        with pytest.raises(ValueError):
            parse_clock_hour(text)

    def test_parse_slot_range(self):
        """Test a block ending at midnight yields end hour 0."""
        assert parse_slot_range("8pm-12am") == (20, 0)
        assert parse_slot_range("4am-8am") == (4, 8)

    def test_parse_slot_range_rejects_single_hour(self):
        with pytest.raises(ValueError):
            parse_slot_range("8pm")

    def test_parse_time_of_day(self):
        assert parse_time_of_day("7:56pm") == pytest.approx(19 + 56 / 60)
        assert parse_time_of_day("12:30am") == pytest.approx(0.5)
        assert parse_time_of_day("19:56") == pytest.approx(19 + 56 / 60)

    @pytest.mark.parametrize("text", ["7:60pm", "24:00", "7pm", "seven"])
    def test_parse_time_of_day_rejects_invalid(self, text):
        with pytest.raises(ValueError):
            parse_time_of_day(text)


class TestFormatTimeOfDay:
    """Test decimal hours to clock time."""

    def test_rounds_to_minute(self):
        assert format_time_of_day(19.9333) == "7:56pm"

    def test_midnight_and_noon(self):
        assert format_time_of_day(0.0) == "12:00am"
        assert format_time_of_day(12.0) == "12:00pm"

    def test_rounding_wraps_past_midnight(self):
        """Test a time that rounds up to 24:00 wraps to 12:00am."""
        assert format_time_of_day(23.9999) == "12:00am"

    def test_parse_format_agree(self):
        assert format_time_of_day(parse_time_of_day("3:30am")) == "3:30am"
