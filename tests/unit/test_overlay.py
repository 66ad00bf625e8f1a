"""
Unit tests for overlay composition.

Tests the title, legend, tooltip, detail panel, mean direction and
statistics summary derived from a resolved view and interaction state.
"""

import pytest

from rose_chart.core.colors import ColorScheme
from rose_chart.core.dataset import dataset_from_dict
from rose_chart.core.overlay import (
    VERDICT_NON_UNIFORM,
    VERDICT_UNAVAILABLE,
    VERDICT_UNIFORM,
    LegendSwatch,
    chart_title,
    compose_overlay,
    share_of_total,
    uniformity_verdict,
)
from rose_chart.core.state import InteractionState
from rose_chart.core.view_resolver import ViewMode, resolve
from tests.fixtures import (
    DAY_LABELS,
    create_sample_dataset,
    create_zero_dataset,
    day_counts,
    modified_document,
)


@pytest.fixture
def dataset():
    return create_sample_dataset()


def overlay_for(dataset, view_mode, **state):
    """Compose the overlay for a view with the given interaction state."""
    state = InteractionState(view_mode=view_mode, **state)
    return compose_overlay(dataset, resolve(dataset, view_mode), state)


class TestTitle:
    """Test chart titles per view."""

    @pytest.mark.parametrize("view_mode,title", [
        (ViewMode.hourly(), "Overall Activity by Hour"),
        (ViewMode.blocks(), "Activity by 4-Hour Blocks"),
        (ViewMode.daily(), "Activity by Hour (All Days)"),
        (ViewMode.daily(4), "Activity by Hour (5hb)"),
    ])
    def test_titles(self, dataset, view_mode, title):
        assert chart_title(resolve(dataset, view_mode)) == title


class TestLegend:
    """Test legend entries."""

    def test_hourly_legend(self, dataset):
        legend = overlay_for(dataset, ViewMode.hourly()).legend

        assert legend.labels == ("Data point", "Mean direction", "Selected hour",
                                 "Count levels")
        assert legend.concentration_text == "R=0.30"

    def test_blocks_legend_has_no_mean_direction(self, dataset):
        legend = overlay_for(dataset, ViewMode.blocks()).legend

        assert legend.labels == ("Data point", "Selected block", "Count levels")

    def test_highlight_swatch_follows_scheme(self, dataset):
        legend = overlay_for(dataset, ViewMode.hourly(),
                             color_scheme=ColorScheme.ORANGES).legend
        highlight = [e for e in legend.entries if e.swatch is LegendSwatch.HIGHLIGHT][0]

        assert highlight.color == "#ff5722"

    def test_daily_concentration(self, dataset):
        legend = overlay_for(dataset, ViewMode.daily(4)).legend
        assert legend.concentration_text == "R=0.06"


class TestTooltip:
    """Test hover tooltips."""

    def test_no_hover(self, dataset):
        assert overlay_for(dataset, ViewMode.hourly()).tooltip is None

    def test_hourly_tooltip(self, dataset):
        tooltip = overlay_for(dataset, ViewMode.hourly(), hovered_index=20).tooltip

        assert tooltip.slot_index == 20
        assert tooltip.title == "8pm-9pm"
        assert tooltip.body == "49 occurrences"
        assert tooltip.hint == "Click for details"

    def test_block_tooltip_has_percentage(self, dataset):
        tooltip = overlay_for(dataset, ViewMode.blocks(), hovered_index=4).tooltip

        assert tooltip.title == "4pm-8pm"
        assert tooltip.body == "150 occurrences (26.9%)"

    def test_out_of_range_hover(self, dataset):
        assert overlay_for(dataset, ViewMode.blocks(), hovered_index=10).tooltip is None


class TestDetailPanel:
    """Test the selection detail content."""

    def test_no_selection(self, dataset):
        assert overlay_for(dataset, ViewMode.hourly()).detail is None

    def test_hourly_detail(self, dataset):
        detail = overlay_for(dataset, ViewMode.hourly(), selected_index=20).detail

        assert detail.title == "8pm-9pm Details"
        assert detail.count_text == "Total occurrences: 49"
        assert detail.share == pytest.approx(8.8)
        assert detail.share_text == "This represents 8.8% of all activity"

    def test_hourly_day_breakdown(self, dataset):
        """Test the breakdown lists every day's count for the same hour."""
        detail = overlay_for(dataset, ViewMode.hourly(), selected_index=20).detail

        assert [e.day_label for e in detail.day_breakdown] == DAY_LABELS
        assert [e.count for e in detail.day_breakdown] == [
            day_counts(d)[20] for d in range(6)
        ]
        assert detail.day_breakdown[0].text == "4 occurrences"

    def test_inactive_days_flagged(self, dataset):
        detail = overlay_for(dataset, ViewMode.hourly(), selected_index=0).detail

        assert all(not e.has_activity for e in detail.day_breakdown)
        assert detail.day_breakdown[0].text == "0 occurrences"

    def test_single_day_detail(self, dataset):
        """Test shares in a daily view are relative to that day's total."""
        detail = overlay_for(dataset, ViewMode.daily(4), selected_index=20).detail

        assert detail.count == day_counts(4)[20]
        assert detail.share == pytest.approx(share_of_total(3, 72))
        assert detail.day_breakdown == ()

    def test_block_detail(self, dataset):
        detail = overlay_for(dataset, ViewMode.blocks(), selected_index=4).detail

        assert detail.title == "4pm-8pm Details"
        assert detail.share == pytest.approx(26.9)
        assert detail.day_breakdown == ()


class TestMeanDirection:
    """Test the mean-direction indicator."""

    def test_hourly(self, dataset):
        mean = overlay_for(dataset, ViewMode.hourly()).mean_direction

        assert mean.hour == pytest.approx(19.9333)
        assert mean.label == "7:56pm"

    def test_single_day(self, dataset):
        mean = overlay_for(dataset, ViewMode.daily(4)).mean_direction
        assert mean.label == "3:30am"

    def test_hidden_for_blocks(self, dataset):
        assert overlay_for(dataset, ViewMode.blocks()).mean_direction is None


class TestStats:
    """Test the statistics summary."""

    def test_hourly_stats(self, dataset):
        stats = overlay_for(dataset, ViewMode.hourly()).stats

        assert stats.mean_time == "7:56pm"
        assert stats.concentration == "0.298"
        assert stats.variance == "0.702"
        assert stats.total == "558"
        assert stats.peak_hour == "8pm-9pm (49)"
        assert stats.peak_block == "4pm-8pm"
        assert stats.uniformity == VERDICT_NON_UNIFORM

    def test_single_day_stats(self, dataset):
        stats = overlay_for(dataset, ViewMode.daily(4)).stats

        assert stats.concentration == "0.061"
        assert stats.total == "72"
        assert stats.mean_time == "3:30am"

    def test_uniform_verdict(self):
        document = modified_document(uniformityTests={
            "rayleigh": {"zStatistic": 1.2, "pValue": 0.3},
        })
        assert uniformity_verdict(dataset_from_dict(document)) == VERDICT_UNIFORM

    def test_verdict_unavailable(self):
        assert uniformity_verdict(create_zero_dataset()) == VERDICT_UNAVAILABLE


class TestShareOfTotal:

    def test_rounding(self):
        assert share_of_total(49, 558) == 8.8
        assert share_of_total(1, 3) == 33.3

    def test_zero_total(self):
        assert share_of_total(0, 0) == 0.0
