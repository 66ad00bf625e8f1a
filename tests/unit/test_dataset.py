"""
Unit tests for dataset validation and ingestion.

Tests the input contract enforced when a dataset is built and the two
JSON document layouts accepted by the loader.
"""

import json

import pytest

from rose_chart.core.dataset import (
    BlockRecord,
    Dataset,
    check_block_partition,
    dataset_from_dict,
    is_dashboard_document,
    load_dataset,
)
from rose_chart.core.errors import DatasetError, MalformedBlockSpan, RoseChartError
from tests.fixtures import (
    BLOCK_COUNTS,
    DAY_LABELS,
    HOURLY_COUNTS,
    MEAN_TIME_HOUR,
    TOTAL,
    canonical_document,
    create_sample_dataset,
    dashboard_document,
    modified_document,
)


class TestCanonicalDocument:
    """Test loading the canonical summary/hourly/blocks/days layout."""

    def test_loads_sample(self):
        """Test the sample document produces a complete dataset."""
        dataset = create_sample_dataset()

        assert dataset.summary.total == TOTAL
        assert dataset.summary.mean_time_hour == pytest.approx(MEAN_TIME_HOUR)
        assert [slot.count for slot in dataset.hourly] == HOURLY_COUNTS
        assert [block.count for block in dataset.blocks] == BLOCK_COUNTS
        assert dataset.day_count == 6
        assert dataset.day_labels == DAY_LABELS

    def test_optional_sections(self):
        dataset = create_sample_dataset()

        assert dataset.uniformity is not None
        assert dataset.uniformity.is_non_uniform()
        assert dataset.symmetry.counts_before == 262
        assert dataset.data_source == "Sample heartbeat log"
        assert dataset.analysis_date == "2024-03-01"

    def test_days_are_optional(self):
        document = modified_document(days=[])
        dataset = dataset_from_dict(document)
        assert dataset.day_count == 0
        assert dataset.day_labels == []

    def test_hourly_labels_preserved(self):
        dataset = create_sample_dataset()
        assert dataset.hourly[20].label == "8pm-9pm"
        assert dataset.hourly[20].hour_of_day == 20.0


class TestDashboardDocument:
    """Test loading the dashboard hourlyDistribution/timeBlocks layout."""

    def test_detects_layout(self):
        assert is_dashboard_document(dashboard_document())
        assert not is_dashboard_document(canonical_document())

    def test_matches_canonical(self):
        """Test both layouts describe the same distribution."""
        dashboard = dataset_from_dict(dashboard_document())
        canonical = create_sample_dataset()

        assert [s.count for s in dashboard.hourly] == [s.count for s in canonical.hourly]
        assert [s.hour_of_day for s in dashboard.hourly] == [
            s.hour_of_day for s in canonical.hourly
        ]
        assert [b.count for b in dashboard.blocks] == [b.count for b in canonical.blocks]
        assert dashboard.summary.total == canonical.summary.total
        assert dashboard.summary.mean_time_hour == pytest.approx(19 + 56 / 60)
        assert dashboard.day_labels == canonical.day_labels

    def test_block_ending_at_midnight(self):
        """Test '8pm-12am' becomes a four-hour block centred on 10pm."""
        dataset = dataset_from_dict(dashboard_document())
        last = dataset.blocks[-1]

        assert last.label == "8pm-12am"
        assert last.span == 4
        assert last.midpoint_hour == 22

    def test_extra_dashboard_statistics(self):
        dataset = dataset_from_dict(dashboard_document())

        assert dataset.circular_std_hours == pytest.approx(5.94)
        assert dataset.mean_direction_radians == pytest.approx(5.2185)
        lower, upper = dataset.confidence_interval
        assert lower == pytest.approx(19.2)
        assert upper == pytest.approx(20 + 40 / 60)

    def test_total_defaults_to_hourly_sum(self):
        document = dashboard_document()
        del document["metadata"]["totalObservations"]
        assert dataset_from_dict(document).summary.total == TOTAL

    def test_unparseable_confidence_interval_is_dropped(self):
        document = dashboard_document()
        document["summary"]["confidenceInterval"]["lowerBound"] = "dusk"
        assert dataset_from_dict(document).confidence_interval is None

    def test_invalid_day_mean_time(self):
        document = dashboard_document()
        document["dayStats"][0]["meanTime"] = "late"
        with pytest.raises(DatasetError):
            dataset_from_dict(document)


class TestInputContract:
    """Test that contract violations raise at ingestion time."""

    def test_wrong_hourly_length(self):
        document = canonical_document()
        document["hourly"] = document["hourly"][:23]
        document["summary"]["total"] = sum(s["count"] for s in document["hourly"])

        with pytest.raises(DatasetError, match="24 hourly records"):
            dataset_from_dict(document)

    def test_negative_count(self):
        """Test a negative count is rejected by the document schema."""
        document = canonical_document()
        document["hourly"][3]["count"] = -1

        with pytest.raises(DatasetError):
            dataset_from_dict(document)

    def test_hourly_sum_must_match_total(self):
        document = canonical_document()
        document["summary"]["total"] = TOTAL + 1

        with pytest.raises(DatasetError, match="sum to"):
            dataset_from_dict(document)

    def test_mean_time_out_of_range(self):
        document = canonical_document()
        document["summary"]["meanTimeHour"] = 24.0

        with pytest.raises(DatasetError):
            dataset_from_dict(document)

    def test_day_total_mismatch_is_tolerated(self, caplog):
        """Test an inconsistent day total only logs a warning."""
        document = canonical_document()
        document["days"][0]["total"] += 5

        dataset = dataset_from_dict(document)

        assert dataset.day_count == 6
        assert "hourly counts sum to" in caplog.text

    def test_not_an_object(self):
        with pytest.raises(DatasetError):
            dataset_from_dict([1, 2, 3])

    def test_errors_share_base_class(self):
        document = modified_document(hourly=[])
        with pytest.raises(RoseChartError):
            dataset_from_dict(document)

    def test_dataset_constructor_validates(self):
        """Test an invalid Dataset cannot be created directly."""
        dataset = create_sample_dataset()
        with pytest.raises(DatasetError):
            Dataset(summary=dataset.summary, hourly=dataset.hourly[:-1],
                    blocks=dataset.blocks)

    def test_hourly_records_must_cover_every_hour(self):
        """Test 24 records stacked on one clock hour are rejected."""
        document = canonical_document()
        for slot in document["hourly"]:
            slot["hourOfDay"] = 0.0

        with pytest.raises(DatasetError, match="each clock hour once"):
            dataset_from_dict(document)

    def test_duplicate_hour_in_day(self):
        document = canonical_document()
        document["days"][2]["hourly"][5]["hourOfDay"] = 6.0

        with pytest.raises(DatasetError, match=r"day '3hb'.*missing hours: \[5\]"):
            dataset_from_dict(document)


class TestBlockPartition:
    """Test the block spans partition check."""

    def _blocks(self, spans):
        return tuple(
            BlockRecord(start, end, f"b{i}", 10) for i, (start, end) in enumerate(spans)
        )

    def test_valid_partition(self):
        blocks = self._blocks([(0, 4), (4, 8), (8, 12), (12, 16), (16, 20), (20, 0)])
        check_block_partition(blocks)

    def test_partition_in_any_order(self):
        blocks = self._blocks([(20, 24), (0, 4), (8, 12), (4, 8), (16, 20), (12, 16)])
        check_block_partition(blocks)

    def test_gap(self):
        blocks = self._blocks([(0, 4), (5, 8), (8, 12), (12, 16), (16, 20), (20, 0)])
        with pytest.raises(MalformedBlockSpan):
            check_block_partition(blocks)

    def test_overlap(self):
        blocks = self._blocks([(0, 5), (4, 8), (8, 12), (12, 16), (16, 20), (20, 0)])
        with pytest.raises(MalformedBlockSpan):
            check_block_partition(blocks)

    def test_wrong_block_count(self):
        blocks = self._blocks([(0, 12), (12, 0)])
        with pytest.raises(MalformedBlockSpan):
            check_block_partition(blocks)

    def test_malformed_blocks_in_document(self):
        document = canonical_document()
        document["blocks"][1]["startHour"] = 5.0

        with pytest.raises(MalformedBlockSpan):
            dataset_from_dict(document)

    def test_uneven_spans(self):
        """Test a gap-free partition with unequal spans is rejected."""
        blocks = self._blocks([(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 24)])
        with pytest.raises(MalformedBlockSpan, match="instead of 4"):
            check_block_partition(blocks)

    def test_uneven_spans_in_document(self):
        document = canonical_document()
        document["blocks"][0]["endHour"] = 6.0
        document["blocks"][1]["startHour"] = 6.0

        with pytest.raises(MalformedBlockSpan):
            dataset_from_dict(document)


class TestLoadDataset:
    """Test loading documents from disk."""

    def test_load_canonical_file(self, tmp_path):
        path = tmp_path / "stats.json"
        path.write_text(json.dumps(canonical_document()), encoding="utf-8")

        dataset = load_dataset(path)

        assert dataset.summary.total == TOTAL

    def test_load_dashboard_file(self, tmp_path):
        path = tmp_path / "dashboard.json"
        path.write_text(json.dumps(dashboard_document()), encoding="utf-8")

        assert load_dataset(str(path)).day_count == 6

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(DatasetError, match="Invalid JSON"):
            load_dataset(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_dataset(tmp_path / "missing.json")
