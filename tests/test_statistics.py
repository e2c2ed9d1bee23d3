"""Tests for bp_tracker/statistics.py - windowed statistics."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from bp_tracker.models import Reading
from bp_tracker.statistics import (
    HistoryQueryError,
    compute_stats,
    rounded_mean,
)


def _reading(ts: datetime, systolic=120, diastolic=80, pulse=70) -> Reading:
    return Reading(timestamp=ts, systolic=systolic, diastolic=diastolic, pulse=pulse)


class TestRoundedMean:
    """Tests for half-away-from-zero rounding."""

    @pytest.mark.parametrize(
        "total,count,expected",
        [
            (240, 2, 120),
            (241, 2, 121),  # 120.5 rounds up, not to even
            (239, 2, 120),  # 119.5 rounds up
            (361, 3, 120),  # 120.33
            (362, 3, 121),  # 120.67
            (530, 4, 133),  # 132.5
            (-241, 2, -121),
        ],
    )
    def test_rounding(self, total, count, expected):
        """Test rounding of means."""
        assert rounded_mean(total, count) == expected

    def test_zero_count_rejected(self):
        """Test empty sample has no mean."""
        with pytest.raises(ValueError):
            rounded_mean(0, 0)


class TestEmptyHistory:
    """Tests for stats on an empty store."""

    def test_empty_history(self, fake_store, clock):
        """Test no last reading and all windows empty."""
        stats = compute_stats(fake_store, clock=clock)

        assert stats.last_reading is None
        for window in (stats.seven_day, stats.thirty_day, stats.all_time):
            assert window.average is None
            assert window.count == 0


class TestSingleReading:
    """Tests for a history with one reading."""

    def test_single_reading_in_all_windows(self, make_store, clock, fixed_now):
        """Test one recent reading shows up identically in every window."""
        reading = _reading(fixed_now - timedelta(hours=2), 131, 84, 72)
        store = make_store([reading])

        stats = compute_stats(store, clock=clock)

        assert stats.last_reading is reading
        for window in (stats.seven_day, stats.thirty_day, stats.all_time):
            assert window.count == 1
            assert (window.average.systolic, window.average.diastolic, window.average.pulse) == (
                131,
                84,
                72,
            )
            assert window.average.classification == ""


class TestWindows:
    """Tests for 7-day, 30-day and all-time windows."""

    def test_multiple_readings(self, make_store, multiple_readings, clock):
        """Test each window averages only its own readings."""
        stats = compute_stats(make_store(multiple_readings), clock=clock)

        assert stats.last_reading.timestamp == datetime(2025, 1, 15, 8, 0, 0)

        assert stats.seven_day.count == 2
        assert stats.seven_day.average.systolic == 120
        assert stats.seven_day.average.diastolic == 80
        assert stats.seven_day.average.pulse == 72

        assert stats.thirty_day.count == 3
        assert stats.thirty_day.average.systolic == 127  # 126.67
        assert stats.thirty_day.average.diastolic == 83  # 83.33
        assert stats.thirty_day.average.pulse == 75  # 74.67

        assert stats.all_time.count == 4
        assert stats.all_time.average.systolic == 133  # 132.5
        assert stats.all_time.average.diastolic == 86  # 86.25
        assert stats.all_time.average.pulse == 77  # 77.25

    def test_seven_day_start_is_inclusive(self, make_store, clock, fixed_now):
        """Test reading exactly at now - 7d is inside the 7-day window."""
        store = make_store([_reading(fixed_now - timedelta(days=7))])
        assert compute_stats(store, clock=clock).seven_day.count == 1

    def test_just_before_seven_day_start_is_excluded(self, make_store, clock, fixed_now):
        """Test reading one second before the window start is outside."""
        store = make_store([_reading(fixed_now - timedelta(days=7, seconds=1))])
        stats = compute_stats(store, clock=clock)

        assert stats.seven_day.count == 0
        assert stats.seven_day.average is None
        assert stats.thirty_day.count == 1

    def test_thirty_day_start_is_inclusive(self, make_store, clock, fixed_now):
        """Test reading exactly at now - 30d is inside the 30-day window."""
        store = make_store([_reading(fixed_now - timedelta(days=30))])
        stats = compute_stats(store, clock=clock)

        assert stats.seven_day.count == 0
        assert stats.thirty_day.count == 1

    def test_end_is_exclusive(self, make_store, clock, fixed_now):
        """Test reading exactly at now is outside every window."""
        reading = _reading(fixed_now)
        stats = compute_stats(make_store([reading]), clock=clock)

        assert stats.last_reading is reading
        assert stats.seven_day.count == 0
        assert stats.thirty_day.count == 0
        assert stats.all_time.count == 0
        assert stats.all_time.average is None

    def test_just_before_end_is_included(self, make_store, clock, fixed_now):
        """Test reading one second before now is inside every window."""
        store = make_store([_reading(fixed_now - timedelta(seconds=1))])
        stats = compute_stats(store, clock=clock)

        assert stats.seven_day.count == 1
        assert stats.all_time.count == 1

    def test_old_reading_only_in_all_time(self, make_store, clock, fixed_now):
        """Test reading older than 30 days only counts all-time."""
        store = make_store([_reading(fixed_now - timedelta(days=400), 150, 95, 80)])
        stats = compute_stats(store, clock=clock)

        assert stats.seven_day.average is None
        assert stats.thirty_day.average is None
        assert stats.all_time.count == 1
        assert stats.all_time.average.systolic == 150


class TestClockUsage:
    """Tests for the single 'now' per call."""

    def test_clock_read_once(self, fake_store, fixed_now):
        """Test all windows share one captured time."""
        clock = MagicMock(return_value=fixed_now)
        compute_stats(fake_store, clock=clock)
        assert clock.call_count == 1

    def test_window_boundaries_share_now(self, fixed_now):
        """Test every range query ends at the same instant."""
        store = MagicMock()
        store.most_recent.return_value = None
        store.range_average.return_value = (None, 0)

        compute_stats(store, clock=lambda: fixed_now)

        calls = store.range_average.call_args_list
        assert [c.args for c in calls] == [
            (fixed_now - timedelta(days=7), fixed_now),
            (fixed_now - timedelta(days=30), fixed_now),
            (None, fixed_now),
        ]


class TestQueryFailures:
    """Tests for store failures."""

    def test_window_failure_fails_whole_computation(self, fixed_now, sample_reading):
        """Test a failing window query raises instead of returning partial stats."""
        store = MagicMock()
        store.most_recent.return_value = sample_reading
        store.range_average.side_effect = [
            (sample_reading, 1),
            HistoryQueryError("connection lost"),
            (sample_reading, 1),
        ]

        with pytest.raises(HistoryQueryError, match="30-day"):
            compute_stats(store, clock=lambda: fixed_now)

    def test_most_recent_failure(self, fixed_now):
        """Test last-reading query failure propagates."""
        store = MagicMock()
        store.most_recent.side_effect = HistoryQueryError("disk I/O error")

        with pytest.raises(HistoryQueryError, match="last reading"):
            compute_stats(store, clock=lambda: fixed_now)

        store.range_average.assert_not_called()

    def test_count_zero_discards_store_average(self, fixed_now, sample_reading):
        """Test an empty window never reports an average."""
        store = MagicMock()
        store.most_recent.return_value = None
        store.range_average.return_value = (sample_reading, 0)

        stats = compute_stats(store, clock=lambda: fixed_now)
        assert stats.all_time.average is None
