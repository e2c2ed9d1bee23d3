"""Tests for bp_tracker/export.py - CSV export."""

import csv
import io
from datetime import datetime

from bp_tracker.export import CSV_HEADERS, readings_frame, readings_to_csv
from bp_tracker.models import Reading


class TestReadingsToCsv:
    """Tests for readings_to_csv."""

    def test_empty_has_header_only(self):
        """Test no readings gives just the header row."""
        rows = list(csv.reader(io.StringIO(readings_to_csv([]))))
        assert rows == [CSV_HEADERS]

    def test_reading_row(self, sample_reading):
        """Test a reading is split into date and time columns."""
        rows = list(csv.reader(io.StringIO(readings_to_csv([sample_reading]))))
        assert rows[1] == ["2025-01-15", "10:30:00", "120", "78", "67", "Elevated"]

    def test_label_with_spaces(self):
        """Test multi-word labels survive as one column."""
        reading = Reading(
            timestamp=datetime(2025, 1, 1, 7, 5, 9),
            systolic=150,
            diastolic=95,
            pulse=80,
            classification="Hypertension Stage 2",
        )
        rows = list(csv.reader(io.StringIO(readings_to_csv([reading]))))
        assert rows[1][5] == "Hypertension Stage 2"
        assert rows[1][1] == "07:05:09"


class TestReadingsFrame:
    """Tests for readings_frame."""

    def test_columns_and_values(self, multiple_readings):
        """Test one row per reading with export columns."""
        df = readings_frame(multiple_readings)

        assert list(df.columns) == CSV_HEADERS
        assert len(df) == 4
        assert df.iloc[2]["Date"] == "2024-12-20"
        assert df.iloc[2]["Systolic"] == 140

    def test_empty(self):
        """Test empty input keeps the columns."""
        df = readings_frame([])
        assert df.empty
        assert list(df.columns) == CSV_HEADERS
