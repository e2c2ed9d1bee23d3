"""Shared pytest fixtures for bp-tracker tests."""

from datetime import datetime

import pytest

from bp_tracker.models import Measurement, Reading, ReadingInput
from bp_tracker.statistics import rounded_mean

NOW = datetime(2025, 1, 15, 12, 0, 0)


class FakeHistoryStore:
    """In-memory history store."""

    def __init__(self, readings: list[Reading] | None = None):
        self.readings: list[Reading] = []
        for reading in readings or []:
            self.insert(reading)

    def insert(self, reading: Reading) -> int:
        reading.id = len(self.readings) + 1
        self.readings.append(reading)
        return reading.id

    def most_recent(self) -> Reading | None:
        if not self.readings:
            return None
        return max(self.readings, key=lambda r: r.timestamp)

    def range_average(self, start, end):
        selected = [
            r for r in self.readings if (start is None or r.timestamp >= start) and r.timestamp < end
        ]
        if not selected:
            return None, 0
        count = len(selected)
        avg = Reading(
            timestamp=end,
            systolic=rounded_mean(sum(r.systolic for r in selected), count),
            diastolic=rounded_mean(sum(r.diastolic for r in selected), count),
            pulse=rounded_mean(sum(r.pulse for r in selected), count),
        )
        return avg, count


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'current time' used by clock fixtures."""
    return NOW


@pytest.fixture
def clock(fixed_now):
    """Clock returning a fixed time."""
    return lambda: fixed_now


@pytest.fixture
def fake_store() -> FakeHistoryStore:
    """Empty in-memory history store."""
    return FakeHistoryStore()


@pytest.fixture
def sample_reading() -> Reading:
    """Create a sample blood pressure reading for testing."""
    return Reading(
        timestamp=datetime(2025, 1, 15, 10, 30, 0),
        systolic=120,
        diastolic=78,
        pulse=67,
        classification="Elevated",
    )


@pytest.fixture
def valid_measurements() -> tuple[Measurement, ...]:
    """Three consistent measurements."""
    return (
        Measurement(118, 76, 65),
        Measurement(120, 78, 68),
        Measurement(122, 80, 70),
    )


@pytest.fixture
def valid_input(valid_measurements) -> ReadingInput:
    """Valid submission without timestamp."""
    return ReadingInput(measurements=valid_measurements)


@pytest.fixture
def multiple_readings() -> list[Reading]:
    """Create multiple readings for testing."""
    return [
        Reading(timestamp=datetime(2025, 1, 15, 8, 0, 0), systolic=118, diastolic=78, pulse=70),
        Reading(timestamp=datetime(2025, 1, 14, 12, 0, 0), systolic=122, diastolic=82, pulse=74),
        Reading(timestamp=datetime(2024, 12, 20, 20, 0, 0), systolic=140, diastolic=90, pulse=80),
        Reading(timestamp=datetime(2024, 10, 1, 9, 0, 0), systolic=150, diastolic=95, pulse=85),
    ]


@pytest.fixture
def db_path(tmp_path) -> str:
    """Create a temporary database path for testing."""
    return str(tmp_path / "test_bp_tracker.db")


@pytest.fixture
def make_store():
    """Factory for in-memory history stores pre-filled with readings."""
    return FakeHistoryStore
