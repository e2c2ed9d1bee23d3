"""Data models for BP Tracker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Timestamp format accepted from callers and used for storage
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Reading:
    """One blood pressure data point, usually the average of three measurements."""

    timestamp: datetime
    systolic: int  # mmHg
    diastolic: int  # mmHg
    pulse: int  # bpm
    classification: str = ""  # category label, set after classification
    id: int | None = None  # assigned by the history store

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "classification": self.classification,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        text = f"BP: {self.systolic}/{self.diastolic} mmHg, Pulse: {self.pulse} bpm"
        if self.classification:
            text += f", Category: {self.classification}"
        return text


@dataclass(frozen=True)
class Measurement:
    """A single raw measurement as taken from the cuff."""

    systolic: int
    diastolic: int
    pulse: int


@dataclass
class ReadingInput:
    """Submission of three consecutive measurements.

    Only lives for the duration of one submission; the store never sees it.
    """

    measurements: tuple[Measurement, ...]
    timestamp: str | None = None

    def __post_init__(self) -> None:
        self.measurements = tuple(self.measurements)
        if len(self.measurements) != 3:
            raise ValueError(f"Expected 3 measurements, got {len(self.measurements)}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReadingInput:
        """Build from a flat submission payload.

        Args:
            data: Mapping with systolic1..3, diastolic1..3, pulse1..3 and
                an optional timestamp

        Returns:
            ReadingInput instance

        Raises:
            ValueError: If a value is missing or not an integer
        """
        measurements = []
        for n in (1, 2, 3):
            try:
                measurements.append(
                    Measurement(
                        systolic=int(data[f"systolic{n}"]),
                        diastolic=int(data[f"diastolic{n}"]),
                        pulse=int(data[f"pulse{n}"]),
                    )
                )
            except KeyError as e:
                raise ValueError(f"Missing field {e.args[0]}") from e
            except (TypeError, ValueError) as e:
                raise ValueError(f"Reading {n} values must be integers") from e

        return cls(measurements=tuple(measurements), timestamp=data.get("timestamp") or None)


@dataclass
class WindowAverage:
    """Averaged reading over a time window.

    ``average`` is None when the window holds no readings, so an empty
    window never looks like a zero-valued one.
    """

    average: Reading | None = None
    count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.count == 0


@dataclass
class Stats:
    """Snapshot of the reading history, recomputed on demand."""

    last_reading: Reading | None = None
    seven_day: WindowAverage = field(default_factory=WindowAverage)
    thirty_day: WindowAverage = field(default_factory=WindowAverage)
    all_time: WindowAverage = field(default_factory=WindowAverage)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""

        def _avg(window: WindowAverage) -> dict[str, Any] | None:
            return window.average.to_dict() if window.average else None

        return {
            "last_reading": self.last_reading.to_dict() if self.last_reading else None,
            "seven_day_avg": _avg(self.seven_day),
            "seven_day_count": self.seven_day.count,
            "thirty_day_avg": _avg(self.thirty_day),
            "thirty_day_count": self.thirty_day.count,
            "all_time_avg": _avg(self.all_time),
            "all_time_count": self.all_time.count,
        }
