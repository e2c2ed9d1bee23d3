"""Reduce three measurements to one reading."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from bp_tracker.models import TIMESTAMP_FORMAT, Measurement, Reading, ReadingInput

logger = logging.getLogger(__name__)


def _truncated_mean(values: Sequence[int]) -> int:
    """Integer mean truncated toward zero (120+121+123 -> 121)."""
    total = sum(values)
    count = len(values)
    if total >= 0:
        return total // count
    return -(-total // count)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a caller-supplied timestamp.

    Returns:
        Parsed datetime, or None when the value is missing or malformed
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        logger.debug(f"Ignoring unparseable timestamp {value!r}, using current time")
        return None


def average(
    submission: ReadingInput | Sequence[Measurement],
    timestamp: str | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> Reading:
    """Average three measurements into a single unclassified reading.

    Args:
        submission: ReadingInput or the three measurements
        timestamp: Optional "YYYY-MM-DD HH:MM:SS" string. Overrides the
            ReadingInput timestamp when given.
        clock: Source of the current time when no usable timestamp is given

    Returns:
        Reading with truncated integer averages and no classification
    """
    if isinstance(submission, ReadingInput):
        measurements: Sequence[Measurement] = submission.measurements
        timestamp = timestamp or submission.timestamp
    else:
        measurements = submission

    taken_at = parse_timestamp(timestamp)
    if taken_at is None:
        taken_at = clock().replace(microsecond=0)

    return Reading(
        timestamp=taken_at,
        systolic=_truncated_mean([m.systolic for m in measurements]),
        diastolic=_truncated_mean([m.diastolic for m in measurements]),
        pulse=_truncated_mean([m.pulse for m in measurements]),
    )
