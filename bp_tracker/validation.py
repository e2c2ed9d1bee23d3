"""Validation of three-measurement submissions.

Each measurement is checked on its own first (ranges and systolic above
diastolic). Only when all of them pass are the three compared with each
other, so consistency errors are never reported against bad data.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from bp_tracker.models import Measurement

logger = logging.getLogger(__name__)

# Plausible ranges for a single measurement
MIN_SYSTOLIC = 60
MAX_SYSTOLIC = 250
MIN_DIASTOLIC = 40
MAX_DIASTOLIC = 150
MIN_PULSE = 40
MAX_PULSE = 200

# Maximum spread allowed between the three measurements (mmHg)
MAX_READING_DIFF = 15


@dataclass(frozen=True)
class Violation:
    """A single named validation failure."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationFailure(ValueError):
    """Raised when a submission has one or more violations."""

    def __init__(self, violations: Sequence[Violation]):
        self.violations = list(violations)
        super().__init__(str(self))

    def as_dict(self) -> dict[str, str]:
        """Map field label to message."""
        return {v.field: v.message for v in self.violations}

    def __str__(self) -> str:
        lines = ["Validation errors:"]
        lines.extend(f"- {v}" for v in self.violations)
        return "\n".join(lines)


def _validate_single(measurement: Measurement, number: int) -> list[Violation]:
    """Check one measurement against the plausible ranges."""
    violations = []

    if not MIN_SYSTOLIC <= measurement.systolic <= MAX_SYSTOLIC:
        violations.append(
            Violation(
                f"Systolic Reading {number}",
                f"must be between {MIN_SYSTOLIC} and {MAX_SYSTOLIC}",
            )
        )

    if not MIN_DIASTOLIC <= measurement.diastolic <= MAX_DIASTOLIC:
        violations.append(
            Violation(
                f"Diastolic Reading {number}",
                f"must be between {MIN_DIASTOLIC} and {MAX_DIASTOLIC}",
            )
        )

    if not MIN_PULSE <= measurement.pulse <= MAX_PULSE:
        violations.append(
            Violation(
                f"Pulse Reading {number}",
                f"must be between {MIN_PULSE} and {MAX_PULSE}",
            )
        )

    if measurement.systolic <= measurement.diastolic:
        violations.append(
            Violation(
                f"Reading {number}",
                "systolic pressure must be higher than diastolic pressure",
            )
        )

    return violations


def _spread(values: Sequence[int]) -> int:
    return max(values) - min(values)


def validate(measurements: Sequence[Measurement]) -> list[Violation]:
    """Validate three consecutive measurements.

    Args:
        measurements: The three measurements of one submission

    Returns:
        List of violations, empty if the submission is valid
    """
    if len(measurements) != 3:
        raise ValueError(f"Expected 3 measurements, got {len(measurements)}")

    violations: list[Violation] = []
    for number, measurement in enumerate(measurements, 1):
        violations.extend(_validate_single(measurement, number))

    if not violations:
        diff_message = f"difference between readings cannot exceed {MAX_READING_DIFF} mmHg"

        if _spread([m.systolic for m in measurements]) > MAX_READING_DIFF:
            violations.append(Violation("Systolic Readings", diff_message))

        if _spread([m.diastolic for m in measurements]) > MAX_READING_DIFF:
            violations.append(Violation("Diastolic Readings", diff_message))

    if violations:
        logger.debug(f"Submission rejected with {len(violations)} violation(s)")

    return violations


def ensure_valid(measurements: Sequence[Measurement]) -> None:
    """Raise ValidationFailure if the measurements do not validate."""
    violations = validate(measurements)
    if violations:
        raise ValidationFailure(violations)
