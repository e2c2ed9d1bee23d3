"""Blood pressure tracking core.

Validates three-measurement submissions, averages and classifies them,
and computes rolling statistics over the reading history.
"""

from bp_tracker.aggregation import average
from bp_tracker.classification import BPCategory, classify, recommend
from bp_tracker.models import Measurement, Reading, ReadingInput, Stats, WindowAverage
from bp_tracker.statistics import HistoryQueryError, HistoryStore, compute_stats
from bp_tracker.validation import ValidationFailure, Violation, ensure_valid, validate

__all__ = [
    "BPCategory",
    "HistoryQueryError",
    "HistoryStore",
    "Measurement",
    "Reading",
    "ReadingInput",
    "Stats",
    "ValidationFailure",
    "Violation",
    "WindowAverage",
    "average",
    "classify",
    "compute_stats",
    "ensure_valid",
    "recommend",
    "validate",
]
