"""CSV export of readings."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from bp_tracker.models import Reading

CSV_HEADERS = ["Date", "Time", "Systolic", "Diastolic", "Pulse", "Classification"]


def readings_frame(readings: Iterable[Reading]) -> pd.DataFrame:
    """Build the export table, one row per reading."""
    rows = [
        {
            "Date": r.timestamp.strftime("%Y-%m-%d"),
            "Time": r.timestamp.strftime("%H:%M:%S"),
            "Systolic": r.systolic,
            "Diastolic": r.diastolic,
            "Pulse": r.pulse,
            "Classification": r.classification,
        }
        for r in readings
    ]
    return pd.DataFrame(rows, columns=CSV_HEADERS)


def readings_to_csv(readings: Iterable[Reading]) -> str:
    """Render readings as CSV text with a header row."""
    return readings_frame(readings).to_csv(index=False, lineterminator="\n")
