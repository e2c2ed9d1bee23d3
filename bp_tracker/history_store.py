"""SQLite-backed store for blood pressure readings.

Implements the ``HistoryStore`` capability used by the statistics engine and
adds the listing, deletion and seeding operations used by the CLI, web UI
and tools. Each operation opens its own short-lived connection.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from bp_tracker.models import TIMESTAMP_FORMAT, Reading
from bp_tracker.statistics import HistoryQueryError, rounded_mean

logger = logging.getLogger(__name__)

_COLUMNS = "id, timestamp, systolic, diastolic, pulse, classification"


class ReadingNotFoundError(LookupError):
    """No reading exists with the requested id."""


def _format_ts(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def _format_bound(value: datetime) -> str:
    # Keeps microseconds: "12:00:00" < "12:00:00.500000" still holds as text
    return value.isoformat(sep=" ")


def _row_to_reading(row: sqlite3.Row) -> Reading:
    return Reading(
        id=row["id"],
        timestamp=datetime.strptime(row["timestamp"], TIMESTAMP_FORMAT),
        systolic=row["systolic"],
        diastolic=row["diastolic"],
        pulse=row["pulse"],
        classification=row["classification"] or "",
    )


class SQLiteHistoryStore:
    """Persist readings in SQLite and answer history queries.

    Timestamps are stored as "YYYY-MM-DD HH:MM:SS" text, so string
    comparison in SQL matches chronological order. Query bounds are bound at
    full precision so a bound inside a second still orders correctly.
    """

    def __init__(self, db_path: str = "data/bp_tracker.db"):
        """Initialize the store.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS readings (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        timestamp TEXT NOT NULL,
                        systolic INTEGER NOT NULL,
                        diastolic INTEGER NOT NULL,
                        pulse INTEGER NOT NULL,
                        classification TEXT NOT NULL DEFAULT ''
                    )
                """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_readings_timestamp ON readings(timestamp)"
                )
                conn.commit()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error initializing database {self.db_path}: {e}") from e
        logger.debug(f"Database initialized at {self.db_path}")

    def insert(self, reading: Reading) -> int:
        """Store a reading.

        Args:
            reading: Reading to store. Its id is ignored.

        Returns:
            Id assigned by the database
        """
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO readings (timestamp, systolic, diastolic, pulse, classification)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        _format_ts(reading.timestamp),
                        reading.systolic,
                        reading.diastolic,
                        reading.pulse,
                        reading.classification,
                    ),
                )
                conn.commit()
                reading_id = cursor.lastrowid
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error saving reading: {e}") from e

        logger.debug(f"Saved reading {reading_id}: {reading}")
        return int(reading_id)

    def most_recent(self) -> Reading | None:
        """Get the reading with the latest timestamp."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM readings ORDER BY timestamp DESC, id DESC LIMIT 1"  # nosec B608
                ).fetchone()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error getting last reading: {e}") from e

        return _row_to_reading(row) if row else None

    def range_average(self, start: datetime | None, end: datetime) -> tuple[Reading | None, int]:
        """Average readings with ``start <= timestamp < end``.

        Args:
            start: Inclusive lower bound, None for no lower bound
            end: Exclusive upper bound

        Returns:
            Tuple of (averaged reading or None, number of readings)
        """
        query = (
            "SELECT SUM(systolic) AS sys, SUM(diastolic) AS dia, SUM(pulse) AS pulse, "
            "COUNT(*) AS n FROM readings WHERE timestamp < ?"
        )
        params: list[str] = [_format_bound(end)]
        if start is not None:
            query += " AND timestamp >= ?"
            params.append(_format_bound(start))

        try:
            with self._connect() as conn:
                row = conn.execute(query, params).fetchone()
        except sqlite3.Error as e:
            raise HistoryQueryError(
                f"Error executing average query for range {start} to {end}: {e}"
            ) from e

        count = row["n"]
        if count == 0:
            return None, 0

        avg = Reading(
            timestamp=end,
            systolic=rounded_mean(row["sys"], count),
            diastolic=rounded_mean(row["dia"], count),
            pulse=rounded_mean(row["pulse"], count),
        )
        return avg, count

    def get(self, reading_id: int) -> Reading | None:
        """Get a reading by id."""
        try:
            with self._connect() as conn:
                row = conn.execute(
                    f"SELECT {_COLUMNS} FROM readings WHERE id = ?",  # nosec B608
                    (reading_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error getting reading {reading_id}: {e}") from e

        return _row_to_reading(row) if row else None

    def get_all(
        self,
        limit: int | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[Reading]:
        """Get readings, newest first.

        Args:
            limit: Maximum number of readings, None for all
            start_date: Only readings at or after this time
            end_date: Only readings at or before this time

        Returns:
            List of readings
        """
        query = f"SELECT {_COLUMNS} FROM readings WHERE 1=1"  # nosec B608
        params: list = []

        if start_date is not None:
            query += " AND timestamp >= ?"
            params.append(_format_bound(start_date))

        if end_date is not None:
            query += " AND timestamp <= ?"
            params.append(_format_bound(end_date))

        query += " ORDER BY timestamp DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        try:
            with self._connect() as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error querying readings: {e}") from e

        return [_row_to_reading(row) for row in rows]

    def delete_reading(self, reading_id: int) -> None:
        """Delete a reading by id.

        Raises:
            ReadingNotFoundError: If no reading has this id
        """
        try:
            with self._connect() as conn:
                cursor = conn.execute("DELETE FROM readings WHERE id = ?", (reading_id,))
                deleted = cursor.rowcount
                conn.commit()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error deleting reading {reading_id}: {e}") from e

        if deleted == 0:
            raise ReadingNotFoundError(f"No reading found with id {reading_id} to delete")

        logger.info(f"Deleted reading with id {reading_id}")

    def _delete_where(self, clause: str, params: tuple) -> int:
        try:
            with self._connect() as conn:
                cursor = conn.execute(f"DELETE FROM readings {clause}", params)  # nosec B608
                deleted = cursor.rowcount
                conn.commit()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error deleting readings: {e}") from e
        return deleted

    def delete_before(self, date: datetime) -> int:
        """Delete readings taken before the given time.

        Returns:
            Number of deleted readings
        """
        deleted = self._delete_where("WHERE timestamp < ?", (_format_bound(date),))
        logger.info(f"Deleted {deleted} readings before {date:%Y-%m-%d}")
        return deleted

    def delete_after(self, date: datetime) -> int:
        """Delete readings taken after the given time.

        Returns:
            Number of deleted readings
        """
        deleted = self._delete_where("WHERE timestamp > ?", (_format_bound(date),))
        logger.info(f"Deleted {deleted} readings after {date:%Y-%m-%d}")
        return deleted

    def clear_all(self) -> int:
        """Clear all readings from database.

        Returns:
            Number of deleted readings
        """
        deleted = self._delete_where("", ())
        logger.warning(f"Cleared all {deleted} readings from database")
        return deleted

    def seed(self, readings: Iterable[Reading]) -> int:
        """Insert many readings in a single transaction.

        Nothing is stored if any insert fails.

        Returns:
            Number of inserted readings
        """
        rows = [
            (_format_ts(r.timestamp), r.systolic, r.diastolic, r.pulse, r.classification)
            for r in readings
        ]
        try:
            with self._connect() as conn:
                conn.executemany(
                    """
                    INSERT INTO readings (timestamp, systolic, diastolic, pulse, classification)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    rows,
                )
                conn.commit()
        except sqlite3.Error as e:
            raise HistoryQueryError(f"Error seeding readings: {e}") from e

        logger.info(f"Seeded {len(rows)} readings into the database")
        return len(rows)
