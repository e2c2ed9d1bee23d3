"""Rolling statistics over the reading history.

Windows are half-open intervals ``[start, now)``. ``now`` is read once per
call so the 7-day, 30-day and all-time windows share the same end point.

Window averages are rounded half away from zero (120.5 -> 121), unlike the
submission average in ``bp_tracker.aggregation`` which truncates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from bp_tracker.models import Reading, Stats, WindowAverage

logger = logging.getLogger(__name__)

SEVEN_DAYS = timedelta(days=7)
THIRTY_DAYS = timedelta(days=30)


class HistoryQueryError(RuntimeError):
    """The history store could not answer a query."""


class HistoryStore(Protocol):
    """Capability the statistics engine needs from a reading store."""

    def insert(self, reading: Reading) -> int: ...

    def most_recent(self) -> Reading | None: ...

    def range_average(self, start: datetime | None, end: datetime) -> tuple[Reading | None, int]:
        """Average of readings with ``start <= timestamp < end``.

        ``start`` of None means no lower bound. Returns (None, 0) when no
        reading falls in the range.
        """
        ...


def rounded_mean(total: int, count: int) -> int:
    """Mean of integer samples, rounded half away from zero."""
    if count <= 0:
        raise ValueError("count must be positive")
    return int((Decimal(total) / Decimal(count)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _window(store: HistoryStore, label: str, start: datetime | None, end: datetime) -> WindowAverage:
    try:
        avg, count = store.range_average(start, end)
    except HistoryQueryError as e:
        logger.error(f"Error getting {label} average: {e}")
        raise HistoryQueryError(f"Error calculating {label} average: {e}") from e

    if count == 0:
        return WindowAverage()
    return WindowAverage(average=avg, count=count)


def compute_stats(store: HistoryStore, clock: Callable[[], datetime] = datetime.now) -> Stats:
    """Compute last reading and 7-day, 30-day and all-time averages.

    Args:
        store: History store to query
        clock: Source of the current time

    Returns:
        Stats snapshot

    Raises:
        HistoryQueryError: If any query fails. No partial Stats is returned.
    """
    now = clock()

    try:
        last_reading = store.most_recent()
    except HistoryQueryError as e:
        logger.error(f"Error getting last reading: {e}")
        raise HistoryQueryError(f"Error getting last reading: {e}") from e

    stats = Stats(
        last_reading=last_reading,
        seven_day=_window(store, "7-day", now - SEVEN_DAYS, now),
        thirty_day=_window(store, "30-day", now - THIRTY_DAYS, now),
        all_time=_window(store, "all-time", None, now),
    )

    logger.debug(
        f"Stats at {now:%Y-%m-%d %H:%M:%S}: "
        f"{stats.seven_day.count} / {stats.thirty_day.count} / {stats.all_time.count} readings"
    )
    return stats
