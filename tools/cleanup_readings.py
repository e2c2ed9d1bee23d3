#!/usr/bin/env python3
"""Delete blood pressure readings from the database.

Usage:
    pdm run python tools/cleanup_readings.py --mode all
    pdm run python tools/cleanup_readings.py --mode before-date --date 2025-01-01
    pdm run python tools/cleanup_readings.py --mode after-date --date 2025-06-30
"""

import argparse
import logging
import sys
from datetime import datetime

# Add project root to path
sys.path.insert(0, ".")

from bp_tracker.history_store import SQLiteHistoryStore
from bp_tracker.main import load_config

MODES = ("all", "before-date", "after-date")


def cleanup(store: SQLiteHistoryStore, mode: str, date: str | None = None) -> int:
    """Delete readings according to mode.

    Args:
        store: History store
        mode: One of "all", "before-date", "after-date"
        date: YYYY-MM-DD, required for the date modes

    Returns:
        Number of deleted readings

    Raises:
        ValueError: If mode or date is invalid
    """
    if mode == "all":
        return store.clear_all()

    if mode not in MODES:
        raise ValueError(f"Invalid mode {mode!r}. Use: all, before-date, or after-date")
    if not date:
        raise ValueError("Date parameter is required for before-date/after-date modes")

    try:
        target = datetime.strptime(date, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date format. Use YYYY-MM-DD: {e}") from e

    if mode == "before-date":
        return store.delete_before(target)
    # Whole target day is kept
    return store.delete_after(target.replace(hour=23, minute=59, second=59))


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Delete readings from the database")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="all",
        help="Cleanup mode (default: all)",
    )
    parser.add_argument("--date", type=str, help="Date for cleanup (format: YYYY-MM-DD)")
    parser.add_argument(
        "--db",
        type=str,
        help="Path to SQLite database (default: database.path from config)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="config/config.yaml",
        help="Path to config file (default: config/config.yaml)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        db_path = args.db or load_config(args.config)["database"]["path"]
        deleted = cleanup(SQLiteHistoryStore(db_path), args.mode, args.date)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Successfully deleted {deleted} readings ({args.mode})")


if __name__ == "__main__":
    main()
