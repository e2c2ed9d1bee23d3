#!/usr/bin/env python3
"""Seed the database with generated blood pressure readings.

This script:
1. Generates 1-3 readings per day for the last N days
2. Classifies each reading
3. Saves them to the SQLite database in one transaction

Usage:
    pdm run python tools/seed_readings.py
    pdm run python tools/seed_readings.py --days 90
    pdm run python tools/seed_readings.py --dry-run
"""

import argparse
import logging
import random
import sys
from datetime import datetime, timedelta

# Add project root to path
sys.path.insert(0, ".")

from bp_tracker.classification import classify
from bp_tracker.history_store import SQLiteHistoryStore
from bp_tracker.main import load_config
from bp_tracker.models import Reading


def generate_readings(
    days: int,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> list[Reading]:
    """Generate realistic readings for the last ``days`` days.

    Args:
        days: Number of days of data
        now: End of the generated period (default: current time)
        rng: Random generator, for reproducible output

    Returns:
        Classified readings, oldest first
    """
    rng = rng or random.Random()
    now = (now or datetime.now()).replace(microsecond=0)
    start_date = now - timedelta(days=days)

    readings = []
    for day in range(days):
        for i in range(rng.randint(1, 3)):
            systolic = 110 + rng.randrange(40)  # 110-149
            diastolic = 70 + rng.randrange(20)  # 70-89
            pulse = 60 + rng.randrange(30)  # 60-89
            readings.append(
                Reading(
                    timestamp=start_date + timedelta(days=day, hours=i * 4),
                    systolic=systolic,
                    diastolic=diastolic,
                    pulse=pulse,
                    classification=classify(systolic, diastolic).label,
                )
            )
    return readings


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed database with sample readings")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="config/config.yaml",
        help="Path to config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--days",
        type=int,
        help="Number of days of data to generate (default: seed.days from config)",
    )
    parser.add_argument(
        "--db",
        type=str,
        help="Path to SQLite database (default: database.path from config)",
    )
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print generated readings without saving",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config(args.config)
    days = args.days or config["seed"]["days"]
    db_path = args.db or config["database"]["path"]

    readings = generate_readings(days)

    if args.dry_run:
        for r in readings:
            print(f"  {r.timestamp:%Y-%m-%d %H:%M} | {r} ")
        print(f"\nDRY RUN - {len(readings)} readings not saved")
        return

    store = SQLiteHistoryStore(db_path)
    count = store.seed(readings)
    print(f"Successfully generated {count} readings over {days} days")


if __name__ == "__main__":
    main()
