#!/usr/bin/env python3
"""Main entry point for BP Tracker.

This module wires the core together for one submission:
1. Validates three consecutive measurements
2. Averages them into a single reading
3. Classifies the reading and stores it in the local SQLite database
4. Recomputes 7-day, 30-day and all-time statistics

Usage:
    # Submit three measurements
    pdm run python -m bp_tracker.main submit -r 118 76 65 -r 120 78 68 -r 122 80 70

    # Show statistics
    pdm run python -m bp_tracker.main stats

    # List readings / export them as CSV
    pdm run python -m bp_tracker.main history --limit 20
    pdm run python -m bp_tracker.main export --output readings.csv

    # Delete one reading
    pdm run python -m bp_tracker.main delete 42
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import yaml

from bp_tracker.aggregation import average
from bp_tracker.classification import BPCategory, classify, recommend
from bp_tracker.export import readings_to_csv
from bp_tracker.history_store import ReadingNotFoundError, SQLiteHistoryStore
from bp_tracker.models import Measurement, Reading, ReadingInput, Stats, WindowAverage
from bp_tracker.statistics import compute_stats
from bp_tracker.validation import ValidationFailure, ensure_valid

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "database": {
        "path": "./data/bp_tracker.db",
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
    "seed": {
        "days": 60,
    },
}


@dataclass
class SubmissionResult:
    """Outcome of a successful submission."""

    reading: Reading
    category: BPCategory
    recommendation: str
    stats: Stats

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "message": "Reading saved successfully",
            "reading": self.reading.to_dict(),
            "classification": {
                "name": self.category.label,
                "description": self.category.description,
                "risk": self.category.risk,
            },
            "recommendation": self.recommendation,
            "stats": self.stats.to_dict(),
        }


class BloodPressureTracker:
    """Runs submissions through validation, averaging, classification and storage."""

    def __init__(
        self,
        store: SQLiteHistoryStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the tracker.

        Args:
            store: History store for readings
            clock: Source of the current time
        """
        self.store = store
        self.clock = clock

    @classmethod
    def from_config(cls, config: dict) -> BloodPressureTracker:
        """Create a tracker backed by the database named in the config."""
        db_path = config.get("database", {}).get("path", "./data/bp_tracker.db")
        return cls(SQLiteHistoryStore(db_path))

    def submit(self, submission: ReadingInput) -> SubmissionResult:
        """Validate, average, classify and store one submission.

        Args:
            submission: Three consecutive measurements

        Returns:
            SubmissionResult with the stored reading and updated statistics

        Raises:
            ValidationFailure: If the measurements are invalid
            HistoryQueryError: If the store fails
        """
        ensure_valid(submission.measurements)

        reading = average(submission, clock=self.clock)
        category = classify(reading.systolic, reading.diastolic)
        reading.classification = category.label

        reading.id = self.store.insert(reading)
        logger.info(f"Saved reading {reading.id}: {reading}")

        return SubmissionResult(
            reading=reading,
            category=category,
            recommendation=recommend(category),
            stats=self.stats(),
        )

    def stats(self) -> Stats:
        """Compute current statistics."""
        return compute_stats(self.store, clock=self.clock)

    def history(self, limit: int | None = None) -> list[Reading]:
        """Get stored readings, newest first."""
        return self.store.get_all(limit=limit)

    def export_csv(self) -> str:
        """Export all readings as CSV text."""
        readings = self.store.get_all()
        logger.info(f"Exporting {len(readings)} readings to CSV")
        return readings_to_csv(readings)

    def delete(self, reading_id: int) -> Reading:
        """Delete a stored reading.

        Returns:
            The deleted reading

        Raises:
            ReadingNotFoundError: If no reading has this id
        """
        reading = self.store.get(reading_id)
        if reading is None:
            raise ReadingNotFoundError(f"No reading found with id {reading_id} to delete")
        self.store.delete_reading(reading_id)
        logger.info(f"Deleted reading {reading_id}: {reading}")
        return reading

    def clear(self) -> int:
        """Delete all readings."""
        return self.store.clear_all()


def load_config(config_path: str | None = None) -> dict:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
            if user_config and isinstance(user_config, dict):
                # Deep merge user config into defaults
                for section, values in user_config.items():
                    section_config = config.get(section)
                    if (
                        section_config is not None
                        and isinstance(section_config, dict)
                        and isinstance(values, dict)
                    ):
                        section_config.update(values)
                    else:
                        config[section] = values

    return config


def setup_logging(config: dict) -> None:
    """Setup logging based on configuration.

    Args:
        config: Configuration dictionary
    """
    log_config = config.get("logging", {})
    level = getattr(logging, log_config.get("level", "INFO").upper())
    format_str = log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_str, handlers=handlers)


def _format_window(title: str, window: WindowAverage) -> str:
    if window.is_empty:
        return f"{title:<16}No data"
    avg = window.average
    return (
        f"{title:<16}{avg.systolic}/{avg.diastolic} mmHg, {avg.pulse} bpm "
        f"({window.count} reading{'s' if window.count != 1 else ''})"
    )


def print_stats(stats: Stats) -> None:
    """Print a statistics summary."""
    print(f"\n{'=' * 60}")
    print("Blood Pressure Statistics")
    print(f"{'=' * 60}")
    last = stats.last_reading
    if last:
        print(f"{'Last reading:':<16}{last.timestamp:%Y-%m-%d %H:%M} | {last}")
    else:
        print(f"{'Last reading:':<16}No readings yet")
    print(_format_window("7-day avg:", stats.seven_day))
    print(_format_window("30-day avg:", stats.thirty_day))
    print(_format_window("All-time avg:", stats.all_time))
    print(f"{'=' * 60}\n")


def cmd_submit(args: argparse.Namespace, tracker: BloodPressureTracker) -> int:
    """Handle submit command."""
    if len(args.reading or []) != 3:
        print("Exactly three --reading SYS DIA PULSE values are required")
        return 1

    submission = ReadingInput(
        measurements=tuple(Measurement(*values) for values in args.reading),
        timestamp=args.timestamp,
    )

    try:
        result = tracker.submit(submission)
    except ValidationFailure as e:
        print(e)
        return 1

    reading = result.reading
    print(f"\nSaved reading {reading.id} at {reading.timestamp:%Y-%m-%d %H:%M:%S}")
    print(f"  {reading.systolic}/{reading.diastolic} mmHg | {reading.pulse} bpm")
    print(f"  Category:       {result.category.label} ({result.category.description})")
    print(f"  Recommendation: {result.recommendation}")
    print_stats(result.stats)
    return 0


def cmd_stats(args: argparse.Namespace, tracker: BloodPressureTracker) -> int:
    """Handle stats command."""
    print_stats(tracker.stats())
    return 0


def cmd_history(args: argparse.Namespace, tracker: BloodPressureTracker) -> int:
    """Handle history command."""
    readings = tracker.history(limit=args.limit)
    if not readings:
        print("No readings yet.")
        return 0

    for r in readings:
        print(
            f"  {r.id:5} | {r.timestamp:%Y-%m-%d %H:%M:%S} | "
            f"{r.systolic:3}/{r.diastolic:3} mmHg | {r.pulse:3} bpm | {r.classification}"
        )
    return 0


def cmd_export(args: argparse.Namespace, tracker: BloodPressureTracker) -> int:
    """Handle export command."""
    csv_text = tracker.export_csv()
    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        Path(args.output).write_text(csv_text, newline="")
        print(f"Exported readings to {args.output}")
    else:
        sys.stdout.write(csv_text)
    return 0


def cmd_delete(args: argparse.Namespace, tracker: BloodPressureTracker) -> int:
    """Handle delete command."""
    try:
        reading = tracker.delete(args.id)
    except ReadingNotFoundError as e:
        print(e)
        return 1
    print(f"Deleted reading {args.id} ({reading.timestamp:%Y-%m-%d %H:%M:%S} | {reading})")
    return 0


COMMANDS = {
    "submit": cmd_submit,
    "stats": cmd_stats,
    "history": cmd_history,
    "export": cmd_export,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Blood pressure tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="config/config.yaml",
        help="Path to config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Submit command
    submit_parser = subparsers.add_parser("submit", help="Submit three measurements")
    submit_parser.add_argument(
        "--reading",
        "-r",
        nargs=3,
        type=int,
        action="append",
        metavar=("SYS", "DIA", "PULSE"),
        help="One measurement; give exactly three",
    )
    submit_parser.add_argument(
        "--timestamp",
        "-t",
        type=str,
        help='Measurement time as "YYYY-MM-DD HH:MM:SS" (default: now)',
    )

    subparsers.add_parser("stats", help="Show statistics")

    history_parser = subparsers.add_parser("history", help="List readings")
    history_parser.add_argument(
        "--limit",
        "-l",
        type=int,
        default=None,
        help="Maximum number of readings to show",
    )

    export_parser = subparsers.add_parser("export", help="Export readings as CSV")
    export_parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file (default: stdout)",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a reading")
    delete_parser.add_argument("id", type=int, help="Reading id")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load config
    config = load_config(args.config)

    # Setup logging
    if args.debug:
        config["logging"]["level"] = "DEBUG"
    setup_logging(config)

    # Run command
    try:
        tracker = BloodPressureTracker.from_config(config)
        exit_code = COMMANDS[args.command](args, tracker)
        sys.exit(exit_code)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        if args.debug:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
