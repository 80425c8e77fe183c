"""
Grand Rapids Crash Statistics.

Loads the local crash CSV, aggregates it in one pass and prints the breakdown report.

Usage:
    python scripts/run_crash_statistics.py [path_to_crashes.csv]
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger

from config import settings
from src.crash_stats.core import DecodeError, ValidationError
from src.crash_stats.loader import load_crash_data
from src.crash_stats.log import configure_logging
from src.crash_stats.pipeline import compute_statistics
from src.crash_stats.report import print_report


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print crash statistics for a local crash CSV.")
    parser.add_argument(
        "csv_path",
        nargs="?",
        default=settings.DATA_FILE,
        help=f"crash CSV to analyze (default: {settings.DATA_FILE})",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()

    # 1. Load (all rows, or nothing)
    try:
        records = load_crash_data(args.csv_path)
    except DecodeError as e:
        logger.error(f"Aborting: crash data could not be loaded ({e.phase}). {e}")
        return 1

    # 2. Aggregate
    try:
        stats = compute_statistics(records)
    except ValidationError as e:
        logger.error(f"Aborting: invalid crash record. {e}")
        return 1

    # 3. Report
    print_report(stats)
    return 0


if __name__ == "__main__":
    sys.exit(main())
