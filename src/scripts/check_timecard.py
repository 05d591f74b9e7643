#!/usr/bin/env python3
"""
Check a timecard CSV export against the employee's overtime policy.

Derives worked hours from the punches, flags rows whose entered regular,
overtime or total hours disagree, prints a weekly summary, and optionally
exports an Excel report once the timecard is clean.

Usage:
    uv run python src/scripts/check_timecard.py <timecard.csv> [--export]

Example:
    uv run python src/scripts/check_timecard.py data/timecards/jane_doe.csv --export --output-dir output/reports

Exit codes: 0 clean, 1 could not read the file, 2 rule errors found.
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.engine import evaluate
from core.logging_config import setup_logging
from services.csv_import import load_timecard_file
from services.reports import export_report, format_findings_text


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Check a timecard CSV against daily or weekly overtime rules"
    )
    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to the timecard CSV export",
    )
    parser.add_argument(
        "--employee",
        help="Employee name to use instead of the one in the file (selects the policy)",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        help="Write the Excel report when no rule errors are found",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for the Excel report (default: output/reports)",
    )

    args = parser.parse_args(argv)
    setup_logging("timecard-checker")

    try:
        evaluation = evaluate(load_timecard_file(args.input_file, args.employee))
    except (OSError, ValueError) as e:
        print(f"\nError: {e}")
        return 1

    print(format_findings_text(evaluation))

    if evaluation.has_errors:
        if args.export:
            print("\nReport not exported: fix the rule errors above first.")
        return 2

    if args.export:
        output_path = export_report(evaluation, args.output_dir)
        print(f"\nReport exported: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
