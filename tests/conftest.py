"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src (and tests, for the fixtures package) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from fixtures.generate_timecards import build_timecard_csv, off_day, sick_day, worked_day  # noqa: E402

DAY_NAMES = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]


def make_row(day: str = "MONDAY", **cells) -> dict:
    """Build an engine input row; keyword names map to column labels."""
    row = {
        "DAY": day,
        "TIME IN": "",
        "TIME OUT": "",
        "LUNCH START": "",
        "LUNCH END": "",
        "SICK LEAVE": "",
        "REGULAR HOURS": "",
        "OVER TIME": "",
        "TOTAL HOURS": "",
    }
    for key, value in cells.items():
        row[key.replace("_", " ").upper()] = value
    return row


def make_worked_row(day: str, time_in: str = "8:00 AM", time_out: str = "4:30 PM", **cells) -> dict:
    """A row with a 12:00-12:30 lunch (8 hours worked with the default punches)."""
    return make_row(
        day,
        time_in=time_in,
        time_out=time_out,
        lunch_start="12:00 PM",
        lunch_end="12:30 PM",
        **cells,
    )


def make_footer(**cells) -> dict:
    return make_row("", time_out="TOTAL HOURS", **cells)


@pytest.fixture
def clean_week_rows():
    """Monday-Friday 8-hour days, weekend off, plus the footer."""
    rows = [
        make_worked_row(day, regular_hours="8.00", total_hours="8.00")
        for day in DAY_NAMES[:5]
    ]
    rows += [make_row(day) for day in DAY_NAMES[5:]]
    rows.append(make_footer(regular_hours="40.00", total_hours="40.00"))
    return rows


@pytest.fixture
def forty_four_hour_week_rows():
    """Four 8-hour days and one 12-hour Friday, no overtime entered."""
    rows = [
        make_worked_row(day, regular_hours="8.00", total_hours="8.00")
        for day in DAY_NAMES[:4]
    ]
    rows.append(
        make_worked_row("FRIDAY", time_out="8:30 PM", regular_hours="12.00", total_hours="12.00")
    )
    rows.append(make_footer())
    return rows


@pytest.fixture
def sample_csv():
    """A clean two-week timecard export for a weekly-OT employee."""
    days = []
    for _ in range(2):
        days += [worked_day(day) for day in ("Monday", "Tuesday", "Wednesday", "Thursday")]
        days.append(sick_day("Friday"))
        days += [off_day("Saturday"), off_day("Sunday")]
    return build_timecard_csv(days, employee_name="Jane Doe")
