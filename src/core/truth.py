"""
Worked-hour truth derived from punches.

Punches (TIME IN / LUNCH / TIME OUT) and the entered SICK LEAVE are treated as
authoritative; the sheet's REGULAR HOURS, OVER TIME and TOTAL HOURS cells are
checked against them.
"""

from core.times import parse_time_to_minutes
from models.timecard import TimecardRow


def compute_break_minutes(row: TimecardRow) -> int:
    """Lunch length in minutes, or 0 unless both lunch punches parse."""
    lunch_start = parse_time_to_minutes(row.lunch_start)
    lunch_end = parse_time_to_minutes(row.lunch_end)
    if lunch_start is None or lunch_end is None:
        return 0
    return max(0, lunch_end - lunch_start)


def compute_worked_hours(row: TimecardRow) -> float:
    """Hours between TIME IN and TIME OUT minus lunch; 0 without both punches."""
    time_in = parse_time_to_minutes(row.time_in)
    time_out = parse_time_to_minutes(row.time_out)
    if time_in is None or time_out is None:
        return 0.0

    worked_minutes = time_out - time_in - compute_break_minutes(row)
    if worked_minutes <= 0:
        return 0.0
    return worked_minutes / 60


def compute_total_hours(worked_hours: float, sick_hours: float) -> float:
    return worked_hours + sick_hours
