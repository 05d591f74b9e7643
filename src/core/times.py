"""
Time-of-day and hour-value parsing helpers.
"""

import math
import re

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)?$", re.IGNORECASE)

MINUTES_PER_DAY = 24 * 60


def parse_time_to_minutes(text: str | None) -> int | None:
    """
    Parse a punch like '8:00 AM', '4:30pm' or '16:30' into minutes since midnight.

    Returns None for blank or unparseable text; a missing punch is not an error.
    """
    if not text:
        return None
    match = TIME_PATTERN.match(text.strip())
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    suffix = match.group(3).upper() if match.group(3) else None

    if suffix == "AM" and hours == 12:
        hours = 0
    elif suffix == "PM" and hours < 12:
        hours += 12

    total = hours * 60 + minutes
    if minutes > 59 or total >= MINUTES_PER_DAY:
        return None
    return total


def format_minutes(minutes: int, twelve_hour: bool = True) -> str:
    """Format minutes since midnight as 'H:MM AM' (or 'H:MM' on a 24-hour clock)."""
    hours, mins = divmod(minutes, 60)
    if not twelve_hour:
        return f"{hours}:{mins:02d}"
    suffix = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{mins:02d} {suffix}"


def format_hours(value: float | None) -> str:
    """Format an hour value with two decimals, or an em dash when missing."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "—"
    return f"{value:.2f}"


def parse_number_or_none(text: str | None) -> float | None:
    """Parse an entered numeric cell; blank or non-numeric cells give None."""
    if text is None:
        return None
    trimmed = str(text).strip()
    if not trimmed:
        return None
    try:
        number = float(trimmed)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
