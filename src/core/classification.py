"""
Row classification: day rows, the totals footer, and week numbering.
"""

import logging

from core.config import DAY_ORDER, FOOTER_LABEL
from models.timecard import ClassifiedRow, RowKind, TimecardRow

logger = logging.getLogger(__name__)


def is_day_name(value: str | None) -> bool:
    """Check if a DAY cell holds one of the seven canonical day names."""
    return (value or "").strip().upper() in DAY_ORDER


def is_totals_footer_row(row: TimecardRow) -> bool:
    """
    Check if this is the bottom 'TOTAL HOURS' footer row.

    The footer has no day name and carries the label in its TIME OUT cell.
    """
    if is_day_name(row.day):
        return False
    return row.time_out.strip().upper() == FOOTER_LABEL


def classify_rows(rows: list[TimecardRow]) -> list[ClassifiedRow]:
    """
    Label each row and assign week numbers to day rows.

    The week number starts at 1 and goes up by one whenever a day comes
    earlier in the week than the previous day row (e.g. Sunday -> Monday).
    Rows that are neither days nor the footer get no week number and do not
    move the cursor. Classification stops at the footer row, which is kept as
    the last entry; anything after it is ignored.
    """
    classified = []
    week_index = 1
    last_order = None

    for position, row in enumerate(rows):
        if is_totals_footer_row(row):
            classified.append(ClassifiedRow(row=row, kind=RowKind.FOOTER))
            ignored = len(rows) - position - 1
            if ignored:
                logger.debug("Ignoring %d row(s) after the totals footer", ignored)
            break

        if not is_day_name(row.day):
            classified.append(ClassifiedRow(row=row, kind=RowKind.MALFORMED))
            continue

        day_name = row.day.strip().upper()
        order = DAY_ORDER[day_name]
        if last_order is not None and order < last_order:
            week_index += 1
        last_order = order

        classified.append(
            ClassifiedRow(row=row, kind=RowKind.DAY, day_name=day_name, week_index=week_index)
        )

    return classified
