"""
Timecard CSV import.

Reads the exported timecard CSV: an employee metadata block, the daily table
under a header row containing DAY and TIME IN, and a bottom footer row whose
TIME OUT cell reads TOTAL HOURS followed by the payroll totals.
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

from core.classification import is_day_name, is_totals_footer_row
from core.config import FOOTER_LABEL, METADATA_FIELDS, METADATA_MARKER
from core.engine import TimecardError, load
from core.times import parse_number_or_none
from models.timecard import EmployeeInfo, EvaluationContext, PayrollTotals, TimecardRow

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================


@dataclass
class ParsedTimecard:
    """Result of reading a timecard CSV."""

    employee: EmployeeInfo
    headers: list[str]
    rows: list[dict[str, str]]
    payroll_totals: PayrollTotals = field(default_factory=PayrollTotals)


# =============================================================================
# LINE HELPERS
# =============================================================================


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line into cells (quoted cells may contain commas)."""
    return next(csv.reader([line]), [])


def is_data_header_line(line: str) -> bool:
    upper = line.upper()
    return "DAY" in upper and "TIME IN" in upper


def read_employee_info(lines: list[str]) -> EmployeeInfo:
    """Read EMPLOYEE NAME and pay dates from the metadata header/value lines."""
    header_index = next(
        (i for i, line in enumerate(lines) if METADATA_MARKER in line.upper()), None
    )
    if header_index is None or header_index + 1 >= len(lines):
        return EmployeeInfo()

    header_cells = split_csv_line(lines[header_index])
    value_cells = split_csv_line(lines[header_index + 1])

    values = {}
    for idx, raw_header in enumerate(header_cells):
        key = raw_header.strip().upper()
        value = value_cells[idx].strip() if idx < len(value_cells) else ""
        if key in METADATA_FIELDS and value:
            values[METADATA_FIELDS[key]] = value

    return EmployeeInfo(**values)


def read_payroll_totals(lines: list[str], header_index: int) -> PayrollTotals:
    """
    Find the payroll totals on the footer line below the data header.

    The four cells after the 'TOTAL HOURS' label are regular, sick,
    overtime and total hours.
    """
    for line in lines[header_index + 1:]:
        if FOOTER_LABEL not in line.upper() or is_data_header_line(line):
            continue

        cells = split_csv_line(line)
        if cells and is_day_name(cells[0]):
            continue

        labels = [cell.strip().upper() for cell in cells]
        if FOOTER_LABEL not in labels:
            continue
        label_index = labels.index(FOOTER_LABEL)

        def number_after(offset: int) -> float | None:
            idx = label_index + offset
            return parse_number_or_none(cells[idx]) if idx < len(cells) else None

        totals = PayrollTotals(
            regular_hours=number_after(1),
            sick_hours=number_after(2),
            overtime_hours=number_after(3),
            total_hours=number_after(4),
        )
        logger.debug("Detected payroll totals: %s", totals)
        return totals

    return PayrollTotals()


# =============================================================================
# INPUT READING
# =============================================================================


def read_timecard_csv(text: str) -> ParsedTimecard:
    """
    Parse timecard CSV text.

    Raises:
        TimecardError: if the text is empty or has no DAY / TIME IN header row
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise TimecardError("CSV appears to be empty.")

    employee = read_employee_info(lines)

    header_index = next((i for i, line in enumerate(lines) if is_data_header_line(line)), None)
    if header_index is None:
        raise TimecardError('Could not find a header row containing both "DAY" and "TIME IN".')

    headers = [cell.strip() for cell in split_csv_line(lines[header_index])]
    keys = [header.upper() for header in headers]

    rows = []
    for line in lines[header_index + 1:]:
        values = split_csv_line(line)
        row = {
            key: values[idx].strip() if idx < len(values) else ""
            for idx, key in enumerate(keys)
            if key
        }
        rows.append(row)
        # Stop after the bottom TOTAL HOURS footer row
        if is_totals_footer_row(TimecardRow.from_mapping(row)):
            break

    logger.info("Read %d timecard row(s) for %s", len(rows), employee.name or "unknown employee")
    return ParsedTimecard(
        employee=employee,
        headers=headers,
        rows=rows,
        payroll_totals=read_payroll_totals(lines, header_index),
    )


def read_timecard_file(path: Path) -> ParsedTimecard:
    """Read a timecard CSV file from disk."""
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    # utf-8-sig drops the BOM spreadsheet exports tend to add
    return read_timecard_csv(path.read_text(encoding="utf-8-sig"))


def _load_parsed(
    parsed: ParsedTimecard,
    employee_name: str | None,
    daily_ot_employees: set[str] | None,
) -> EvaluationContext:
    employee = parsed.employee
    if employee_name:
        employee = EmployeeInfo(
            name=employee_name,
            pay_begin_date=employee.pay_begin_date,
            pay_end_date=employee.pay_end_date,
            pay_date=employee.pay_date,
        )
    return load(
        parsed.rows,
        employee,
        daily_ot_employees=daily_ot_employees,
        payroll_totals=parsed.payroll_totals,
        headers=parsed.headers,
    )


def load_timecard(
    text: str,
    employee_name: str | None = None,
    daily_ot_employees: set[str] | None = None,
) -> EvaluationContext:
    """Parse CSV text and load it into an evaluation context."""
    return _load_parsed(read_timecard_csv(text), employee_name, daily_ot_employees)


def load_timecard_file(
    path: Path,
    employee_name: str | None = None,
    daily_ot_employees: set[str] | None = None,
) -> EvaluationContext:
    """Read a timecard CSV file and load it into an evaluation context."""
    return _load_parsed(read_timecard_file(path), employee_name, daily_ot_employees)
