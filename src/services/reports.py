"""
Timecard check reports: plain text for the console and Excel for export.
"""

import logging
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from core.config import CHECK_EXTRA_HEADERS, OUTPUT_DIR, WEEKLY_SUMMARY_HEADERS
from core.engine import TimecardError, has_blocking_errors
from core.times import format_hours
from models.timecard import TimecardEvaluation

logger = logging.getLogger(__name__)

ERROR_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
HEADER_FONT = Font(bold=True)


def safe_file_stem(name: str) -> str:
    """Turn an employee name into a file-name friendly stem."""
    cleaned = "".join(c if c.isalnum() else "_" for c in name.strip())
    return "_".join(part for part in cleaned.split("_") if part) or "timecard"


def report_filename(evaluation: TimecardEvaluation) -> str:
    employee = evaluation.context.employee
    stem = safe_file_stem(employee.name)
    if employee.pay_end_date:
        stem = f"{stem}_{safe_file_stem(employee.pay_end_date)}"
    return f"{stem}_timecard_check.xlsx"


# =============================================================================
# TEXT REPORT
# =============================================================================


def format_findings_text(evaluation: TimecardEvaluation) -> str:
    """Format an evaluation as a plain-text report."""
    context = evaluation.context
    employee = context.employee
    totals = context.payroll_totals

    lines = [
        f"Employee: {employee.name or '(not found)'}",
        f"Policy: {context.policy.value}",
        f"Pay Begin: {employee.pay_begin_date or '(n/a)'} | "
        f"Pay End: {employee.pay_end_date or '(n/a)'} | "
        f"Pay Date: {employee.pay_date or '(n/a)'}",
        "",
        "Payroll Totals (from sheet):",
        f"  Regular: {format_hours(totals.regular_hours)} | "
        f"Sick: {format_hours(totals.sick_hours)} | "
        f"OT: {format_hours(totals.overtime_hours)} | "
        f"Total: {format_hours(totals.total_hours)}",
        "",
    ]

    if evaluation.weekly_summary:
        lines.append("Weekly Summary:")
        for week in evaluation.weekly_summary:
            flag = "  <- check details" if week.has_errors else ""
            lines.append(
                f"  Week {week.week_index}: worked {format_hours(week.worked_hours)}, "
                f"sick {format_hours(week.sick_hours)}, "
                f"regular {format_hours(week.reg_hours)}, "
                f"OT {format_hours(week.ot_hours)}{flag}"
            )
        lines.append("")

    errors = [
        (classified, result)
        for classified, result in zip(context.rows, evaluation.rows)
        if result.has_error
    ]
    if errors:
        lines.append(f"Rule Errors ({len(errors)} row(s)):")
        for classified, result in errors:
            label = classified.day_name or classified.row.day or "(no day)"
            week = f"week {result.week_index}" if result.week_index else "no week"
            lines.append(f"  {label.title()} ({week}):")
            for message in result.error_messages:
                lines.append(f"    - {message}")
    else:
        lines.append("No rule errors found.")

    return "\n".join(lines)


# =============================================================================
# EXCEL REPORT
# =============================================================================


def _write_cell(ws, row: int, column: int, value):
    """Write a value; text starting with "=" stays text instead of a formula."""
    cell = ws.cell(row=row, column=column, value=value)
    if isinstance(value, str) and value.startswith("="):
        cell.data_type = "s"
    return cell


def _write_header_row(ws, headers: list[str]):
    for col_idx, header in enumerate(headers, start=1):
        cell = _write_cell(ws, 1, col_idx, header)
        cell.font = HEADER_FONT


def _autosize_columns(ws, max_width: int = 60):
    for col_idx, column in enumerate(ws.iter_cols(), start=1):
        width = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(width + 2, 10), max_width)


def write_check_sheet(ws, evaluation: TimecardEvaluation):
    """
    Write the timecard with Computed Hours and Rule Error columns.

    Rows with errors are highlighted.
    """
    headers = list(evaluation.context.headers)
    _write_header_row(ws, headers + CHECK_EXTRA_HEADERS)

    for row_idx, (classified, result) in enumerate(
        zip(evaluation.context.rows, evaluation.rows), start=2
    ):
        row_data = [classified.row.cell(header) for header in headers]
        row_data.append(
            round(result.computed_hours, 2) if result.computed_hours is not None else "—"
        )
        row_data.append(" | ".join(result.error_messages) if result.has_error else "")

        for col_idx, value in enumerate(row_data, start=1):
            cell = _write_cell(ws, row_idx, col_idx, value)
            if result.has_error:
                cell.fill = ERROR_FILL
            if result.is_footer:
                cell.font = HEADER_FONT

    _autosize_columns(ws)


def write_weekly_summary_sheet(ws, evaluation: TimecardEvaluation):
    """Write one line per week plus employee and payroll totals below it."""
    _write_header_row(ws, WEEKLY_SUMMARY_HEADERS)

    row_idx = 2
    for week in evaluation.weekly_summary:
        row_data = [
            f"Week {week.week_index}",
            round(week.worked_hours, 2),
            round(week.sick_hours, 2),
            round(week.reg_hours, 2),
            round(week.ot_hours, 2),
            "Check details" if week.has_errors else "",
        ]
        for col_idx, value in enumerate(row_data, start=1):
            _write_cell(ws, row_idx, col_idx, value)
        row_idx += 1

    context = evaluation.context
    totals = context.payroll_totals
    row_idx += 1
    details = [
        ("Employee", context.employee.name),
        ("Policy", context.policy.value),
        ("Pay Begin Date", context.employee.pay_begin_date),
        ("Pay End Date", context.employee.pay_end_date),
        ("Pay Date", context.employee.pay_date),
        ("Payroll Regular (sheet)", totals.regular_hours),
        ("Payroll Sick (sheet)", totals.sick_hours),
        ("Payroll Overtime (sheet)", totals.overtime_hours),
        ("Payroll Total (sheet)", totals.total_hours),
    ]
    for label, value in details:
        _write_cell(ws, row_idx, 1, label).font = HEADER_FONT
        _write_cell(ws, row_idx, 2, value)
        row_idx += 1

    _autosize_columns(ws)


def write_original_sheet(ws, evaluation: TimecardEvaluation):
    """Write the timecard exactly as read, without computed columns."""
    headers = list(evaluation.context.headers)
    _write_header_row(ws, headers)
    for row_idx, classified in enumerate(evaluation.context.rows, start=2):
        for col_idx, header in enumerate(headers, start=1):
            _write_cell(ws, row_idx, col_idx, classified.row.cell(header))
    _autosize_columns(ws)


def create_excel_report(evaluation: TimecardEvaluation) -> Workbook:
    """Build the three-sheet check workbook (no error gating)."""
    wb = Workbook()
    check_ws = wb.active
    check_ws.title = "Timecard Check"
    write_check_sheet(check_ws, evaluation)
    write_weekly_summary_sheet(wb.create_sheet("Weekly Summary"), evaluation)
    write_original_sheet(wb.create_sheet("Original Timecard"), evaluation)
    return wb


def _ensure_exportable(evaluation: TimecardEvaluation):
    if has_blocking_errors(evaluation):
        raise TimecardError(
            f"Timecard has {evaluation.error_count} row(s) with rule errors; "
            "fix them before exporting."
        )


def generate_report_to_bytes(evaluation: TimecardEvaluation) -> tuple[bytes, str]:
    """
    Build the export workbook in memory.

    Returns:
        (xlsx_bytes, filename)

    Raises:
        TimecardError: while any row still has rule errors
    """
    _ensure_exportable(evaluation)
    buffer = BytesIO()
    create_excel_report(evaluation).save(buffer)
    return buffer.getvalue(), report_filename(evaluation)


def export_report(evaluation: TimecardEvaluation, output_dir: Path | None = None) -> Path:
    """Save the export workbook to disk and return its path."""
    _ensure_exportable(evaluation)
    output_dir = output_dir or OUTPUT_DIR / "reports"
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / report_filename(evaluation)
    create_excel_report(evaluation).save(output_path)
    logger.info("Saved timecard report to %s", output_path)
    return output_path
