"""Tests for reading timecard CSV exports."""

import pytest

from core.engine import TimecardError, evaluate
from fixtures.generate_timecards import build_timecard_csv, off_day, worked_day
from models.timecard import Policy
from services.csv_import import (
    load_timecard,
    load_timecard_file,
    read_timecard_csv,
    read_timecard_file,
    split_csv_line,
)


def test_reads_metadata_rows_and_totals(sample_csv):
    parsed = read_timecard_csv(sample_csv)

    assert parsed.employee.name == "Jane Doe"
    assert parsed.employee.pay_begin_date == "11/03/2025"
    assert parsed.employee.pay_end_date == "11/16/2025"
    assert parsed.employee.pay_date == "11/21/2025"
    assert parsed.headers[0] == "DAY"
    # 14 days plus the footer
    assert len(parsed.rows) == 15
    assert parsed.rows[0]["DAY"] == "Monday"
    assert parsed.rows[0]["TIME IN"] == "8:00 AM"
    assert parsed.payroll_totals.regular_hours == pytest.approx(64.0)
    assert parsed.payroll_totals.sick_hours == pytest.approx(16.0)
    assert parsed.payroll_totals.overtime_hours == pytest.approx(0.0)
    assert parsed.payroll_totals.total_hours == pytest.approx(80.0)


def test_stops_after_footer_row():
    text = build_timecard_csv(
        [worked_day("Monday")],
        employee_name="Jane Doe",
        trailing_lines=["Tuesday,,8:00 AM,,,4:00 PM,8,,,8", "Signed,,,,,,,,,"],
    )
    parsed = read_timecard_csv(text)

    assert [row["DAY"] for row in parsed.rows] == ["Monday", ""]
    assert parsed.rows[-1]["TIME OUT"] == "TOTAL HOURS"


def test_missing_cells_become_blank():
    text = "DAY,TIME IN,TIME OUT,LUNCH START,LUNCH END,SICK LEAVE,REGULAR HOURS,OVER TIME,TOTAL HOURS\nMonday,8:00 AM\n"
    (row,) = read_timecard_csv(text).rows
    assert row["TIME OUT"] == ""
    assert row["TOTAL HOURS"] == ""


def test_empty_csv_is_rejected():
    with pytest.raises(TimecardError, match="empty"):
        read_timecard_csv("\n  \n\n")


def test_csv_without_header_row_is_rejected():
    with pytest.raises(TimecardError, match="DAY"):
        read_timecard_csv("EMPLOYEE NAME\nJane Doe\nMonday,8:00 AM,4:00 PM\n")


def test_missing_metadata_gives_blank_employee():
    text = "DAY,TIME IN,TIME OUT,LUNCH START,LUNCH END,SICK LEAVE,REGULAR HOURS,OVER TIME,TOTAL HOURS\n"
    text += "Monday,8:00 AM,4:00 PM,,,,8,,8\n"
    parsed = read_timecard_csv(text)
    assert parsed.employee.name == ""
    assert parsed.payroll_totals.total_hours is None


def test_quoted_cells_keep_commas():
    assert split_csv_line('Monday,"Note, with comma",8') == ["Monday", "Note, with comma", "8"]


def test_load_timecard_selects_policy_from_file_name():
    days = [worked_day("Monday", time_out="6:30 PM", regular="8.00", overtime="2.00", total="10.00")]
    days += [off_day(day) for day in ("Tuesday", "Wednesday")]
    text = build_timecard_csv(days, employee_name="Lu Hernandez")

    context = load_timecard(text, daily_ot_employees={"LU HERNANDEZ"})

    assert context.policy == Policy.DAILY_OT
    assert context.employee.pay_end_date == "11/16/2025"
    assert not evaluate(context).has_errors


def test_load_timecard_employee_override():
    text = build_timecard_csv([worked_day("Monday")], employee_name="Jane Doe")

    context = load_timecard(text, employee_name="Lu Hernandez", daily_ot_employees={"LU HERNANDEZ"})

    assert context.employee.name == "Lu Hernandez"
    assert context.employee.pay_begin_date == "11/03/2025"
    assert context.policy == Policy.DAILY_OT


def test_load_timecard_keeps_original_headers(sample_csv):
    context = load_timecard(sample_csv)
    assert "DATE" in context.headers
    assert context.rows[-1].is_footer


def test_sample_csv_is_clean(sample_csv):
    evaluation = evaluate(load_timecard(sample_csv))
    assert not evaluation.has_errors
    assert [week.week_index for week in evaluation.weekly_summary] == [1, 2]


def test_read_timecard_file(tmp_path, sample_csv):
    path = tmp_path / "timecard.csv"
    path.write_text("\ufeff" + sample_csv, encoding="utf-8")

    assert read_timecard_file(path).employee.name == "Jane Doe"


def test_read_timecard_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_timecard_file(tmp_path / "missing.csv")


def test_load_timecard_file(tmp_path, sample_csv):
    path = tmp_path / "timecard.csv"
    path.write_text("\ufeff" + sample_csv, encoding="utf-8")

    context = load_timecard_file(path, "Lu Hernandez", daily_ot_employees={"LU HERNANDEZ"})

    assert context.employee.name == "Lu Hernandez"
    assert context.employee.pay_end_date == "11/16/2025"
    assert context.policy == Policy.DAILY_OT
    assert context.headers[0] == "DAY"


def test_load_timecard_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="Input file not found"):
        load_timecard_file(tmp_path / "missing.csv")
