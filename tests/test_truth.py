"""Tests for worked-hour truth."""

import pytest

from conftest import make_row
from core.truth import compute_break_minutes, compute_total_hours, compute_worked_hours
from models.timecard import TimecardRow


def row(**cells):
    return TimecardRow.from_mapping(make_row("MONDAY", **cells))


def test_standard_day_with_lunch_is_eight_hours():
    r = row(time_in="8:00 AM", time_out="4:30 PM", lunch_start="12:00 PM", lunch_end="12:30 PM")

    worked = compute_worked_hours(r)

    assert worked == pytest.approx(8.0)
    assert compute_total_hours(worked, r.sick_hours) == pytest.approx(8.0)


def test_sick_hours_add_to_total():
    r = row(time_in="8:00 AM", time_out="12:00 PM", sick_leave="4")
    assert compute_total_hours(compute_worked_hours(r), r.sick_hours) == pytest.approx(8.0)


def test_missing_punch_gives_zero_hours():
    assert compute_worked_hours(row(time_in="8:00 AM")) == 0.0
    assert compute_worked_hours(row(time_out="5:00 PM")) == 0.0
    assert compute_worked_hours(row(time_in="garbage", time_out="5:00 PM")) == 0.0


def test_lunch_ignored_unless_both_punches_present():
    r = row(time_in="8:00 AM", time_out="4:00 PM", lunch_start="12:00 PM")
    assert compute_break_minutes(r) == 0
    assert compute_worked_hours(r) == pytest.approx(8.0)


def test_reversed_lunch_counts_as_no_break():
    r = row(time_in="8:00 AM", time_out="4:00 PM", lunch_start="1:00 PM", lunch_end="12:00 PM")
    assert compute_break_minutes(r) == 0


def test_time_out_before_time_in_clamps_to_zero():
    assert compute_worked_hours(row(time_in="5:00 PM", time_out="8:00 AM")) == 0.0


def test_twenty_four_hour_punches():
    assert compute_worked_hours(row(time_in="7:15", time_out="15:45")) == pytest.approx(8.5)
