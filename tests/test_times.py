"""Tests for punch parsing and hour formatting."""

import pytest

from core.times import format_hours, format_minutes, parse_number_or_none, parse_time_to_minutes


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12:00 AM", 0),
        ("12:00 PM", 720),
        ("1:15 PM", 795),
        ("8:00 AM", 480),
        ("4:30pm", 990),
        ("  9:05 am ", 545),
        ("11:59 PM", 1439),
        ("16:30", 990),
        ("0:00", 0),
    ],
)
def test_parse_time_to_minutes(text, expected):
    assert parse_time_to_minutes(text) == expected


@pytest.mark.parametrize(
    "text",
    [None, "", "   ", "8", "8:0 AM", "8:000", "noon", "8:00 XM", "TOTAL HOURS", "25:00", "9:75"],
)
def test_parse_time_to_minutes_returns_none_for_bad_input(text):
    assert parse_time_to_minutes(text) is None


def test_format_minutes_round_trips_every_minute_of_the_day():
    for minutes in range(0, 24 * 60):
        assert parse_time_to_minutes(format_minutes(minutes)) == minutes
        assert parse_time_to_minutes(format_minutes(minutes, twelve_hour=False)) == minutes


def test_format_minutes_twelve_hour_convention():
    assert format_minutes(0) == "12:00 AM"
    assert format_minutes(720) == "12:00 PM"
    assert format_minutes(795) == "1:15 PM"
    assert format_minutes(795, twelve_hour=False) == "13:15"


def test_format_hours():
    assert format_hours(8) == "8.00"
    assert format_hours(None) == "—"
    assert format_hours(float("nan")) == "—"


@pytest.mark.parametrize(
    "text, expected",
    [("8", 8.0), (" 7.5 ", 7.5), ("", None), (None, None), ("abc", None), ("inf", None), ("0", 0.0)],
)
def test_parse_number_or_none(text, expected):
    assert parse_number_or_none(text) == expected
