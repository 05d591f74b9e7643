"""Tests for day/footer classification and week numbering."""

from conftest import DAY_NAMES, make_footer, make_row
from core.classification import classify_rows, is_day_name, is_totals_footer_row
from models.timecard import RowKind, TimecardRow


def rows_of(*mappings):
    return [TimecardRow.from_mapping(m) for m in mappings]


def test_is_day_name_is_case_and_whitespace_tolerant():
    assert is_day_name("Monday")
    assert is_day_name("  sunday ")
    assert not is_day_name("Mon")
    assert not is_day_name("")
    assert not is_day_name(None)


def test_footer_detection_ignores_case_and_padding():
    row = TimecardRow.from_mapping(make_row("", time_out="  total hours "))
    assert is_totals_footer_row(row)


def test_day_row_with_total_hours_label_is_not_footer():
    row = TimecardRow.from_mapping(make_row("Friday", time_out="TOTAL HOURS"))
    assert not is_totals_footer_row(row)


def test_two_week_sheet_gets_week_one_then_two():
    classified = classify_rows(rows_of(*[make_row(day) for day in DAY_NAMES * 2]))

    assert [c.week_index for c in classified] == [1] * 7 + [2] * 7
    assert all(c.kind == RowKind.DAY for c in classified)


def test_week_wraps_on_any_order_decrease():
    days = ["WEDNESDAY", "FRIDAY", "TUESDAY", "TUESDAY", "MONDAY"]
    classified = classify_rows(rows_of(*[make_row(day) for day in days]))

    # Repeating a day does not start a new week; going back does
    assert [c.week_index for c in classified] == [1, 1, 2, 2, 3]


def test_week_index_is_non_decreasing_and_steps_by_one():
    days = ["THURSDAY", "SUNDAY", "MONDAY", "SATURDAY", "TUESDAY", "WEDNESDAY", "MONDAY"]
    indices = [c.week_index for c in classify_rows(rows_of(*[make_row(d) for d in days]))]

    for previous, current in zip(indices, indices[1:]):
        assert current - previous in (0, 1)


def test_malformed_rows_do_not_move_the_week_cursor():
    classified = classify_rows(
        rows_of(make_row("SATURDAY"), make_row("Notes"), make_row("SUNDAY"), make_row("MONDAY"))
    )

    assert [c.kind for c in classified] == [
        RowKind.DAY,
        RowKind.MALFORMED,
        RowKind.DAY,
        RowKind.DAY,
    ]
    assert classified[1].week_index is None
    assert [c.week_index for c in classified if c.is_day] == [1, 1, 2]


def test_classification_stops_at_footer():
    classified = classify_rows(
        rows_of(make_row("MONDAY"), make_footer(), make_row("TUESDAY"), make_row("WEDNESDAY"))
    )

    assert len(classified) == 2
    assert classified[-1].kind == RowKind.FOOTER
    assert classified[-1].week_index is None


def test_without_footer_every_row_is_processed():
    classified = classify_rows(rows_of(*[make_row(day) for day in DAY_NAMES]))
    assert len(classified) == 7
    assert not any(c.is_footer for c in classified)


def test_day_name_is_canonical_upper_case():
    (classified,) = classify_rows(rows_of(make_row("  tuesday ")))
    assert classified.day_name == "TUESDAY"
