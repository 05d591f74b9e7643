"""Tests for the command-line checker."""

from fixtures.generate_timecards import build_timecard_csv, worked_day
from scripts.check_timecard import main


def test_clean_timecard_exits_zero_and_exports(tmp_path, sample_csv, capsys):
    path = tmp_path / "timecard.csv"
    path.write_text(sample_csv)

    code = main([str(path), "--export", "--output-dir", str(tmp_path / "out")])

    assert code == 0
    output = capsys.readouterr().out
    assert "No rule errors found." in output
    assert "Report exported" in output
    assert len(list((tmp_path / "out").glob("*.xlsx"))) == 1


def test_timecard_with_errors_exits_two_without_export(tmp_path, capsys):
    path = tmp_path / "timecard.csv"
    path.write_text(
        build_timecard_csv([worked_day("Monday", regular="7.00")], employee_name="Jane Doe")
    )

    code = main([str(path), "--export", "--output-dir", str(tmp_path / "out")])

    assert code == 2
    assert "Regular hours (7.00) do not match punched time (8.00)." in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_missing_file_exits_one(tmp_path, capsys):
    assert main([str(tmp_path / "nope.csv")]) == 1
    assert "Input file not found" in capsys.readouterr().out
