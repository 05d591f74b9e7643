"""
Weekly summary of evaluated day rows.
"""

from models.timecard import RowEvaluation, WeekSummary


def build_weekly_summary(evaluations: list[RowEvaluation]) -> list[WeekSummary]:
    """
    Sum worked, sick, regular and overtime hours per week number.

    Footer and malformed rows (no week number) are left out. A week is
    flagged when any of its days has an error. Sorted by week number.
    """
    weeks: dict[int, WeekSummary] = {}

    for evaluation in evaluations:
        if evaluation.is_footer or evaluation.week_index is None:
            continue

        week = weeks.setdefault(evaluation.week_index, WeekSummary(week_index=evaluation.week_index))
        week.worked_hours += evaluation.time_hours
        week.sick_hours += evaluation.sick_hours
        week.reg_hours += evaluation.reg_hours
        week.ot_hours += evaluation.ot_hours
        if evaluation.has_error:
            week.has_errors = True

    return [weeks[index] for index in sorted(weeks)]
