"""
Timecard evaluation engine.

    context = load(rows, "Jane Doe")
    evaluation = evaluate(context)

load() validates and classifies the rows and picks the overtime policy once;
evaluate() derives truth from punches, runs the per-day rules and the weekly
pass, and builds the weekly summary. Each call to evaluate() starts from
scratch, so running it twice on the same context gives the same result.
"""

import logging
from collections.abc import Mapping, Sequence

from core.aggregation import build_weekly_summary
from core.classification import classify_rows
from core.config import REQUIRED_COLUMNS
from core.truth import compute_total_hours, compute_worked_hours
from core.validation import apply_weekly_ot_checks, check_row, select_policy
from models.timecard import (
    ClassifiedRow,
    EmployeeInfo,
    EvaluationContext,
    PayrollTotals,
    Policy,
    RowEvaluation,
    TimecardEvaluation,
    TimecardRow,
)

logger = logging.getLogger(__name__)


class TimecardError(ValueError):
    """Structural problem that prevents a timecard from being evaluated."""


def _validate_columns(rows: Sequence[Mapping[str, str]]) -> None:
    seen = set()
    for row in rows:
        seen.update(str(label).strip().upper() for label in row)
    missing = [column for column in REQUIRED_COLUMNS if column not in seen]
    if missing:
        raise TimecardError(f"Timecard is missing required column(s): {', '.join(missing)}")


def load(
    rows: Sequence[Mapping[str, str]],
    employee_name: str | EmployeeInfo = "",
    daily_ot_employees: set[str] | None = None,
    payroll_totals: PayrollTotals | None = None,
    headers: Sequence[str] = (),
) -> EvaluationContext:
    """
    Build an evaluation context from parsed timecard rows.

    Args:
        rows: One mapping per line, column label -> cell text
        employee_name: Display name (or full EmployeeInfo) used to pick the policy
        daily_ot_employees: Override for the configured daily-OT name list
        payroll_totals: Totals read from the sheet footer, for display
        headers: Original column labels, in sheet order

    Raises:
        TimecardError: if there are no rows or required columns are missing
    """
    if not rows:
        raise TimecardError("Timecard has no rows to evaluate.")
    _validate_columns(rows)

    employee = employee_name if isinstance(employee_name, EmployeeInfo) else EmployeeInfo(name=employee_name or "")
    policy = select_policy(employee.name, daily_ot_employees)

    classified = classify_rows([TimecardRow.from_mapping(row) for row in rows])
    logger.info(
        "Loaded %d row(s) for %s under %s policy",
        len(classified),
        employee.name or "unknown employee",
        policy.value,
    )

    return EvaluationContext(
        employee=employee,
        policy=policy,
        rows=tuple(classified),
        payroll_totals=payroll_totals or PayrollTotals(),
        headers=tuple(headers) or tuple(REQUIRED_COLUMNS),
    )


def evaluate_row(classified: ClassifiedRow, policy: Policy) -> RowEvaluation:
    """Truth and per-day findings for one row (weekly pass not included)."""
    row = classified.row

    if classified.is_footer:
        # The footer only carries the sheet's own totals
        return RowEvaluation(
            time_hours=0.0,
            sick_hours=row.sick_hours,
            reg_hours=row.reg_hours,
            ot_hours=row.ot_hours,
            total_cell=row.total_cell,
            computed_hours=None,
            is_footer=True,
        )

    time_hours = compute_worked_hours(row)
    evaluation = RowEvaluation(
        time_hours=time_hours,
        sick_hours=row.sick_hours,
        reg_hours=row.reg_hours,
        ot_hours=row.ot_hours,
        total_cell=row.total_cell,
        computed_hours=compute_total_hours(time_hours, row.sick_hours),
        week_index=classified.week_index,
        day_name=classified.day_name,
    )
    evaluation.findings.extend(check_row(evaluation, policy))
    return evaluation


def evaluate(context: EvaluationContext) -> TimecardEvaluation:
    """Evaluate every row of a loaded timecard and summarize it by week."""
    evaluations = [evaluate_row(classified, context.policy) for classified in context.rows]

    if context.policy == Policy.WEEKLY_OT:
        apply_weekly_ot_checks(evaluations)

    result = TimecardEvaluation(
        context=context,
        rows=evaluations,
        weekly_summary=build_weekly_summary(evaluations),
    )
    logger.info(
        "Evaluated %d row(s): %d with errors",
        len(evaluations),
        result.error_count,
    )
    return result


def has_blocking_errors(evaluation: TimecardEvaluation) -> bool:
    """True while any non-footer row has an error; exports must wait until then."""
    return evaluation.has_errors
