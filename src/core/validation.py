"""
Overtime policy rules and discrepancy detection.
"""

import logging
from collections import defaultdict

from core.config import (
    DAILY_OT_EMPLOYEES,
    DAILY_OT_THRESHOLD_HOURS,
    EPSILON,
    MAX_SICK_HOURS_PER_DAY,
    WEEKLY_OT_THRESHOLD_HOURS,
)
from models.timecard import Finding, FindingKind, Policy, RowEvaluation

logger = logging.getLogger(__name__)


def select_policy(employee_name: str | None, daily_ot_employees: set[str] | None = None) -> Policy:
    """Pick the overtime policy for an employee; anyone not listed is paid weekly OT."""
    table = DAILY_OT_EMPLOYEES if daily_ot_employees is None else daily_ot_employees
    listed = {name.strip().upper() for name in table}
    name = (employee_name or "").strip().upper()
    return Policy.DAILY_OT if name and name in listed else Policy.WEEKLY_OT


def _owns_regular_split(evaluation: RowEvaluation, policy: Policy) -> bool:
    """Daily-OT days over the threshold expect 8.00 regular, not the worked hours."""
    return (
        policy == Policy.DAILY_OT
        and evaluation.sick_hours == 0
        and evaluation.time_hours > DAILY_OT_THRESHOLD_HOURS + EPSILON
    )


def check_common_rules(evaluation: RowEvaluation, policy: Policy) -> list[Finding]:
    """
    Checks shared by both policies.

    1. TOTAL HOURS cell matches punches + sick
    2. REGULAR HOURS matches punched time
    3. No regular/overtime hours without punches
    4. Pure sick days carry no work hours and at most 8 sick hours
    """
    findings = []
    worked = evaluation.time_hours
    has_punches = worked > 0

    # Check 1: sheet total vs truth
    if evaluation.total_cell is not None:
        if abs(evaluation.total_cell - evaluation.computed_hours) > EPSILON:
            findings.append(
                Finding(
                    FindingKind.TOTALS_MISMATCH,
                    {"total": evaluation.total_cell, "computed": evaluation.computed_hours},
                )
            )

    # Checks 2 and 3: entered hours vs punches
    if has_punches:
        if not _owns_regular_split(evaluation, policy):
            if abs(evaluation.reg_hours - worked) > EPSILON:
                findings.append(
                    Finding(
                        FindingKind.REGULAR_HOURS_MISMATCH,
                        {"regular": evaluation.reg_hours, "worked": worked},
                    )
                )
    elif evaluation.reg_hours > 0 or evaluation.ot_hours > 0:
        findings.append(Finding(FindingKind.HOURS_WITHOUT_PUNCHES))

    # Check 4: sick-only day sanity
    if not has_punches and evaluation.sick_hours > 0:
        if evaluation.reg_hours > 0 or evaluation.ot_hours > 0:
            findings.append(Finding(FindingKind.SICK_DAY_WITH_WORK_HOURS))
        if evaluation.sick_hours > MAX_SICK_HOURS_PER_DAY + EPSILON:
            findings.append(
                Finding(FindingKind.SICK_DAY_EXCEEDS_LIMIT, {"limit": MAX_SICK_HOURS_PER_DAY})
            )

    return findings


def check_daily_ot_policy(evaluation: RowEvaluation) -> list[Finding]:
    """Daily-OT rules: overtime is whatever a day's punches exceed 8 hours by."""
    findings = []
    worked = evaluation.time_hours
    sick = evaluation.sick_hours
    ot = evaluation.ot_hours
    threshold = DAILY_OT_THRESHOLD_HOURS

    if worked <= 0:
        # Pure sick days are covered by the common rules
        if ot > 0:
            findings.append(Finding(FindingKind.DAILY_OVERTIME_WITHOUT_PUNCHES))
        return findings

    if ot > 0 and sick > 0:
        findings.append(Finding(FindingKind.DAILY_SICK_WITH_OVERTIME))

    if sick > 0:
        if worked + sick > threshold + EPSILON:
            findings.append(
                Finding(FindingKind.DAILY_WORK_PLUS_SICK_EXCEEDS_LIMIT, {"limit": threshold})
            )
        if ot > 0:
            findings.append(Finding(FindingKind.DAILY_OVERTIME_ON_SICK_DAY))
        return findings

    if worked <= threshold + EPSILON:
        if ot > 0:
            findings.append(
                Finding(FindingKind.DAILY_OVERTIME_UNDER_THRESHOLD, {"limit": threshold})
            )
        return findings

    expected_regular = threshold
    expected_overtime = worked - threshold
    if (
        abs(evaluation.reg_hours - expected_regular) > EPSILON
        or abs(ot - expected_overtime) > EPSILON
    ):
        findings.append(
            Finding(
                FindingKind.DAILY_SPLIT_MISMATCH,
                {
                    "expected_regular": expected_regular,
                    "expected_overtime": expected_overtime,
                    "regular": evaluation.reg_hours,
                    "overtime": ot,
                },
            )
        )
    return findings


def check_weekly_ot_policy_daily(evaluation: RowEvaluation) -> list[Finding]:
    """Per-day checks for weekly-OT employees; the real rule runs per week."""
    findings = []
    if evaluation.ot_hours <= 0:
        return findings

    if evaluation.time_hours > 0:
        if evaluation.time_hours <= EPSILON:
            findings.append(Finding(FindingKind.WEEKLY_OVERTIME_WITHOUT_WORK))
    else:
        findings.append(Finding(FindingKind.WEEKLY_OVERTIME_WITHOUT_PUNCHES))
    return findings


def check_row(evaluation: RowEvaluation, policy: Policy) -> list[Finding]:
    """All per-day findings for one row under the given policy."""
    findings = check_common_rules(evaluation, policy)
    if policy == Policy.DAILY_OT:
        findings.extend(check_daily_ot_policy(evaluation))
    else:
        findings.extend(check_weekly_ot_policy_daily(evaluation))
    return findings


def apply_weekly_ot_checks(evaluations: list[RowEvaluation]) -> None:
    """
    Weekly-OT rule, applied to day rows grouped by week number.

    Overtime is expected only for hours worked beyond 40 in a week, and only
    when no sick time was taken anywhere in that week. On a mismatch the
    finding goes on every day that entered overtime, or on every day of the
    week when none did.
    """
    weeks: dict[int, list[RowEvaluation]] = defaultdict(list)
    for evaluation in evaluations:
        if evaluation.is_footer or evaluation.week_index is None:
            continue
        weeks[evaluation.week_index].append(evaluation)

    for week_index, days in sorted(weeks.items()):
        worked = sum(day.time_hours for day in days)
        sick = sum(day.sick_hours for day in days)
        overtime = sum(day.ot_hours for day in days)

        if sick > 0:
            expected = 0.0
            finding = Finding(
                FindingKind.WEEKLY_OVERTIME_WITH_SICK,
                {"week_index": week_index, "sick": sick, "found": overtime},
            )
        else:
            expected = max(worked - WEEKLY_OT_THRESHOLD_HOURS, 0.0)
            finding = Finding(
                FindingKind.WEEKLY_OVERTIME_MISMATCH,
                {
                    "week_index": week_index,
                    "worked": worked,
                    "expected": expected,
                    "found": overtime,
                },
            )

        if abs(overtime - expected) <= EPSILON:
            logger.debug("Week %d weekly OT matches expectations", week_index)
            continue

        # TODO: attribution is coarse when several days enter overtime but only one is wrong
        flagged = [day for day in days if day.ot_hours > 0] if overtime > 0 else days
        for day in flagged:
            day.findings.append(finding)
