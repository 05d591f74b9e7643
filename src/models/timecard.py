"""
Data models for timecard rows, findings and evaluation results.

Rows are validated into dataclasses once at ingestion; everything downstream
works with typed fields instead of column-label lookups.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.config import COLUMN_FIELDS
from core.times import format_hours, parse_number_or_none


class Policy(str, Enum):
    """Overtime policy applied to one employee's timecard."""

    DAILY_OT = "DAILY_OT"
    WEEKLY_OT = "WEEKLY_OT"


class RowKind(str, Enum):
    DAY = "DAY"
    FOOTER = "FOOTER"
    MALFORMED = "MALFORMED"


# =============================================================================
# ROWS
# =============================================================================


@dataclass(frozen=True)
class TimecardRow:
    """One timecard line: raw trimmed cell text per recognized column."""

    day: str = ""
    time_in: str = ""
    time_out: str = ""
    lunch_start: str = ""
    lunch_end: str = ""
    sick_leave: str = ""
    regular_hours: str = ""
    over_time: str = ""
    total_hours: str = ""
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "TimecardRow":
        """Build a row from a column label -> value mapping (labels normalized)."""
        known = {}
        extra = {}
        for label, value in values.items():
            key = str(label).strip().upper()
            text = "" if value is None else str(value).strip()
            if key in COLUMN_FIELDS:
                known[COLUMN_FIELDS[key]] = text
            else:
                extra[key] = text
        return cls(**known, extra=extra)

    def cell(self, label: str) -> str:
        """Return a cell by its column label, recognized or extra."""
        key = label.strip().upper()
        if key in COLUMN_FIELDS:
            return getattr(self, COLUMN_FIELDS[key])
        return self.extra.get(key, "")

    @property
    def sick_hours(self) -> float:
        return parse_number_or_none(self.sick_leave) or 0.0

    @property
    def reg_hours(self) -> float:
        return parse_number_or_none(self.regular_hours) or 0.0

    @property
    def ot_hours(self) -> float:
        return parse_number_or_none(self.over_time) or 0.0

    @property
    def total_cell(self) -> float | None:
        return parse_number_or_none(self.total_hours)


@dataclass(frozen=True)
class ClassifiedRow:
    """A row labelled by the classifier."""

    row: TimecardRow
    kind: RowKind
    day_name: str | None = None
    week_index: int | None = None

    @property
    def is_day(self) -> bool:
        return self.kind == RowKind.DAY

    @property
    def is_footer(self) -> bool:
        return self.kind == RowKind.FOOTER


# =============================================================================
# FINDINGS
# =============================================================================


class FindingKind(str, Enum):
    TOTALS_MISMATCH = "TOTALS_MISMATCH"
    REGULAR_HOURS_MISMATCH = "REGULAR_HOURS_MISMATCH"
    HOURS_WITHOUT_PUNCHES = "HOURS_WITHOUT_PUNCHES"
    SICK_DAY_WITH_WORK_HOURS = "SICK_DAY_WITH_WORK_HOURS"
    SICK_DAY_EXCEEDS_LIMIT = "SICK_DAY_EXCEEDS_LIMIT"
    DAILY_SICK_WITH_OVERTIME = "DAILY_SICK_WITH_OVERTIME"
    DAILY_WORK_PLUS_SICK_EXCEEDS_LIMIT = "DAILY_WORK_PLUS_SICK_EXCEEDS_LIMIT"
    DAILY_OVERTIME_ON_SICK_DAY = "DAILY_OVERTIME_ON_SICK_DAY"
    DAILY_OVERTIME_UNDER_THRESHOLD = "DAILY_OVERTIME_UNDER_THRESHOLD"
    DAILY_SPLIT_MISMATCH = "DAILY_SPLIT_MISMATCH"
    DAILY_OVERTIME_WITHOUT_PUNCHES = "DAILY_OVERTIME_WITHOUT_PUNCHES"
    WEEKLY_OVERTIME_WITHOUT_WORK = "WEEKLY_OVERTIME_WITHOUT_WORK"
    WEEKLY_OVERTIME_WITHOUT_PUNCHES = "WEEKLY_OVERTIME_WITHOUT_PUNCHES"
    WEEKLY_OVERTIME_WITH_SICK = "WEEKLY_OVERTIME_WITH_SICK"
    WEEKLY_OVERTIME_MISMATCH = "WEEKLY_OVERTIME_MISMATCH"


# Message templates; hour parameters are formatted with format_hours
FINDING_MESSAGES = {
    FindingKind.TOTALS_MISMATCH: (
        "Total hours ({total}) do not match punches + sick ({computed})."
    ),
    FindingKind.REGULAR_HOURS_MISMATCH: (
        "Regular hours ({regular}) do not match punched time ({worked})."
    ),
    FindingKind.HOURS_WITHOUT_PUNCHES: (
        "No punches for this day, but regular and/or overtime hours were entered."
    ),
    FindingKind.SICK_DAY_WITH_WORK_HOURS: (
        "Pure sick day should not have regular or overtime hours."
    ),
    FindingKind.SICK_DAY_EXCEEDS_LIMIT: "Sick day cannot exceed {limit} hours.",
    FindingKind.DAILY_SICK_WITH_OVERTIME: (
        "Daily-OT policy: sick time cannot be combined with overtime."
    ),
    FindingKind.DAILY_WORK_PLUS_SICK_EXCEEDS_LIMIT: (
        "Daily-OT policy: worked hours + sick exceed {limit} hours in one day."
    ),
    FindingKind.DAILY_OVERTIME_ON_SICK_DAY: (
        "Daily-OT policy: overtime not allowed on days with sick time."
    ),
    FindingKind.DAILY_OVERTIME_UNDER_THRESHOLD: (
        "Daily-OT policy: overtime present but worked hours are {limit} or less."
    ),
    FindingKind.DAILY_SPLIT_MISMATCH: (
        "Daily-OT policy: expected {expected_regular} regular and "
        "{expected_overtime} overtime based on punches."
    ),
    FindingKind.DAILY_OVERTIME_WITHOUT_PUNCHES: (
        "Daily-OT policy: no punches, overtime should not be entered."
    ),
    FindingKind.WEEKLY_OVERTIME_WITHOUT_WORK: (
        "Overtime is entered but there are no worked hours for this day."
    ),
    FindingKind.WEEKLY_OVERTIME_WITHOUT_PUNCHES: (
        "No punches for this day, but overtime hours were entered."
    ),
    FindingKind.WEEKLY_OVERTIME_WITH_SICK: (
        "Weekly OT rule: week {week_index} has sick time ({sick}h), "
        "so overtime should be 0 (found {found})."
    ),
    FindingKind.WEEKLY_OVERTIME_MISMATCH: (
        "Weekly OT rule: week {week_index} worked = {worked}h, "
        "expected overtime = {expected} but found {found}."
    ),
}


@dataclass
class Finding:
    """A single rule violation: what kind, plus the numbers behind it."""

    kind: FindingKind
    params: dict[str, Any] = field(default_factory=dict)

    def render(self) -> str:
        """Render as a human-readable message."""
        values = {}
        for key, value in self.params.items():
            # Week numbers stay integers, hours get two decimals
            values[key] = value if isinstance(value, int) else format_hours(value)
        return FINDING_MESSAGES[self.kind].format(**values)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "params": dict(self.params), "message": self.render()}


# =============================================================================
# RESULTS
# =============================================================================


@dataclass
class RowEvaluation:
    """Truth and verdict for one classified row."""

    time_hours: float
    sick_hours: float
    reg_hours: float
    ot_hours: float
    total_cell: float | None
    computed_hours: float | None
    week_index: int | None = None
    day_name: str | None = None
    is_footer: bool = False
    findings: list[Finding] = field(default_factory=list)

    @property
    def has_error(self) -> bool:
        return not self.is_footer and bool(self.findings)

    @property
    def error_messages(self) -> list[str]:
        return [finding.render() for finding in self.findings]

    def to_dict(self) -> dict:
        data = {
            "timeHours": self.time_hours,
            "sickHours": self.sick_hours,
            "regHours": self.reg_hours,
            "otHours": self.ot_hours,
            "totalCell": self.total_cell,
            "computedHours": self.computed_hours,
            "hasError": self.has_error,
            "errorMessages": self.error_messages,
            "weekIndex": self.week_index,
        }
        if self.is_footer:
            data["isFooter"] = True
        return data


@dataclass
class WeekSummary:
    """Per-week totals handed to presentation code."""

    week_index: int
    worked_hours: float = 0.0
    sick_hours: float = 0.0
    reg_hours: float = 0.0
    ot_hours: float = 0.0
    has_errors: bool = False

    def to_dict(self) -> dict:
        return {
            "weekIndex": self.week_index,
            "workedHours": self.worked_hours,
            "sickHours": self.sick_hours,
            "regHours": self.reg_hours,
            "otHours": self.ot_hours,
            "hasErrors": self.has_errors,
        }


@dataclass(frozen=True)
class EmployeeInfo:
    name: str = ""
    pay_begin_date: str = ""
    pay_end_date: str = ""
    pay_date: str = ""


@dataclass(frozen=True)
class PayrollTotals:
    """Totals printed on the sheet's footer line, for cross-reference only."""

    regular_hours: float | None = None
    sick_hours: float | None = None
    overtime_hours: float | None = None
    total_hours: float | None = None


@dataclass(frozen=True)
class EvaluationContext:
    """Everything one evaluation run needs, produced by engine.load()."""

    employee: EmployeeInfo
    policy: Policy
    rows: tuple[ClassifiedRow, ...]
    payroll_totals: PayrollTotals = field(default_factory=PayrollTotals)
    headers: tuple[str, ...] = ()

    @property
    def footer(self) -> ClassifiedRow | None:
        if self.rows and self.rows[-1].is_footer:
            return self.rows[-1]
        return None


@dataclass
class TimecardEvaluation:
    """Result of evaluating a context: per-row verdicts plus weekly summary."""

    context: EvaluationContext
    rows: list[RowEvaluation]
    weekly_summary: list[WeekSummary]

    @property
    def has_errors(self) -> bool:
        return any(row.has_error for row in self.rows if not row.is_footer)

    @property
    def error_count(self) -> int:
        return sum(1 for row in self.rows if row.has_error)
