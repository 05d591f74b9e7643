"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC
    daily_ot_employees: int


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TIMECARD_HAS_ERRORS = "TIMECARD_HAS_ERRORS"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class FindingResult(BaseModel):
    kind: str
    message: str
    params: dict[str, float | int | None] = {}


class RowResult(BaseModel):
    """Evaluated timecard row."""

    day: str
    week_index: int | None
    is_footer: bool = False
    time_hours: float
    sick_hours: float
    reg_hours: float
    ot_hours: float
    total_cell: float | None
    computed_hours: float | None
    has_error: bool
    findings: list[FindingResult] = []


class WeekResult(BaseModel):
    week_index: int
    worked_hours: float
    sick_hours: float
    reg_hours: float
    ot_hours: float
    has_errors: bool


class PayrollTotalsResult(BaseModel):
    regular_hours: float | None = None
    sick_hours: float | None = None
    overtime_hours: float | None = None
    total_hours: float | None = None


class CheckResponse(BaseModel):
    """Timecard check result."""

    employee_name: str
    pay_begin_date: str
    pay_end_date: str
    pay_date: str
    policy: str
    has_errors: bool
    error_rows: int
    payroll_totals: PayrollTotalsResult
    weekly_summary: list[WeekResult]
    rows: list[RowResult]
