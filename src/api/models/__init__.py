"""API Pydantic models."""

from .responses import (
    CheckResponse,
    ErrorCodes,
    ErrorResponse,
    FindingResult,
    HealthResponse,
    PayrollTotalsResult,
    RowResult,
    WeekResult,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "CheckResponse",
    "FindingResult",
    "PayrollTotalsResult",
    "RowResult",
    "WeekResult",
]
