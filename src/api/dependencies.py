"""FastAPI dependencies for authentication and policy lookup."""

import logging
import secrets

from fastapi import Header, HTTPException, status

from api.models.responses import ErrorCodes
from core.config import DAILY_OT_EMPLOYEES, TIMECARD_API_KEY

logger = logging.getLogger(__name__)


async def verify_api_key(
    x_api_key: str | None = Header(None, alias="X-API-Key"),
) -> str | None:
    """
    Verify the X-API-Key header when an API key is configured.

    With no TIMECARD_API_KEY set the API is open (local use).

    Raises:
        HTTPException: 401 if the key is missing or wrong
    """
    if not TIMECARD_API_KEY:
        return None

    # Constant-time comparison
    if not x_api_key or not secrets.compare_digest(x_api_key, TIMECARD_API_KEY):
        logger.warning("Rejected request with missing or invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": "Invalid or missing API key",
                "code": ErrorCodes.UNAUTHORIZED,
                "details": [],
            },
        )

    return x_api_key


def get_daily_ot_employees() -> set[str]:
    """Name list used to pick the daily-OT policy (overridable in tests)."""
    return DAILY_OT_EMPLOYEES
