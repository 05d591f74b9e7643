"""API route modules."""

from .health import router as health_router
from .timecards import router as timecards_router

__all__ = ["health_router", "timecards_router"]
