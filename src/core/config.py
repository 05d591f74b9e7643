"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"
LOG_DIR = os.environ.get("LOG_DIR", "")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# =============================================================================
# POLICY CONFIGURATION
# =============================================================================

# Tolerance (hours) for every numeric comparison
EPSILON = 0.01

DAILY_OT_THRESHOLD_HOURS = 8.0
WEEKLY_OT_THRESHOLD_HOURS = 40.0
MAX_SICK_HOURS_PER_DAY = 8.0

# Employees paid overtime per day instead of per week (matched case-insensitively)
DAILY_OT_EMPLOYEES = {
    name.strip().upper()
    for name in os.environ.get("DAILY_OT_EMPLOYEES", "LU HERNANDEZ").split(",")
    if name.strip()
}

# =============================================================================
# TIMECARD LAYOUT
# =============================================================================

DAY_ORDER = {
    "MONDAY": 1,
    "TUESDAY": 2,
    "WEDNESDAY": 3,
    "THURSDAY": 4,
    "FRIDAY": 5,
    "SATURDAY": 6,
    "SUNDAY": 7,
}

# Column label -> TimecardRow field
COLUMN_FIELDS = {
    "DAY": "day",
    "TIME IN": "time_in",
    "TIME OUT": "time_out",
    "LUNCH START": "lunch_start",
    "LUNCH END": "lunch_end",
    "SICK LEAVE": "sick_leave",
    "REGULAR HOURS": "regular_hours",
    "OVER TIME": "over_time",
    "TOTAL HOURS": "total_hours",
}
REQUIRED_COLUMNS = list(COLUMN_FIELDS)

FOOTER_LABEL = "TOTAL HOURS"

METADATA_MARKER = "EMPLOYEE NAME"
METADATA_FIELDS = {
    "EMPLOYEE NAME": "name",
    "PAY BEGIN DATE": "pay_begin_date",
    "PAY END DATE": "pay_end_date",
    "PAY DATE": "pay_date",
}

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

CHECK_EXTRA_HEADERS = ["Computed Hours", "Rule Error"]
WEEKLY_SUMMARY_HEADERS = [
    "Week #",
    "Worked Hours (punches)",
    "Sick Hours",
    "Regular Hours (entered)",
    "Overtime Hours (entered)",
    "Flags",
]

# =============================================================================
# API CONFIGURATION
# =============================================================================

TIMECARD_API_KEY = os.environ.get("TIMECARD_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_UPLOAD_SIZE_MB = int(os.environ.get("MAX_UPLOAD_SIZE_MB", "5"))
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024
API_VERSION = "1.0.0"
