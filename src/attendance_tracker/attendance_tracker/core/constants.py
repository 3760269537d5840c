"""Constants and defaults.

Note: Keep business thresholds here so services and settings share one source.
"""

from datetime import time

DEFAULT_CHECKIN_CUTOFF = time(9, 15, 0)
DEFAULT_HALF_DAY_HOURS = 4.0
DEFAULT_TOKEN_TTL_DAYS = 7
DEFAULT_TREND_DAYS = 7
DEFAULT_RECENT_DAYS = 7

CSV_HEADER = (
    "Employee ID",
    "Name",
    "Department",
    "Date",
    "Check In",
    "Check Out",
    "Status",
    "Hours Worked",
)
