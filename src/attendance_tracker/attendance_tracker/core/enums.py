from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Attendance status.

    Only PRESENT, LATE and HALF_DAY are ever stored. ABSENT is inferred at
    read time from days without a record.
    """

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


STORED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY})
