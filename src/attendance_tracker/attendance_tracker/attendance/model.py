from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day.

    (user_id, work_date) is the natural key.
    """

    attendance_id: str
    user_id: str
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[float]
    created_at: datetime

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "check_in_time": isoformat_or_none(self.check_in_time),
            "check_out_time": isoformat_or_none(self.check_out_time),
            "status": self.status.value,
            "total_hours": self.total_hours,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class CheckoutPatch:
    """The only mutation allowed on an existing record."""

    check_out_time: datetime
    total_hours: float
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceFilters:
    """Conjunctive filters for listing records across users."""

    user_id: Optional[str] = None
    work_date: Optional[date] = None
    status: Optional[AttendanceStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    def matches(self, r: AttendanceRecord) -> bool:
        if self.user_id is not None and r.user_id != self.user_id:
            return False
        if self.work_date is not None and r.work_date != self.work_date:
            return False
        if self.status is not None and r.status != self.status:
            return False
        if self.date_from is not None and r.work_date < self.date_from:
            return False
        if self.date_to is not None and r.work_date > self.date_to:
            return False
        return True


@dataclass(frozen=True)
class RecordWithUser:
    """Read-model: record joined with the owner's display identity."""

    record: AttendanceRecord
    user: Optional[User]

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["user"] = self.user.to_public_dict() if self.user else None
        return out


def sort_newest_first(records):
    """Date descending, then check-in and id so equal dates keep a stable order."""
    return sorted(
        records,
        key=lambda r: (r.work_date, r.check_in_time or datetime.min, r.attendance_id),
        reverse=True,
    )
