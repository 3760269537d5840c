from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceRecord, RecordWithUser
from ..common.datetime_utils import isoformat_or_none
from ..core.enums import AttendanceStatus
from ..users.model import User


@dataclass(frozen=True)
class MonthlySummary:
    """Per-user month rollup.

    absent is clamped at 0, so the four counts add up to working_days whenever
    every record falls on a counted working day.
    """

    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float
    working_days: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrgSummary:
    month: str
    total_employees: int
    present: int
    late: int
    half_day: int
    absent: int
    working_days: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DailyStatusRow:
    """One roster employee on one day. record=None means no check-in (absent)."""

    user: User
    record: Optional[AttendanceRecord]

    @property
    def status(self) -> AttendanceStatus:
        return self.record.status if self.record else AttendanceStatus.ABSENT

    def to_dict(self) -> dict:
        return {
            "user": self.user.to_public_dict(),
            "record": self.record.to_dict() if self.record else None,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class DailyStatus:
    work_date: date
    employees: list[DailyStatusRow]
    records: list[RecordWithUser]

    @property
    def without_record(self) -> list[User]:
        return [row.user for row in self.employees if row.record is None]

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "employees": [row.to_dict() for row in self.employees],
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class TrendPoint:
    work_date: date
    present: int
    late: int
    absent: int

    def to_dict(self) -> dict:
        return {"date": self.work_date.isoformat(), "present": self.present, "late": self.late, "absent": self.absent}


@dataclass(frozen=True)
class DepartmentBreakdown:
    department: str
    present: int
    total: int
    percentage: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LateArrival:
    user: User
    check_in_time: datetime

    def to_dict(self) -> dict:
        out = self.user.to_public_dict()
        out["check_in_time"] = self.check_in_time.isoformat()
        return out


@dataclass(frozen=True)
class TodayCounts:
    present: int
    late: int
    absent: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ManagerDashboard:
    total_employees: int
    today: TodayCounts
    late_today: list[LateArrival]
    absent_today: list[User]
    weekly_trend: list[TrendPoint]
    department_wise: list[DepartmentBreakdown]

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "today": self.today.to_dict(),
            "late_today": [x.to_dict() for x in self.late_today],
            "absent_today": [u.to_public_dict() for u in self.absent_today],
            "weekly_trend": [p.to_dict() for p in self.weekly_trend],
            "department_wise": [d.to_dict() for d in self.department_wise],
        }


@dataclass(frozen=True)
class TodayStatus:
    checked_in: bool
    checked_out: bool
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: Optional[AttendanceStatus]

    @classmethod
    def from_record(cls, record: Optional[AttendanceRecord]) -> "TodayStatus":
        if record is None:
            return cls(False, False, None, None, None)
        return cls(
            checked_in=record.check_in_time is not None,
            checked_out=record.check_out_time is not None,
            check_in_time=record.check_in_time,
            check_out_time=record.check_out_time,
            status=record.status,
        )

    def to_dict(self) -> dict:
        return {
            "checked_in": self.checked_in,
            "checked_out": self.checked_out,
            "check_in_time": isoformat_or_none(self.check_in_time),
            "check_out_time": isoformat_or_none(self.check_out_time),
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class EmployeeDashboard:
    today_status: TodayStatus
    month_stats: MonthlySummary
    recent_attendance: list[AttendanceRecord] = field(default_factory=list)

    @property
    def total_hours_this_month(self) -> float:
        return self.month_stats.total_hours

    def to_dict(self) -> dict:
        stats = self.month_stats
        return {
            "today_status": self.today_status.to_dict(),
            "month_stats": {
                "present": stats.present,
                "absent": stats.absent,
                "late": stats.late,
                "half_day": stats.half_day,
            },
            "total_hours_this_month": self.total_hours_this_month,
            "recent_attendance": [r.to_dict() for r in self.recent_attendance],
        }
