from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.calendar import month_bounds, trailing_days, working_days_to_date
from ..attendance.model import AttendanceFilters, AttendanceRecord, RecordWithUser
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_key, now_local, parse_month
from ..common.numbers import percentage, round_half_up
from ..core.constants import DEFAULT_RECENT_DAYS, DEFAULT_TREND_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .model import (
    DailyStatus,
    DailyStatusRow,
    DepartmentBreakdown,
    EmployeeDashboard,
    LateArrival,
    ManagerDashboard,
    MonthlySummary,
    OrgSummary,
    TodayCounts,
    TodayStatus,
    TrendPoint,
)


def tally(records: Iterable[AttendanceRecord]) -> tuple[int, int, int, float]:
    """(present, late, half_day, summed hours). ABSENT is never stored, so it is not counted here."""
    present = late = half_day = 0
    hours = 0.0
    for r in records:
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.LATE:
            late += 1
        elif r.status == AttendanceStatus.HALF_DAY:
            half_day += 1
        if r.total_hours:
            hours += r.total_hours
    return present, late, half_day, hours


def summarize_month(records: Sequence[AttendanceRecord], *, month: str, today: date) -> MonthlySummary:
    present, late, half_day, hours = tally(records)
    days = working_days_to_date(month, today)
    return MonthlySummary(
        present=present,
        absent=max(0, days - (present + late + half_day)),
        late=late,
        half_day=half_day,
        total_hours=round_half_up(hours),
        working_days=days,
    )


class ReportService:
    """Read-only rollups for dashboards and summaries.

    Nothing here writes to the store. Absence is always derived: roster minus
    the users who have a record.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        trend_days: int = DEFAULT_TREND_DAYS,
        recent_days: int = DEFAULT_RECENT_DAYS,
    ):
        self._attendance = attendance
        self._users = users
        self._trend_days = int(trend_days)
        self._recent_days = int(recent_days)

    @staticmethod
    def _resolve_month(month: Optional[str], today: date) -> str:
        if not month:
            return month_key(today)
        year, mon = parse_month(month)
        return f"{year:04d}-{mon:02d}"

    def monthly_summary(self, user_id: str, *, month: str | None = None, today: date | None = None) -> MonthlySummary:
        today = today or now_local().date()
        month = self._resolve_month(month, today)
        records = self._attendance.list_for_user(user_id, month)
        return summarize_month(records, month=month, today=today)

    def org_summary(self, *, month: str | None = None, today: date | None = None) -> OrgSummary:
        today = today or now_local().date()
        month = self._resolve_month(month, today)
        roster = self._users.list_employees()
        days = working_days_to_date(month, today)

        present = late = half_day = absent = 0
        for emp in roster:
            s = summarize_month(self._attendance.list_for_user(emp.user_id, month), month=month, today=today)
            present += s.present
            late += s.late
            half_day += s.half_day
            absent += s.absent

        return OrgSummary(
            month=month,
            total_employees=len(roster),
            present=present,
            late=late,
            half_day=half_day,
            absent=absent,
            working_days=days,
        )

    def daily_status(self, work_date: date | None = None) -> DailyStatus:
        work_date = work_date or now_local().date()
        records = self._attendance.list_for_date(work_date)
        by_user = {r.user_id: r for r in records}
        roster = self._users.list_employees()
        roster_by_id = {u.user_id: u for u in roster}

        return DailyStatus(
            work_date=work_date,
            employees=[DailyStatusRow(user=u, record=by_user.get(u.user_id)) for u in roster],
            records=[RecordWithUser(record=r, user=roster_by_id.get(r.user_id)) for r in records],
        )

    def weekly_trend(self, *, today: date | None = None, roster: Sequence[User] | None = None) -> list[TrendPoint]:
        today = today or now_local().date()
        roster = roster if roster is not None else self._users.list_employees()
        roster_ids = {u.user_id for u in roster}

        points: list[TrendPoint] = []
        for day in trailing_days(today, self._trend_days):
            day_records = [r for r in self._attendance.list_for_date(day) if r.user_id in roster_ids]
            points.append(
                TrendPoint(
                    work_date=day,
                    present=sum(1 for r in day_records if r.status == AttendanceStatus.PRESENT),
                    late=sum(1 for r in day_records if r.status == AttendanceStatus.LATE),
                    absent=len(roster_ids) - len({r.user_id for r in day_records}),
                )
            )
        return points

    def department_breakdown(
        self,
        *,
        today: date | None = None,
        roster: Sequence[User] | None = None,
    ) -> list[DepartmentBreakdown]:
        """Month-to-date present-or-late share per department, in roster order."""
        today = today or now_local().date()
        roster = roster if roster is not None else self._users.list_employees()
        month = month_key(today)
        days = working_days_to_date(month, today)
        start, _ = month_bounds(month)

        month_records = self._attendance.list_all(AttendanceFilters(date_from=start, date_to=today))
        attended: dict[str, int] = {}
        for r in month_records:
            if r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
                attended[r.user_id] = attended.get(r.user_id, 0) + 1

        departments: dict[str, list[User]] = {}
        for emp in roster:
            departments.setdefault(emp.department, []).append(emp)

        out: list[DepartmentBreakdown] = []
        for dept, members in departments.items():
            present = sum(attended.get(m.user_id, 0) for m in members)
            out.append(
                DepartmentBreakdown(
                    department=dept,
                    present=present,
                    total=len(members),
                    percentage=percentage(present, len(members) * days),
                )
            )
        return out

    def manager_dashboard(self, *, today: date | None = None) -> ManagerDashboard:
        today = today or now_local().date()
        roster = self._users.list_employees()
        by_user = {r.user_id: r for r in self._attendance.list_for_date(today)}

        late_today = [
            LateArrival(user=u, check_in_time=by_user[u.user_id].check_in_time)
            for u in roster
            if u.user_id in by_user and by_user[u.user_id].status == AttendanceStatus.LATE
        ]
        absent_today = [u for u in roster if u.user_id not in by_user]
        checked_in = len(roster) - len(absent_today)

        return ManagerDashboard(
            total_employees=len(roster),
            today=TodayCounts(present=checked_in, late=len(late_today), absent=len(absent_today)),
            late_today=late_today,
            absent_today=absent_today,
            weekly_trend=self.weekly_trend(today=today, roster=roster),
            department_wise=self.department_breakdown(today=today, roster=roster),
        )

    def employee_dashboard(self, user_id: str, *, today: date | None = None) -> EmployeeDashboard:
        today = today or now_local().date()
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        recent = self._attendance.list_all(
            AttendanceFilters(
                user_id=user_id,
                date_from=today - timedelta(days=self._recent_days - 1),
                date_to=today,
            )
        )
        return EmployeeDashboard(
            today_status=TodayStatus.from_record(self._attendance.get_for_user_and_date(user_id, today)),
            month_stats=self.monthly_summary(user_id, today=today),
            recent_attendance=list(recent),
        )
