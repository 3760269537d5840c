from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_month
from ..common.numbers import round_half_up
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    DuplicateKeyError,
    NoCheckInFoundError,
    NotFoundError,
    ValidationError,
)
from ..users.model import User
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceFilters, AttendanceRecord, CheckoutPatch, RecordWithUser
from .repository import AttendanceRepository


def elapsed_hours(check_in: datetime, check_out: datetime) -> float:
    return (check_out - check_in).total_seconds() / 3600


class AttendanceService:
    """Check-in/check-out state machine and record queries.

    Per user per day: no record -> checked in (present|late) -> checked out
    (present|late|half-day). There is no way back and no cancellation.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")

        if self._attendance.get_for_user_and_date(user_id, today):
            raise AlreadyCheckedInError()

        decision = self._factory.for_checkin(now=now).decide_checkin(now=now)

        try:
            return self._attendance.create_checkin(
                user_id=user_id,
                work_date=today,
                check_in_time=now,
                status=decision.status,
            )
        except DuplicateKeyError as e:
            # Lost a race with a concurrent check-in for the same day.
            raise AlreadyCheckedInError() from e

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise NoCheckInFoundError()
        if record.is_checked_out:
            raise AlreadyCheckedOutError()
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be earlier than check-in time")

        # The half-day rule looks at the exact elapsed time; only the stored value is rounded.
        worked = elapsed_hours(record.check_in_time, now)
        total_hours = round_half_up(worked)
        decision = self._factory.for_checkout(worked_hours=worked).decide_checkout(
            worked_hours=worked,
            current=record.status,
        )

        updated = self._attendance.apply_checkout(
            record.attendance_id,
            CheckoutPatch(check_out_time=now, total_hours=total_hours, status=decision.status),
        )
        if updated is None:
            raise NoCheckInFoundError()
        return updated

    def get_today_record(self, user_id: str, today: date | None = None) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a user"""
        today = today or now_local().date()
        return self._attendance.get_for_user_and_date(user_id, today)

    def get_history(self, user_id: str, *, month: str | None = None) -> Sequence[AttendanceRecord]:
        if month:
            year, mon = parse_month(month)
            month = f"{year:04d}-{mon:02d}"
        return self._attendance.list_for_user(user_id, month)

    def resolve_employee(self, ref: str) -> User:
        """Find a user by id, falling back to the employee code (e.g. EMP001)."""
        user = self._users.get_by_id(ref) or self._users.get_by_employee_id(ref)
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def get_employee_history(self, ref: str, *, month: str | None = None) -> Sequence[AttendanceRecord]:
        user = self.resolve_employee(ref)
        return self.get_history(user.user_id, month=month)

    def list_all(self, filters: AttendanceFilters) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all(filters)

    def join_users(self, records: Sequence[AttendanceRecord]) -> list[RecordWithUser]:
        """Attach owner identity. The roster is read once; other owners (managers) are looked up by id."""
        owners: dict[str, Optional[User]] = {u.user_id: u for u in self._users.list_employees()}
        out: list[RecordWithUser] = []
        for r in records:
            if r.user_id not in owners:
                owners[r.user_id] = self._users.get_by_id(r.user_id)
            out.append(RecordWithUser(record=r, user=owners[r.user_id]))
        return out

    def list_all_with_users(self, filters: AttendanceFilters) -> list[RecordWithUser]:
        return self.join_users(self.list_all(filters))
