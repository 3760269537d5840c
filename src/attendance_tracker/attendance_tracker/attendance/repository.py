from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceFilters, AttendanceRecord, CheckoutPatch


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        """Insert the day's record.

        Raises DuplicateKeyError if (user_id, work_date) already exists. The
        check must be enforced by the store itself, not by a prior read.
        """
        raise NotImplementedError

    def insert(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        check_out_time: Optional[datetime] = None,
        total_hours: Optional[float] = None,
    ) -> AttendanceRecord:
        """Insert a complete historical record (demo seeding). Same key rule as check-in.

        ABSENT is never stored and is rejected with ValidationError.
        """
        raise NotImplementedError

    def apply_checkout(self, attendance_id: str, patch: CheckoutPatch) -> Optional[AttendanceRecord]:
        """Return the updated record, or None if attendance_id is unknown.

        Only applies to an open record; raises AlreadyCheckedOutError if the
        record already has a check-out, checked atomically with the write.
        """
        raise NotImplementedError

    def list_for_user(self, user_id: str, month: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Newest first. `month` (YYYY-MM) limits results to that calendar month."""
        raise NotImplementedError

    def list_all(self, filters: AttendanceFilters) -> Sequence[AttendanceRecord]:
        """Newest first."""
        raise NotImplementedError

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
