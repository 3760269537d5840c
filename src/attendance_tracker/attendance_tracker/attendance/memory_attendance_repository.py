from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import STORED_STATUSES, AttendanceStatus
from ..core.exceptions import AlreadyCheckedOutError, DuplicateKeyError, ValidationError
from .calendar import month_bounds
from .model import AttendanceFilters, AttendanceRecord, CheckoutPatch, sort_newest_first
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Non-persistent store; the lock makes key check + insert atomic."""

    def __init__(self):
        self._by_id: dict[str, AttendanceRecord] = {}
        self._by_user_date: dict[tuple[str, date], str] = {}
        self._lock = threading.Lock()

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        attendance_id = self._by_user_date.get((user_id, work_date))
        return self._by_id.get(attendance_id) if attendance_id else None

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        return self.insert(
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            status=status,
        )

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
        """Insert a full record (used by check-in and by demo seeding)."""
        if status not in STORED_STATUSES:
            raise ValidationError(f"Status {status.value!r} is never stored")
        with self._lock:
            key = (user_id, work_date)
            if key in self._by_user_date:
                raise DuplicateKeyError("Attendance record already exists for this user and date")
            rec = AttendanceRecord(
                attendance_id=str(uuid.uuid4()),
                user_id=user_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                status=status,
                total_hours=total_hours,
                created_at=datetime.now(),
            )
            self._by_id[rec.attendance_id] = rec
            self._by_user_date[key] = rec.attendance_id
            return rec

    def apply_checkout(self, attendance_id: str, patch: CheckoutPatch) -> Optional[AttendanceRecord]:
        with self._lock:
            existing = self._by_id.get(attendance_id)
            if not existing:
                return None
            if existing.check_out_time is not None:
                raise AlreadyCheckedOutError()
            updated = replace(
                existing,
                check_out_time=patch.check_out_time,
                total_hours=patch.total_hours,
                status=patch.status,
            )
            self._by_id[attendance_id] = updated
            return updated

    def _snapshot(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._by_id.values())

    def list_for_user(self, user_id: str, month: Optional[str] = None) -> Sequence[AttendanceRecord]:
        records = [r for r in self._snapshot() if r.user_id == user_id]
        if month:
            start, end = month_bounds(month)
            records = [r for r in records if start <= r.work_date <= end]
        return sort_newest_first(records)

    def list_all(self, filters: AttendanceFilters) -> Sequence[AttendanceRecord]:
        return sort_newest_first(r for r in self._snapshot() if filters.matches(r))

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return sort_newest_first(r for r in self._snapshot() if r.work_date == work_date)
