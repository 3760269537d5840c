from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import STORED_STATUSES, AttendanceStatus
from ..core.exceptions import AlreadyCheckedOutError, DuplicateKeyError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, is_duplicate_key
from .calendar import month_bounds
from .model import AttendanceFilters, AttendanceRecord, CheckoutPatch
from .repository import AttendanceRepository

_COLUMNS = "attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours, created_at"
_ORDER = "ORDER BY work_date DESC, check_in_time DESC, attendance_id DESC"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=as_float(r.get("total_hours")),
        created_at=r["created_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, order: str = _ORDER) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where} {order}", params)
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        return self.insert(user_id=user_id, work_date=work_date, check_in_time=check_in_time, status=status)

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
        if status not in STORED_STATUSES:
            raise ValidationError(f"Status {status.value!r} is never stored")
        rec = AttendanceRecord(
            attendance_id=str(uuid.uuid4()),
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            total_hours=total_hours,
            created_at=datetime.now().replace(microsecond=0),
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # uq_attendance_user_date makes this insert the authoritative conflict check.
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        rec.attendance_id,
                        rec.user_id,
                        rec.work_date,
                        rec.check_in_time,
                        rec.check_out_time,
                        rec.status.value,
                        rec.total_hours,
                        rec.created_at,
                    ),
                )
        except Exception as e:
            if is_duplicate_key(e):
                raise DuplicateKeyError("Attendance record already exists for this user and date") from e
            raise
        return rec

    def apply_checkout(self, attendance_id: str, patch: CheckoutPatch) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s, status=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (patch.check_out_time, patch.total_hours, patch.status.value, attendance_id),
            )
            updated = cur.rowcount
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            if r is None:
                return None
            if not updated:
                raise AlreadyCheckedOutError()
            return _to_record(r)

    def list_for_user(self, user_id: str, month: Optional[str] = None) -> Sequence[AttendanceRecord]:
        if month:
            start, end = month_bounds(month)
            return self._select("user_id=%s AND work_date BETWEEN %s AND %s", (user_id, start, end))
        return self._select("user_id=%s", (user_id,))

    def list_all(self, filters: AttendanceFilters) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if filters.user_id is not None:
            clauses.append("user_id=%s")
            params.append(filters.user_id)
        if filters.work_date is not None:
            clauses.append("work_date=%s")
            params.append(filters.work_date)
        if filters.status is not None:
            clauses.append("status=%s")
            params.append(filters.status.value)
        if filters.date_from is not None:
            clauses.append("work_date>=%s")
            params.append(filters.date_from)
        if filters.date_to is not None:
            clauses.append("work_date<=%s")
            params.append(filters.date_to)

        return self._select(" AND ".join(clauses), tuple(params))

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._select("work_date=%s", (work_date,))
