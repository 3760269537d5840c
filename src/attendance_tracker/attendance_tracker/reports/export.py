from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..attendance.model import AttendanceFilters, RecordWithUser
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_clock, now_local
from ..core.constants import CSV_HEADER


def to_csv_row(item: RecordWithUser) -> list[str]:
    r, u = item.record, item.user
    return [
        u.employee_id if u else "",
        u.name if u else "",
        u.department if u else "",
        r.work_date.isoformat(),
        format_clock(r.check_in_time),
        format_clock(r.check_out_time),
        r.status.value,
        f"{r.total_hours:.1f}" if r.total_hours is not None else "",
    ]


def write_csv(rows: Sequence[RecordWithUser]) -> str:
    """Render rows as CSV text.

    The csv module quotes fields containing commas or quotes, so free-text
    names and departments cannot break the column layout.
    """
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in rows:
        writer.writerow(to_csv_row(item))
    return out.getvalue()


class CsvExportService:
    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def export(self, filters: AttendanceFilters) -> str:
        return write_csv(self._attendance.list_all_with_users(filters))

    @staticmethod
    def filename(today: date | None = None) -> str:
        today = today or now_local().date()
        return f"attendance-report-{today.isoformat()}.csv"
