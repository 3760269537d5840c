import threading
from datetime import date, datetime

import pytest

from src.attendance_tracker.attendance_tracker.attendance.memory_attendance_repository import (
    InMemoryAttendanceRepository,
)
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceFilters, CheckoutPatch
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AlreadyCheckedOutError,
    DuplicateKeyError,
    ValidationError,
)


def _checkin(repo, user_id, day, hour=9, status=AttendanceStatus.PRESENT):
    return repo.create_checkin(
        user_id=user_id,
        work_date=day,
        check_in_time=datetime.combine(day, datetime.min.time()).replace(hour=hour),
        status=status,
    )


def test_natural_key_is_unique():
    repo = InMemoryAttendanceRepository()
    _checkin(repo, "u1", date(2026, 2, 4))

    with pytest.raises(DuplicateKeyError):
        _checkin(repo, "u1", date(2026, 2, 4), hour=10)

    _checkin(repo, "u2", date(2026, 2, 4))


def test_apply_checkout_only_touches_checkout_fields():
    repo = InMemoryAttendanceRepository()
    rec = _checkin(repo, "u1", date(2026, 2, 4), status=AttendanceStatus.LATE)

    updated = repo.apply_checkout(
        rec.attendance_id,
        CheckoutPatch(check_out_time=datetime(2026, 2, 4, 17), total_hours=8.0, status=AttendanceStatus.LATE),
    )

    assert updated.check_in_time == rec.check_in_time
    assert updated.created_at == rec.created_at
    assert updated.total_hours == 8.0
    assert repo.apply_checkout("missing", CheckoutPatch(datetime(2026, 2, 4, 17), 8.0, AttendanceStatus.PRESENT)) is None


def test_lists_are_newest_first():
    repo = InMemoryAttendanceRepository()
    for d in (2, 4, 3):
        _checkin(repo, "u1", date(2026, 2, d))

    days = [r.work_date.day for r in repo.list_for_user("u1")]
    assert days == [4, 3, 2]


def test_month_filter():
    repo = InMemoryAttendanceRepository()
    _checkin(repo, "u1", date(2026, 1, 30))
    _checkin(repo, "u1", date(2026, 2, 2))

    assert [r.work_date for r in repo.list_for_user("u1", "2026-01")] == [date(2026, 1, 30)]


def test_list_all_filters_are_conjunctive_and_repeatable():
    repo = InMemoryAttendanceRepository()
    _checkin(repo, "u1", date(2026, 2, 2))
    _checkin(repo, "u1", date(2026, 2, 3), status=AttendanceStatus.LATE)
    _checkin(repo, "u2", date(2026, 2, 3), status=AttendanceStatus.LATE)
    _checkin(repo, "u2", date(2026, 2, 5))

    filters = AttendanceFilters(status=AttendanceStatus.LATE, date_from=date(2026, 2, 3), date_to=date(2026, 2, 4))
    first = repo.list_all(filters)
    second = repo.list_all(filters)

    assert {r.user_id for r in first} == {"u1", "u2"}
    assert [r.attendance_id for r in first] == [r.attendance_id for r in second]
    assert len(repo.list_all(AttendanceFilters(user_id="u2", status=AttendanceStatus.LATE))) == 1
    assert len(repo.list_all(AttendanceFilters())) == 4


def test_apply_checkout_is_one_shot():
    repo = InMemoryAttendanceRepository()
    rec = _checkin(repo, "u1", date(2026, 2, 4))
    repo.apply_checkout(rec.attendance_id, CheckoutPatch(datetime(2026, 2, 4, 17), 8.0, AttendanceStatus.PRESENT))

    with pytest.raises(AlreadyCheckedOutError):
        repo.apply_checkout(rec.attendance_id, CheckoutPatch(datetime(2026, 2, 4, 11), 2.0, AttendanceStatus.HALF_DAY))

    assert repo.get_by_id(rec.attendance_id).total_hours == 8.0


def test_absent_is_never_stored():
    repo = InMemoryAttendanceRepository()

    with pytest.raises(ValidationError):
        _checkin(repo, "u1", date(2026, 2, 4), status=AttendanceStatus.ABSENT)


def test_month_filter_uses_calendar_month_not_prefix():
    repo = InMemoryAttendanceRepository()
    for month in (1, 10, 11):
        _checkin(repo, "u1", date(2026, month, 5))

    assert [r.work_date for r in repo.list_for_user("u1", "2026-1")] == [date(2026, 1, 5)]


def test_reads_while_inserting_from_other_threads():
    repo = InMemoryAttendanceRepository()
    errors = []

    def writer(user_id):
        for d in range(1, 29):
            _checkin(repo, user_id, date(2026, 2, d))

    def reader():
        try:
            for _ in range(200):
                repo.list_all(AttendanceFilters())
                repo.list_for_date(date(2026, 2, 4))
        except RuntimeError as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(f"u{i}",)) for i in range(4)]
    threads += [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(repo.list_all(AttendanceFilters())) == 4 * 28
