import threading
from datetime import datetime, timedelta

import pytest

from src.attendance_tracker.attendance_tracker.attendance.memory_attendance_repository import (
    InMemoryAttendanceRepository,
)
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NoCheckInFoundError,
    NotFoundError,
    ValidationError,
)


def test_on_time_full_day(attendance_service, make_user):
    user = make_user()
    day = datetime(2026, 2, 4)

    rec = attendance_service.check_in(user.user_id, now=day.replace(hour=8, minute=50))
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_out_time is None
    assert rec.total_hours is None

    rec = attendance_service.check_out(user.user_id, now=day.replace(hour=17, minute=20))
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.total_hours == 8.5


def test_late_full_day_keeps_late(attendance_service, make_user):
    user = make_user()
    day = datetime(2026, 2, 4)

    rec = attendance_service.check_in(user.user_id, now=day.replace(hour=9, minute=40))
    assert rec.status == AttendanceStatus.LATE

    rec = attendance_service.check_out(user.user_id, now=day.replace(hour=18, minute=10))
    assert rec.status == AttendanceStatus.LATE
    assert rec.total_hours == 8.5


def test_short_day_becomes_half_day_even_when_late(attendance_service, make_user):
    user = make_user()
    day = datetime(2026, 2, 4)

    attendance_service.check_in(user.user_id, now=day.replace(hour=10, minute=0))
    rec = attendance_service.check_out(user.user_id, now=day.replace(hour=13, minute=30))

    assert rec.status == AttendanceStatus.HALF_DAY
    assert rec.total_hours == 3.5


def test_half_day_uses_exact_hours_not_rounded(attendance_service, make_user):
    user = make_user()
    check_in = datetime(2026, 2, 4, 9, 0, 0)

    attendance_service.check_in(user.user_id, now=check_in)
    # 3h59m57s rounds to 4.0 but is still under the threshold
    rec = attendance_service.check_out(user.user_id, now=check_in + timedelta(hours=3, minutes=59, seconds=57))

    assert rec.total_hours == 4.0
    assert rec.status == AttendanceStatus.HALF_DAY


def test_total_hours_rounds_half_up(attendance_service, make_user):
    user = make_user()
    check_in = datetime(2026, 2, 4, 9, 0, 0)

    attendance_service.check_in(user.user_id, now=check_in)
    # 7h45m == 7.75h
    rec = attendance_service.check_out(user.user_id, now=check_in + timedelta(hours=7, minutes=45))

    assert rec.total_hours == 7.8


def test_second_checkin_same_day_is_rejected(attendance_service, make_user, fixed_now):
    user = make_user()
    attendance_service.check_in(user.user_id, now=fixed_now)

    with pytest.raises(AlreadyCheckedInError) as exc:
        attendance_service.check_in(user.user_id, now=fixed_now + timedelta(hours=1))
    assert exc.value.status_code == 400
    assert str(exc.value) == "Already checked in today"


def test_checkin_next_day_is_a_new_record(attendance_service, make_user, fixed_now):
    user = make_user()
    first = attendance_service.check_in(user.user_id, now=fixed_now)
    second = attendance_service.check_in(user.user_id, now=fixed_now + timedelta(days=1))

    assert first.attendance_id != second.attendance_id
    assert len(attendance_service.get_history(user.user_id)) == 2


def test_checkout_without_checkin(attendance_service, make_user, fixed_now):
    user = make_user()

    with pytest.raises(NoCheckInFoundError):
        attendance_service.check_out(user.user_id, now=fixed_now)


def test_checkout_twice_keeps_first_checkout(attendance_service, make_user, fixed_now):
    user = make_user()
    attendance_service.check_in(user.user_id, now=fixed_now)
    first = attendance_service.check_out(user.user_id, now=fixed_now + timedelta(hours=8))

    with pytest.raises(AlreadyCheckedOutError):
        attendance_service.check_out(user.user_id, now=fixed_now + timedelta(hours=9))

    stored = attendance_service.get_today_record(user.user_id, fixed_now.date())
    assert stored.check_out_time == first.check_out_time
    assert stored.total_hours == 8.0


def test_checkout_before_checkin_is_rejected(attendance_service, make_user, fixed_now):
    user = make_user()
    attendance_service.check_in(user.user_id, now=fixed_now)

    with pytest.raises(ValidationError):
        attendance_service.check_out(user.user_id, now=fixed_now - timedelta(minutes=5))


def test_checkin_for_unknown_user(attendance_service, fixed_now):
    with pytest.raises(NotFoundError):
        attendance_service.check_in("missing", now=fixed_now)


def test_concurrent_checkins_create_one_record(users_repo, make_user, fixed_now):
    repo = InMemoryAttendanceRepository()
    service = AttendanceService(repo, users_repo)
    user = make_user()

    barrier = threading.Barrier(4)
    results: list = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        try:
            out = service.check_in(user.user_id, now=fixed_now)
        except AlreadyCheckedInError as e:
            out = e
        with lock:
            results.append(out)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = [r for r in results if not isinstance(r, Exception)]
    assert len(records) == 1
    assert sum(isinstance(r, AlreadyCheckedInError) for r in results) == 3
    assert len(repo.list_for_user(user.user_id)) == 1


class _RacingRepository(InMemoryAttendanceRepository):
    """Hides the existing record from the pre-check, like a concurrent writer would."""

    def get_for_user_and_date(self, user_id, work_date):
        return None


def test_store_duplicate_is_reported_as_already_checked_in(users_repo, make_user, fixed_now):
    repo = _RacingRepository()
    service = AttendanceService(repo, users_repo)
    user = make_user()

    service.check_in(user.user_id, now=fixed_now)
    with pytest.raises(AlreadyCheckedInError):
        service.check_in(user.user_id, now=fixed_now)


def test_employee_history_by_code_or_id(attendance_service, make_user, fixed_now):
    user = make_user()
    attendance_service.check_in(user.user_id, now=fixed_now)

    by_code = attendance_service.get_employee_history(user.employee_id)
    by_id = attendance_service.get_employee_history(user.user_id)

    assert [r.attendance_id for r in by_code] == [r.attendance_id for r in by_id]
    with pytest.raises(NotFoundError):
        attendance_service.get_employee_history("EMP999")


def test_history_rejects_bad_month(attendance_service, make_user):
    user = make_user()

    with pytest.raises(ValidationError):
        attendance_service.get_history(user.user_id, month="Feb-2026")


class _StaleReadRepository(InMemoryAttendanceRepository):
    """Keeps returning the first read of a day, like a second request that read before the first wrote."""

    def __init__(self):
        super().__init__()
        self._seen = {}

    def get_for_user_and_date(self, user_id, work_date):
        key = (user_id, work_date)
        if key not in self._seen:
            found = super().get_for_user_and_date(user_id, work_date)
            if found is None:
                return None
            self._seen[key] = found
        return self._seen[key]


def test_overlapping_checkouts_do_not_overwrite(users_repo, make_user, fixed_now):
    repo = _StaleReadRepository()
    service = AttendanceService(repo, users_repo)
    user = make_user()
    service.check_in(user.user_id, now=fixed_now)

    first = service.check_out(user.user_id, now=fixed_now + timedelta(hours=8))
    with pytest.raises(AlreadyCheckedOutError):
        service.check_out(user.user_id, now=fixed_now + timedelta(hours=2))

    stored = repo.list_for_user(user.user_id)[0]
    assert stored.total_hours == first.total_hours == 8.0
    assert stored.status == AttendanceStatus.PRESENT


def test_history_accepts_single_digit_month(attendance_repo, attendance_service, make_user):
    user = make_user()
    for month in (1, 10, 11):
        attendance_repo.insert(
            user_id=user.user_id,
            work_date=datetime(2026, month, 5).date(),
            check_in_time=datetime(2026, month, 5, 9, 0),
            status=AttendanceStatus.PRESENT,
        )

    history = attendance_service.get_history(user.user_id, month="2026-1")

    assert [r.work_date.isoformat() for r in history] == ["2026-01-05"]
