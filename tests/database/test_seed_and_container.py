from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.attendance.calendar import is_working_day
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceFilters
from src.attendance_tracker.attendance_tracker.container import BACKEND_MEMORY, build_container
from src.attendance_tracker.attendance_tracker.database.seed import DEMO_PASSWORD, seed_demo_data


@pytest.fixture
def container():
    return build_container(jwt_secret="seed-test-secret", storage_backend=BACKEND_MEMORY)


def _seed(container, today=date(2026, 2, 4)):
    return seed_demo_data(
        auth=container.auth_service,
        users=container.users_repo,
        attendance=container.attendance_repo,
        factory=container.strategy_factory,
        today=today,
    )


def test_missing_db_config_falls_back_to_memory():
    c = build_container(jwt_secret="x", storage_backend="mysql", db_config=None)

    assert c.storage_backend == BACKEND_MEMORY
    assert c.conn is None


def test_unknown_backend_is_rejected():
    with pytest.raises(ValueError):
        build_container(jwt_secret="x", storage_backend="redis")


def test_seed_creates_demo_roster_once(container):
    assert _seed(container) is True
    assert _seed(container) is False

    employees = container.user_service.list_employees()
    assert [u.employee_id for u in employees] == ["EMP001", "EMP002", "EMP003", "EMP004", "EMP005"]
    assert container.auth_service.login("manager@example.com", DEMO_PASSWORD).user.is_manager


def test_seeded_history_is_weekday_only_and_before_today(container):
    _seed(container)

    records = container.attendance_repo.list_all(AttendanceFilters())

    assert records
    assert all(is_working_day(r.work_date) for r in records)
    assert all(r.work_date < date(2026, 2, 4) for r in records)
    assert all(r.is_checked_out and r.total_hours is not None for r in records)
