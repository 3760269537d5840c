from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_tracker.attendance_tracker.attendance.memory_attendance_repository import (
    InMemoryAttendanceRepository,
)
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.reports.service import ReportService
from src.attendance_tracker.attendance_tracker.users.memory_user_repository import InMemoryUserRepository


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, before the 09:15 cut-off
    return datetime(2026, 2, 4, 8, 50, 0)


@pytest.fixture
def users_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def attendance_service(attendance_repo, users_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo)


@pytest.fixture
def report_service(attendance_repo, users_repo) -> ReportService:
    return ReportService(attendance_repo, users_repo)


@pytest.fixture
def make_user(users_repo):
    counter = {"n": 0}

    def _make(name: str = "", *, department: str = "Engineering", role: Role = Role.EMPLOYEE):
        counter["n"] += 1
        n = counter["n"]
        return users_repo.create_user(
            name=name or f"User {n}",
            email=f"user{n}@example.com",
            employee_id=f"EMP{n:03d}",
            department=department,
            role=role,
            password_hash="not-a-real-hash",
        )

    return _make
