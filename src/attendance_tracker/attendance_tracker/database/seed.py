"""Demo data: one manager, five employees and two weeks of weekday history."""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, time, timedelta

from ..attendance.calendar import is_working_day
from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.repository import AttendanceRepository
from ..attendance.service import elapsed_hours
from ..common.numbers import round_half_up
from ..core.enums import Role
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import AuthService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_MANAGER_EMAIL = "manager@example.com"

DEMO_USERS = [
    ("Sarah Wilson", DEMO_MANAGER_EMAIL, Role.MANAGER, "MGR001", "HR"),
    ("John Smith", "employee1@example.com", Role.EMPLOYEE, "EMP001", "Engineering"),
    ("Emily Johnson", "employee2@example.com", Role.EMPLOYEE, "EMP002", "Sales"),
    ("Michael Brown", "employee3@example.com", Role.EMPLOYEE, "EMP003", "Support"),
    ("Jessica Davis", "employee4@example.com", Role.EMPLOYEE, "EMP004", "Engineering"),
    ("David Martinez", "employee5@example.com", Role.EMPLOYEE, "EMP005", "Marketing"),
]


def seed_demo_data(
    *,
    auth: AuthService,
    users: UserRepository,
    attendance: AttendanceRepository,
    factory: AttendanceStrategyFactory,
    today: date | None = None,
    history_days: int = 14,
    rng: random.Random | None = None,
) -> bool:
    """Seed demo users and history. Returns False if the demo manager already exists."""
    if users.get_by_email(DEMO_MANAGER_EMAIL):
        logger.info("Seed data already exists, skipping")
        return False

    today = today or date.today()
    rng = rng or random.Random(42)

    employees: list[User] = []
    for name, email, role, employee_id, department in DEMO_USERS:
        result = auth.register(
            name=name,
            email=email,
            password=DEMO_PASSWORD,
            role=role,
            employee_id=employee_id,
            department=department,
        )
        if role == Role.EMPLOYEE:
            employees.append(result.user)

    created = 0
    for offset in range(1, history_days + 1):
        day = today - timedelta(days=offset)
        if not is_working_day(day):
            continue
        for emp in employees:
            roll = rng.random()
            if roll < 0.1:
                continue

            hour = 9 + rng.randint(0, 1) if roll < 0.3 else 8 + rng.randint(0, 1)
            check_in = datetime.combine(day, time(hour, rng.randint(0, 59)))
            check_out = check_in + timedelta(hours=4 + rng.random() * 5)
            worked = elapsed_hours(check_in, check_out)

            status = factory.for_checkin(now=check_in).decide_checkin(now=check_in).status
            status = factory.for_checkout(worked_hours=worked).decide_checkout(worked_hours=worked, current=status).status

            attendance.insert(
                user_id=emp.user_id,
                work_date=day,
                check_in_time=check_in,
                check_out_time=check_out,
                status=status,
                total_hours=round_half_up(worked),
            )
            created += 1

    logger.info("Seeded %d users and %d attendance records", len(DEMO_USERS), created)
    return True
