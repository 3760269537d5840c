import threading

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import DuplicateKeyError
from src.attendance_tracker.attendance_tracker.users.memory_user_repository import InMemoryUserRepository


def _create(repo, n):
    return repo.create_user(
        name=f"User {n}",
        email=f"user{n}@example.com",
        employee_id=f"EMP{n:03d}",
        department="Engineering",
        role=Role.EMPLOYEE,
        password_hash="x",
    )


def test_duplicate_email_inside_create():
    repo = InMemoryUserRepository()
    _create(repo, 1)

    with pytest.raises(DuplicateKeyError):
        repo.create_user(
            name="Other",
            email="USER1@example.com",
            employee_id="EMP999",
            department="Sales",
            role=Role.EMPLOYEE,
            password_hash="x",
        )


def test_lookups_while_registering_from_other_threads():
    repo = InMemoryUserRepository()
    errors = []

    def writer(offset):
        for n in range(offset, offset + 50):
            _create(repo, n)

    def reader():
        try:
            for _ in range(200):
                repo.list_employees()
                repo.get_by_email("nobody@example.com")
        except RuntimeError as e:
            errors.append(e)

    threads = [threading.Thread(target=writer, args=(i * 100,)) for i in range(3)]
    threads += [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(repo.list_employees()) == 150
