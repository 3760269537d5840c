from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateKeyError
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """Non-persistent store used for tests and as the startup fallback."""

    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._lock = threading.RLock()

    def _snapshot(self) -> list[User]:
        with self._lock:
            return list(self._by_id.values())

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = (email or "").lower()
        return next((u for u in self._snapshot() if u.email.lower() == email), None)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self._snapshot() if u.employee_id == employee_id), None)

    def create_user(
        self,
        *,
        name: str,
        email: str,
        employee_id: str,
        department: str,
        role: Role,
        password_hash: str,
    ) -> User:
        with self._lock:
            if self.get_by_email(email):
                raise DuplicateKeyError("Email already registered")
            if self.get_by_employee_id(employee_id):
                raise DuplicateKeyError("Employee ID already exists")

            user = User(
                user_id=str(uuid.uuid4()),
                name=name,
                email=email.lower(),
                employee_id=employee_id,
                department=department,
                role=role,
                password_hash=password_hash,
                created_at=datetime.now(),
            )
            self._by_id[user.user_id] = user
            return user

    def list_employees(self) -> Sequence[User]:
        users = [u for u in self._snapshot() if u.role == Role.EMPLOYEE]
        users.sort(key=lambda u: u.created_at)
        return users
