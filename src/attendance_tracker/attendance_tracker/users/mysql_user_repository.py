from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, employee_id, department, role, password_hash, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        employee_id=row["employee_id"],
        department=row["department"],
        role=Role(row["role"]),
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._get_one("user_id", user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        # Emails are stored lower-cased.
        return self._get_one("email", (email or "").lower())

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self._get_one("employee_id", employee_id)

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
        user = User(
            user_id=str(uuid.uuid4()),
            name=name,
            email=email.lower(),
            employee_id=employee_id,
            department=department,
            role=role,
            password_hash=password_hash,
            created_at=datetime.now().replace(microsecond=0),
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(user_id, name, email, employee_id, department, role, password_hash, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        user.user_id,
                        user.name,
                        user.email,
                        user.employee_id,
                        user.department,
                        user.role.value,
                        user.password_hash,
                        user.created_at,
                    ),
                )
        except Exception as e:
            if not is_duplicate_key(e):
                raise
            if "employee_id" in str(e):
                raise DuplicateKeyError("Employee ID already exists") from e
            raise DuplicateKeyError("Email already registered") from e
        return user

    def list_employees(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY created_at ASC, employee_id ASC",
                (Role.EMPLOYEE.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]
