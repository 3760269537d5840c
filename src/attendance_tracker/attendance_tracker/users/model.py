from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User (employee or manager).

    Note: Plain data object, no DB access. `password_hash` never leaves the
    service layer; use `to_public_dict()` for anything returned to callers.
    """

    user_id: str
    name: str
    email: str
    employee_id: str
    department: str
    role: Role
    password_hash: str
    created_at: datetime

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    def to_public_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "employee_id": self.employee_id,
            "department": self.department,
            "role": self.role.value,
            "created_at": self.created_at.isoformat(),
        }
