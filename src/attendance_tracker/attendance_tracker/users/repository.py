from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup."""
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

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
        """Persist a new user.

        Raises DuplicateKeyError when email or employee_id already exists.
        """
        raise NotImplementedError

    def list_employees(self) -> Sequence[User]:
        """All users with role=employee (the roster)."""
        raise NotImplementedError
