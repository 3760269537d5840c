from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_choice, require_email, require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateKeyError, NotFoundError
from .model import User
from .repository import UserRepository
from .tokens import TokenService


@dataclass(frozen=True)
class AuthResult:
    """What register/login hand back to the HTTP layer."""

    user: User
    token: str

    def to_dict(self) -> dict:
        return {"user": self.user.to_public_dict(), "token": self.token}


class AuthService:
    """Use cases: register, login, resolve the current user."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: str | Role,
        employee_id: str,
        department: str,
    ) -> AuthResult:
        name = require_non_empty(name, "Name")
        require_min_length(name, "Name", 2)
        email = require_email(email)
        require_min_length(password, "Password", 6)
        role = require_choice(role.value if isinstance(role, Role) else role, Role, "Role")
        employee_id = require_non_empty(employee_id, "Employee ID")
        department = require_non_empty(department, "Department")

        # Friendly early messages; the store's unique keys stay authoritative.
        if self._users.get_by_email(email):
            raise DuplicateKeyError("Email already registered")
        if self._users.get_by_employee_id(employee_id):
            raise DuplicateKeyError("Employee ID already exists")

        user = self._users.create_user(
            name=name,
            email=email,
            employee_id=employee_id,
            department=department,
            role=role,
            password_hash=generate_password_hash(password),
        )
        return AuthResult(user=user, token=self._tokens.issue(user.user_id, user.role))

    def login(self, email: str, password: str) -> AuthResult:
        if not email or not password:
            raise AuthenticationError()

        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError()

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError()

        return AuthResult(user=user, token=self._tokens.issue(user.user_id, user.role))

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user


class UserService:
    """Use case: roster lookups."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self) -> Sequence[User]:
        return self._users.list_employees()
