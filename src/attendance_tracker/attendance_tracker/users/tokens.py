from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_DAYS
from ..core.enums import Role
from ..core.exceptions import UnauthorizedError

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    role: Role


class TokenService:
    """Issue and verify signed bearer tokens (HS256 JWT)."""

    def __init__(self, secret: str, *, ttl_days: int = DEFAULT_TOKEN_TTL_DAYS):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(days=int(ttl_days))

    def issue(self, user_id: str, role: Role, *, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "user_id": user_id,
            "role": role.value,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise UnauthorizedError()
        try:
            data = jwt.decode(token, self._secret, algorithms=[_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token has expired")
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired token")

        try:
            return TokenClaims(user_id=str(data["user_id"]), role=Role(data["role"]))
        except (KeyError, ValueError):
            raise UnauthorizedError("Invalid or expired token")
