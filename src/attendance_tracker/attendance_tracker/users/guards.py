from __future__ import annotations

from functools import wraps

from flask import g, request

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, UnauthorizedError
from .tokens import TokenClaims, TokenService


def bearer_token() -> str | None:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    token = header[len("Bearer "):].strip().strip('"').strip("'")
    return token or None


def current_claims() -> TokenClaims:
    return g.claims


def make_guards(tokens: TokenService):
    """Build (login_required, manager_required) decorators bound to a token service.

    Both raise DomainError subclasses; the app-level error handler turns them
    into 401/403 JSON responses.
    """

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            if not token:
                raise UnauthorizedError()
            g.claims = tokens.verify(token)
            return view(*args, **kwargs)

        return wrapper

    def manager_required(view):
        @wraps(view)
        @login_required
        def wrapper(*args, **kwargs):
            if current_claims().role != Role.MANAGER:
                raise AuthorizationError()
            return view(*args, **kwargs)

        return wrapper

    return login_required, manager_required
