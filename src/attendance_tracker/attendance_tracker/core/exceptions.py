from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    default_message = "Invalid input"


class DuplicateKeyError(DomainError):
    """Raised by a store when a unique key already exists."""

    status_code = 409
    default_message = "Record already exists"


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid.

    Unknown email and wrong password share this error and its message.
    """

    status_code = 401
    default_message = "Invalid credentials"


class UnauthorizedError(DomainError):
    """Raised when a token is missing, expired or malformed."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403
    default_message = "Access denied"


class AttendanceStateError(DomainError):
    """Base for check-in/check-out state machine violations."""


class AlreadyCheckedInError(AttendanceStateError):
    default_message = "Already checked in today"


class NoCheckInFoundError(AttendanceStateError):
    default_message = "No check-in record found for today"


class AlreadyCheckedOutError(AttendanceStateError):
    default_message = "Already checked out today"
