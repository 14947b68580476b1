from __future__ import annotations

from typing import Mapping, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500
    error = "Internal server error"


class ValidationError(DomainError):
    """Raised when input data is malformed, missing or out of range.

    ``errors`` maps a field name (API spelling) to every message raised for it.
    """

    status_code = 400
    error = "Validation failed"

    def __init__(self, message: str, errors: Optional[Mapping[str, Sequence[str]]] = None):
        super().__init__(message)
        self.errors = {k: list(v) for k, v in (errors or {}).items()}

    @classmethod
    def from_errors(cls, errors: Mapping[str, Sequence[str]]) -> "ValidationError":
        messages = [m for msgs in errors.values() for m in msgs]
        return cls(", ".join(messages), errors)


class ConflictError(DomainError):
    """Raised when a unique attribute (mobile number, email) is already registered."""

    status_code = 409
    error = "Duplicate registration"

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    status_code = 404
    error = "Registration not found"


class AuthenticationError(DomainError):
    """Raised when admin credentials or the admin session are missing or invalid."""

    status_code = 401
    error = "Invalid credentials"


class InternalError(DomainError):
    """Storage/connectivity failure; the message is safe to show to clients."""

    status_code = 500
    error = "Internal server error"
