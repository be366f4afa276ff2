"""Project-wide custom exceptions.

This module centralizes domain-specific exception types so that routers and
services can raise / catch them without importing deep infrastructure errors
like ``asyncpg`` or raw SQLAlchemy exceptions.

Add new errors here rather than scattering small ``class XError(Exception):``
definitions across the codebase; this keeps the public error surface easy to
audit and map to HTTP responses.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single rule violation on a single payload field.

    ``field`` uses the wire (camelCase) name so the API layer can hand it to
    clients untouched.
    """
    field: str
    rule: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "rule": self.rule, "message": self.message}


class usermanagementError(Exception):
    """Base class for all custom project exceptions.

    Subclass this rather than ``Exception`` directly for new domain errors.
    """


class ValidationFailedError(usermanagementError):
    """Raised when a create/update payload breaks one or more field rules.

    Nothing has been written when this is raised.
    """
    def __init__(self, fields: list[FieldError]):
        self.fields = list(fields)
        names = ", ".join(f"{e.field}:{e.rule}" for e in self.fields)
        super().__init__(f"Validation failed ({names})")


class InvalidStatusError(ValidationFailedError):
    """Raised when a status code outside ``A``/``I``/``T`` reaches the service
    or the store's check constraint.
    """
    def __init__(self, status: str | None):
        self.status = status
        super().__init__([
            FieldError(
                field="userStatus",
                rule="one_of",
                message=f"Invalid user status: {status!r}. Must be one of 'A', 'I', 'T'.",
            )
        ])


class ConflictError(usermanagementError):
    """Raised when a userName or email is already held by another user.

    Carries the same field and message whether the clash was found by the
    pre-write check or reported by the database unique constraint.
    """
    LABELS = {"userName": "Username", "email": "Email"}

    def __init__(self, field: str, value: str | None = None):
        self.field = field
        self.value = value
        label = self.LABELS.get(field, field)
        if value is None:
            super().__init__(f"{label} already exists")
        else:
            super().__init__(f"{label} '{value}' already exists")


class UserNotFoundError(usermanagementError):
    """Raised when a user id does not correspond to a stored record."""
    def __init__(self, user_id: int | None = None):
        self.user_id = user_id
        if user_id is None:
            super().__init__("User not found")
        else:
            super().__init__(f"User with id {user_id} not found")


class InternalError(usermanagementError):
    """Raised when the store is unreachable or fails unexpectedly.

    The original driver/SQLAlchemy exception is chained as ``__cause__``.
    """
    def __init__(self, detail: str = "An unexpected error occurred on the server."):
        super().__init__(detail)


__all__ = [
    "FieldError",
    "usermanagementError",
    "ValidationFailedError",
    "InvalidStatusError",
    "ConflictError",
    "UserNotFoundError",
    "InternalError",
]
