"""Field rules for user create/update payloads.

Pure functions, no I/O. Every field is checked independently and reports at
most its first violated rule, so one call can return errors for several
fields at once. An empty list means the payload is acceptable.
"""
from __future__ import annotations

import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from usermanagement.core.errors import FieldError
from usermanagement.models.user import USER_STATUS_CODES
from usermanagement.schemas.user import UserPayload

__all__ = [
    "MAX_LENGTH",
    "validate_create",
    "validate_update",
    "validate_payload",
]

MAX_LENGTH = 255
USER_NAME_MIN_LENGTH = 4

# [^\W_] is a Unicode letter or digit (str.isalnum), i.e. \p{L}\p{N}
_ASCII_ALNUM = re.compile(r"[A-Za-z0-9]+")
_UNICODE_ALNUM = re.compile(r"[^\W_]+")
_DEPARTMENT = re.compile(r"(?:[^\W_]|[,.:;&# ])+")


def _required(field: str, value: Optional[str]) -> Optional[FieldError]:
    if value is None or value == "":
        return FieldError(field, "required", f"{field} is required")
    return None


def _length(field: str, value: str, minimum: int = 0, maximum: int = MAX_LENGTH) -> Optional[FieldError]:
    if len(value) < minimum:
        return FieldError(field, "min_length", f"{field} must be at least {minimum} characters long")
    if len(value) > maximum:
        return FieldError(field, "max_length", f"{field} must be at most {maximum} characters long")
    return None


def _pattern(field: str, value: str, pattern: re.Pattern, description: str) -> Optional[FieldError]:
    if pattern.fullmatch(value) is None:
        return FieldError(field, "pattern", f"{field} must contain {description}")
    return None


def _check_user_name(value: Optional[str]) -> Optional[FieldError]:
    field = "userName"
    return (
        _required(field, value)
        or _length(field, value, USER_NAME_MIN_LENGTH)
        or _pattern(field, value, _ASCII_ALNUM, "only letters A-Z, a-z and digits 0-9")
    )


def _check_person_name(field: str, value: Optional[str]) -> Optional[FieldError]:
    return (
        _required(field, value)
        or _length(field, value, 1)
        or _pattern(field, value, _UNICODE_ALNUM, "only letters and digits")
    )


def _check_email(value: Optional[str]) -> Optional[FieldError]:
    field = "email"
    missing = _required(field, value) or _length(field, value)
    if missing:
        return missing
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return FieldError(field, "email", f"{value!r} is not a valid email address")
    return None


def _check_status(value: Optional[str]) -> Optional[FieldError]:
    field = "userStatus"
    missing = _required(field, value)
    if missing:
        return missing
    if value not in USER_STATUS_CODES:
        return FieldError(field, "one_of", "userStatus must be one of 'A', 'I', 'T'")
    return None


def _check_department(value: Optional[str]) -> Optional[FieldError]:
    field = "department"
    if value is None or value == "":
        return None
    too_long = _length(field, value)
    if too_long:
        return too_long
    if value.strip() == "":
        return FieldError(field, "blank", "department must not consist only of whitespace")
    return _pattern(field, value, _DEPARTMENT, "only letters, digits, spaces and , . : ; & #")


def validate_payload(payload: UserPayload) -> list[FieldError]:
    checks = (
        _check_user_name(payload.user_name),
        _check_person_name("firstName", payload.first_name),
        _check_person_name("lastName", payload.last_name),
        _check_email(payload.email),
        _check_status(payload.user_status),
        _check_department(payload.department),
    )
    return [error for error in checks if error is not None]


def validate_create(payload: UserPayload) -> list[FieldError]:
    return validate_payload(payload)


def validate_update(payload: UserPayload) -> list[FieldError]:
    # same rule set as create; update requests carry every field
    return validate_payload(payload)
