"""User service layer.

Sequences validation, the uniqueness pre-checks and the repository for the
five user operations, and raises domain-specific exceptions from
``usermanagement.core.errors`` instead of returning ``None`` or leaking
SQLAlchemy errors.

This is the only place where store failures are classified: a unique
constraint violation becomes the same ``ConflictError`` the pre-check would
have raised (the losing side of a concurrent create/update race), a status
check violation becomes ``InvalidStatusError``, and anything else becomes
``InternalError``. Nothing is retried.

Each write commits before returning. A caller cancelling the call after the
commit has started still gets a durable row; cancelling earlier leaves
nothing behind because the session rolls back on close.
"""
from __future__ import annotations

import asyncio
import functools
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from usermanagement.core.errors import (
    ConflictError,
    InternalError,
    InvalidStatusError,
    UserNotFoundError,
    ValidationFailedError,
    usermanagementError,
)
from usermanagement.models.user import USER_ID_MAX, USER_ID_MIN, USER_STATUS_CODES, User
from usermanagement.repositories import user as user_repo
from usermanagement.schemas.user import UserCreate, UserPayload, UserUpdate
from usermanagement.services import uniqueness, validation

__all__ = [
    "list_users",
    "get_user_or_404",
    "create_user",
    "update_user",
    "delete_user",
]

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"

# sqlite reports e.g. "UNIQUE constraint failed: users.email"
_SQLITE_INTEGRITY = re.compile(r"^(UNIQUE|CHECK|NOT NULL) constraint failed: (.+)$")
_SQLITE_SQLSTATE = {"UNIQUE": UNIQUE_VIOLATION, "CHECK": CHECK_VIOLATION}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _integrity_details(exc: IntegrityError) -> tuple[Optional[str], str]:
    """Return ``(sqlstate, constraint)`` for asyncpg, psycopg and sqlite errors."""
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        diag = getattr(candidate, "diag", None)
        sqlstate = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        constraint = getattr(candidate, "constraint_name", None) or getattr(diag, "constraint_name", None)
        if sqlstate and constraint:
            return sqlstate, constraint
    first_line = str(orig).splitlines()[0] if orig is not None else ""
    match = _SQLITE_INTEGRITY.match(first_line)
    if match:
        return _SQLITE_SQLSTATE.get(match.group(1)), match.group(2)
    return None, first_line


def _translate_integrity_error(exc: IntegrityError, data: UserPayload) -> usermanagementError:
    sqlstate, constraint = _integrity_details(exc)
    if sqlstate == UNIQUE_VIOLATION:
        if "user_name" in constraint:
            logger.warning("username conflict on write", extra={"user_name": data.user_name})
            return ConflictError("userName", data.user_name)
        if "email" in constraint:
            logger.warning("email conflict on write", extra={"email": data.email})
            return ConflictError("email", data.email)
    if sqlstate == CHECK_VIOLATION and "user_status" in constraint:
        return InvalidStatusError(data.user_status)
    logger.error("unexpected integrity error", extra={"constraint": constraint}, exc_info=exc)
    return InternalError()


async def _rollback(session: AsyncSession) -> None:
    try:
        await session.rollback()
    except (SQLAlchemyError, OSError):
        logger.warning("rollback failed", exc_info=True)


async def _commit(session: AsyncSession) -> None:
    commit = asyncio.ensure_future(session.commit())
    try:
        await asyncio.shield(commit)
    except asyncio.CancelledError:
        # the COMMIT is already on the wire; let it land before honouring the cancellation
        await commit
        raise


def _store_errors(func):
    """Convert store/driver failures escaping ``func`` into ``InternalError``."""
    @functools.wraps(func)
    async def wrapper(session: AsyncSession, *args, **kwargs):
        try:
            return await func(session, *args, **kwargs)
        except usermanagementError:
            raise
        except (SQLAlchemyError, OSError) as exc:
            logger.error("store failure", extra={"operation": func.__name__}, exc_info=True)
            await _rollback(session)
            raise InternalError() from exc
    return wrapper


def _ensure_valid(errors) -> None:
    if errors:
        logger.warning("user payload rejected", extra={"fields": [e.as_dict() for e in errors]})
        raise ValidationFailedError(errors)


def _storable_id(user_id: int) -> bool:
    return USER_ID_MIN <= user_id <= USER_ID_MAX


def _ensure_status(status: str) -> None:
    # Second status checkpoint, independent of the field rules.
    if status not in USER_STATUS_CODES:
        logger.warning("invalid user status", extra={"user_status": status})
        raise InvalidStatusError(status)


@_store_errors
async def list_users(session: AsyncSession) -> list[User]:
    return list(await user_repo.list_all(session))


@_store_errors
async def get_user_or_404(session: AsyncSession, user_id: int) -> User:
    # an id outside the BIGINT range cannot name a stored row
    user = await user_repo.get_by_id(session, user_id) if _storable_id(user_id) else None
    if not user:
        logger.warning("user not found", extra={"user_id": user_id})
        raise UserNotFoundError(user_id)
    return user


@_store_errors
async def create_user(session: AsyncSession, data: UserCreate) -> User:
    _ensure_valid(validation.validate_create(data))
    # userName is always checked (and reported) before email
    if await uniqueness.user_name_taken(session, data.user_name):
        logger.warning("username conflict", extra={"user_name": data.user_name})
        raise ConflictError("userName", data.user_name)
    if await uniqueness.email_taken(session, data.email, 0):
        logger.warning("email conflict", extra={"email": data.email})
        raise ConflictError("email", data.email)
    _ensure_status(data.user_status)

    now = _utcnow()
    user = User(
        user_name=data.user_name,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        user_status=data.user_status,
        department=data.department,
        created_at=now,
        updated_at=now,
    )
    try:
        user = await user_repo.create(session, user)
        await _commit(session)
    except IntegrityError as exc:
        await _rollback(session)
        raise _translate_integrity_error(exc, data) from exc
    logger.info("user created", extra={"user_id": user.id, "user_name": user.user_name})
    return user


@_store_errors
async def update_user(session: AsyncSession, user_id: int, data: UserUpdate) -> User:
    user = await get_user_or_404(session, user_id)
    _ensure_valid(validation.validate_update(data))
    if data.user_name != user.user_name and await uniqueness.user_name_taken(session, data.user_name):
        logger.warning("username conflict", extra={"user_id": user_id, "user_name": data.user_name})
        raise ConflictError("userName", data.user_name)
    if data.email != user.email and await uniqueness.email_taken(session, data.email, user_id):
        logger.warning("email conflict", extra={"user_id": user_id, "email": data.email})
        raise ConflictError("email", data.email)
    _ensure_status(data.user_status)

    # full replacement: every field comes from the request
    user.user_name = data.user_name
    user.first_name = data.first_name
    user.last_name = data.last_name
    user.email = data.email
    user.user_status = data.user_status
    user.department = data.department
    user.updated_at = _utcnow()
    try:
        user = await user_repo.update(session, user)
        await _commit(session)
    except IntegrityError as exc:
        await _rollback(session)
        raise _translate_integrity_error(exc, data) from exc
    except StaleDataError as exc:
        # deleted between the load above and the UPDATE
        await _rollback(session)
        logger.warning("user vanished during update", extra={"user_id": user_id})
        raise UserNotFoundError(user_id) from exc
    logger.info("user updated", extra={"user_id": user.id})
    return user


@_store_errors
async def delete_user(session: AsyncSession, user_id: int) -> None:
    """Delete by id. A missing id is not an error."""
    rows = 0
    if _storable_id(user_id):
        rows = await user_repo.delete_by_id(session, user_id)
        await _commit(session)
    if rows:
        logger.info("user deleted", extra={"user_id": user_id})
    else:
        logger.info("delete of unknown user ignored", extra={"user_id": user_id})
