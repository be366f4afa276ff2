"""Repository helpers for the User model.

Plain persistence: no validation, no uniqueness rules, no error mapping.
"""

import logging
from typing import Optional, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, exists
from usermanagement.models.user import User

__all__ = [
    "list_all",
    "get_by_id",
    "create",
    "update",
    "delete_by_id",
    "exists_by_user_name",
    "exists_by_email",
]

logger = logging.getLogger(__name__)


async def list_all(session: AsyncSession) -> Sequence[User]:
    res = await session.execute(select(User).order_by(User.id.asc()))
    return list(res.scalars().all())


async def get_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    res = await session.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def create(session: AsyncSession, user: User) -> User:
    session.add(user)
    # Flush so the INSERT is issued (assigning the id) and refresh so
    # server-side values are loaded eagerly; lazy loads during response
    # serialization raise MissingGreenlet under asyncio.
    await session.flush()
    await session.refresh(user)
    logger.debug("inserted user row", extra={"user_id": user.id})
    return user


async def update(session: AsyncSession, user: User) -> User:
    """Write every mutable column of ``user`` back to its row.

    A row deleted since ``user`` was loaded surfaces as
    ``sqlalchemy.orm.exc.StaleDataError`` from the flush.
    """
    await session.flush()
    await session.refresh(user)
    logger.debug("updated user row", extra={"user_id": user.id})
    return user


async def delete_by_id(session: AsyncSession, user_id: int) -> int:
    """Delete unconditionally; returns the number of rows removed."""
    res = await session.execute(delete(User).where(User.id == user_id))
    logger.debug("deleted user rows", extra={"user_id": user_id, "rows": res.rowcount})
    return res.rowcount


async def exists_by_user_name(session: AsyncSession, user_name: str) -> bool:
    res = await session.execute(select(exists().where(User.user_name == user_name)))
    return bool(res.scalar())


async def exists_by_email(session: AsyncSession, email: str, exclude_id: int = 0) -> bool:
    # exclude_id == 0 means no exclusion (create path)
    stmt = select(exists().where(User.email == email))
    if exclude_id:
        stmt = select(exists().where(User.email == email, User.id != exclude_id))
    res = await session.execute(stmt)
    return bool(res.scalar())
