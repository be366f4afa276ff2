"""Pre-write uniqueness checks for ``userName`` and ``email``.

These checks run before the INSERT/UPDATE so a clash can be reported
against the right field, but they are a check-then-act race: two writers
can both pass them. The unique constraints on ``users.user_name`` and
``users.email`` are what actually keep duplicates out, and
``services.user`` maps a violation of either one to the same
``ConflictError`` these checks produce.

Comparisons are exact (case-sensitive), matching those constraints.
"""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.repositories import user as user_repo

__all__ = ["user_name_taken", "email_taken"]


async def user_name_taken(session: AsyncSession, user_name: str) -> bool:
    return await user_repo.exists_by_user_name(session, user_name)


async def email_taken(session: AsyncSession, email: str, excluding_id: int = 0) -> bool:
    """True if another user holds ``email``.

    Pass the subject's own id as ``excluding_id`` on update so a user keeping
    its address does not collide with itself; ``0`` checks every row.
    """
    return await user_repo.exists_by_email(session, email, exclude_id=excluding_id)
