"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules. This provides:

* A stable import surface (refactors in lower layers don't ripple up)
* Easier test overrides via ``app.dependency_overrides[deps.get_db]``
* A single location to add cross‑cutting concerns (tracing, metrics,
  logging wrappers, etc.) around dependencies later.

Add new dependency callables here as the API grows.
"""
import asyncio
from typing import Awaitable, TypeVar

from fastapi import HTTPException, status

from usermanagement.core.config import get_settings
from usermanagement.db.session import get_db

__all__ = ["get_db", "with_deadline"]

T = TypeVar("T")


async def with_deadline(call: Awaitable[T]) -> T:
    """Await a service call under the configured request deadline.

    On expiry the call is cancelled (writes that already reached COMMIT still
    land) and the client gets a 504.
    """
    try:
        return await asyncio.wait_for(call, timeout=get_settings().request_timeout_seconds)
    except asyncio.TimeoutError:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Request timed out")
