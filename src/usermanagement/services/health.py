import logging
import time
from datetime import datetime, timezone
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

logger = logging.getLogger(__name__)

_started_at = datetime.now(timezone.utc)
_started_monotonic = time.monotonic()


async def ping(session: AsyncSession) -> bool:
    """Simple DB connectivity check.
    Uses a lightweight SELECT 1 statement and returns True if the DB responds.
    """
    try:
        await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError):
        logger.warning("database ping failed", exc_info=True)
        return False


def online_since() -> datetime:
    return _started_at


def uptime_seconds() -> float:
    return round(time.monotonic() - _started_monotonic, 3)
