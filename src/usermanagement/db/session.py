from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy import MetaData
from usermanagement.core.config import Settings, get_settings
from typing import AsyncGenerator

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

class Base(DeclarativeBase):
    metadata = metadata


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the process-wide async engine; its pool is the only shared
    mutable resource handed down to repositories through sessions.
    """
    if settings.is_sqlite:
        # file-backed sqlite (tests): a fresh connection per checkout keeps
        # connections from outliving the event loop that opened them
        return create_async_engine(settings.database_url_async, echo=settings.db_echo, poolclass=NullPool)
    return create_async_engine(
        settings.database_url_async,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_recycle=settings.db_pool_recycle_seconds,
        pool_pre_ping=True,
        connect_args={"timeout": settings.db_connect_timeout_seconds},
    )


_settings = get_settings()
engine = build_engine(_settings)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session
