"""Async engine, session factory and the per-request unit of work."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from marathon.config import get_settings

settings = get_settings()


def to_async_url(database_url: str) -> str:
    """Map a plain SQLite URL onto the aiosqlite driver; other URLs pass through."""
    if database_url.startswith("sqlite:///"):
        return "sqlite+aiosqlite:///" + database_url.removeprefix("sqlite:///")
    return database_url


async_engine = create_async_engine(to_async_url(settings.database_url), echo=settings.debug)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Declarative base for marathon tables."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session.

    One request is one unit of work: the session commits when the handler
    returns and rolls back when it raises.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create missing tables."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
