"""Shared test fixtures."""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from marathon.database import Base
from marathon.models import RaceDistance, RaceStatus, User, UserRole

from tests.fixtures.factories import create_distance, create_race, create_user, days_from_now


@pytest.fixture
async def db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session with transaction rollback."""
    async_session = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def organizer(db_session: AsyncSession) -> User:
    user = create_user(
        full_name="Race Organizer",
        email="organizer@example.com",
        role=UserRole.ORGANIZER.value,
        api_token="organizer-token",
    )
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def runner(db_session: AsyncSession) -> User:
    user = create_user(
        full_name="Nguyen Van An",
        email="an@example.com",
        api_token="runner-token",
        phone_number="0901234567",
    )
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
async def other_runner(db_session: AsyncSession) -> User:
    user = create_user(
        full_name="Tran Thi Binh",
        email="binh@example.com",
        api_token="other-runner-token",
        gender="Male",
    )
    db_session.add(user)
    await db_session.flush()
    return user


async def _race_with_distance(
    db_session: AsyncSession, organizer: User, days: int, status: str, **distance_kwargs
) -> RaceDistance:
    race = create_race(
        organizer_id=organizer.id,
        name=f"Race in {days} days ({status})",
        race_date=days_from_now(days),
        status=status,
    )
    db_session.add(race)
    await db_session.flush()

    distance = create_distance(race_id=race.id, start_time=race.race_date, **distance_kwargs)
    db_session.add(distance)
    await db_session.flush()
    return distance


@pytest.fixture
async def test_distance(db_session: AsyncSession, organizer: User) -> RaceDistance:
    """10K with plenty of room in an approved upcoming race."""
    return await _race_with_distance(db_session, organizer, 30, RaceStatus.APPROVED.value)


@pytest.fixture
async def single_slot_distance(db_session: AsyncSession, organizer: User) -> RaceDistance:
    """10K with a single slot in an approved upcoming race."""
    return await _race_with_distance(
        db_session, organizer, 45, RaceStatus.APPROVED.value, max_participants=1
    )


@pytest.fixture
async def past_distance(db_session: AsyncSession, organizer: User) -> RaceDistance:
    """Distance of an approved race that already took place."""
    return await _race_with_distance(db_session, organizer, -10, RaceStatus.APPROVED.value)


@pytest.fixture
async def pending_distance(db_session: AsyncSession, organizer: User) -> RaceDistance:
    """Distance of an upcoming race still awaiting approval."""
    return await _race_with_distance(db_session, organizer, 30, RaceStatus.PENDING.value)
