"""Shared fixtures for API integration tests."""

from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from marathon.database import get_db
from marathon.main import app


@pytest.fixture(scope="function")
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API tests."""
    # Create a dependency override that uses the test session
    async def get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = get_test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up override
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def runner_headers(runner) -> dict[str, str]:
    return {"Authorization": f"Bearer {runner.api_token}"}


@pytest.fixture
def other_runner_headers(other_runner) -> dict[str, str]:
    return {"Authorization": f"Bearer {other_runner.api_token}"}


@pytest.fixture
def organizer_headers(organizer) -> dict[str, str]:
    return {"Authorization": f"Bearer {organizer.api_token}"}
