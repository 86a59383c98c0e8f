"""Fixtures that run the app over HTTP against a throwaway SQLite database.

Every test starts from an empty schema built from the SQLModel metadata, and
external providers (Stripe, Resend) are patched at the service that calls them.
"""

from collections.abc import AsyncGenerator, Iterator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from src.app import models  # noqa: F401
from src.app.core import db
from src.app.core.config import get_settings
from src.app.core.exceptions import PaymentProviderError
from src.app.main import create_app

APPROVAL = "src.app.services.approval_service"
APPLICATION = "src.app.services.application_service"


async def reset_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    # The app's cached engine may still point at the previous test's file state
    await db.dispose_engine()
    test_engine = create_async_engine(get_settings().database_url, poolclass=NullPool)
    await reset_schema(test_engine)
    try:
        yield test_engine
    finally:
        await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for seeding rows; callers commit what they add."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=create_app())
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
    finally:
        await db.dispose_engine()


@pytest.fixture
def stripe_connect() -> Iterator[AsyncMock]:
    """Provisioning succeeds with ``acct_test123``."""
    mock = AsyncMock(return_value="acct_test123")
    with patch(f"{APPROVAL}.create_connect_account", new=mock):
        yield mock


@pytest.fixture
def stripe_down() -> Iterator[AsyncMock]:
    mock = AsyncMock(side_effect=PaymentProviderError("Stripe account creation failed"))
    with patch(f"{APPROVAL}.create_connect_account", new=mock):
        yield mock


@pytest.fixture
def approved_email():
    with patch(f"{APPROVAL}.send_application_approved_email", return_value=True) as mock:
        yield mock


@pytest.fixture
def received_email():
    with patch(f"{APPLICATION}.send_application_received_email", return_value=True) as mock:
        yield mock
