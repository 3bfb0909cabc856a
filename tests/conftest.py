"""Pytest configuration and shared fixtures for tests."""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from policy_management.api.deps import get_db
from policy_management.core.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from policy_management.main import app
from policy_management.models import Client, Policy, PolicyStatus, PolicyType


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create an in-memory sqlite session factory with the full schema."""
    engine = create_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await create_schema(engine)

    factory = create_session_factory(engine)
    app.state.async_session = factory
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Single session for repository-level tests."""
    async with session_factory() as db:
        yield db


@pytest_asyncio.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create API client with DB dependency override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


class Seeder:
    """Insert rows directly, bypassing the API, and return their IDs."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def client(
        self,
        *,
        identification_number: str = "1234567890",
        full_name: str = "Ana Lopez",
        email: str = "ana@test.com",
        phone: str = "+1 555 0000",
    ) -> int:
        async with self.session_factory() as db:
            client = Client(
                identification_number=identification_number,
                full_name=full_name,
                email=email,
                phone=phone,
            )
            db.add(client)
            await db.commit()
            return client.id

    async def policy(
        self,
        client_id: int,
        *,
        policy_type: PolicyType = PolicyType.LIFE,
        start_date: date = date(2024, 1, 1),
        end_date: date = date(2025, 1, 1),
        insured_amount: Decimal = Decimal("1000.00"),
        status: PolicyStatus = PolicyStatus.ACTIVE,
    ) -> int:
        async with self.session_factory() as db:
            policy = Policy(
                type=policy_type,
                start_date=start_date,
                end_date=end_date,
                insured_amount=insured_amount,
                status=status,
                client_id=client_id,
            )
            db.add(policy)
            await db.commit()
            return policy.id


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> Seeder:
    """Row seeder bound to the test database."""
    return Seeder(session_factory)
