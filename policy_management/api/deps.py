"""FastAPI dependency injection for database sessions and record stores."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from policy_management.repositories.clients import ClientRepository
from policy_management.repositories.policies import PolicyRepository


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory.

    Args:
        request: FastAPI request containing app state.

    Yields:
        AsyncSession for database operations with automatic commit/rollback.
    """
    async with request.app.state.async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_client_repository(
    db: AsyncSession = Depends(get_db),
) -> ClientRepository:
    """Client store bound to the request session."""
    return ClientRepository(db)


async def get_policy_repository(
    db: AsyncSession = Depends(get_db),
) -> PolicyRepository:
    """Policy store bound to the request session."""
    return PolicyRepository(db)
