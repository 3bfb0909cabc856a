"""Optimistic-concurrency flush helper.

Clients and policies carry a ``version`` column (SQLAlchemy
``version_id_col``). A writer that loses a race gets ``StaleDataError`` on
flush; this module turns that into a three-way outcome after re-checking
whether the record still exists, so callers branch on a value instead of
catching and re-inspecting exceptions.
"""

import enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from policy_management.core.logging import get_logger

logger = get_logger(__name__)


class SaveOutcome(enum.Enum):
    """Result of flushing a versioned record."""

    OK = "ok"
    NOT_FOUND_AFTER_CONFLICT = "not_found_after_conflict"
    CONFLICT_FATAL = "conflict_fatal"


async def record_exists(session: AsyncSession, model: Any, record_id: int) -> bool:
    """Return True when a row with ``record_id`` exists for ``model``."""
    result = await session.execute(select(model.id).where(model.id == record_id))
    return result.scalar_one_or_none() is not None


async def flush_with_conflict_check(
    session: AsyncSession,
    model: Any,
    record_id: int,
) -> SaveOutcome:
    """Flush pending changes and classify a concurrent-modification failure.

    Args:
        session: Request-scoped session holding the pending change.
        model: Mapped class of the record being saved.
        record_id: Primary key of the record being saved.

    Returns:
        ``OK`` when the flush succeeded, ``NOT_FOUND_AFTER_CONFLICT`` when the
        record was deleted by a concurrent writer, ``CONFLICT_FATAL`` when it
        still exists but was changed underneath us.
    """
    try:
        await session.flush()
    except StaleDataError:
        await session.rollback()
        still_exists = await record_exists(session, model, record_id)
        logger.warning(
            "concurrent_modification_detected",
            model=model.__name__,
            record_id=record_id,
            still_exists=still_exists,
        )
        if still_exists:
            return SaveOutcome.CONFLICT_FATAL
        return SaveOutcome.NOT_FOUND_AFTER_CONFLICT
    return SaveOutcome.OK
