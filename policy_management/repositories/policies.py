"""
Policy repository containing all data-access operations for the policies table.

Repository rules:
- Pure data-access logic only
- Built around an explicit AsyncSession handed in by the request
- Methods flush, but never commit
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from policy_management.core.logging import get_logger
from policy_management.domain.errors import (
    AlreadyInTerminalStateError,
    ConcurrencyConflictError,
    InvalidDateRangeError,
    NotFoundError,
    ReferenceNotFoundError,
)
from policy_management.domain.lifecycle import TransitionNotAllowed, create_lifecycle
from policy_management.domain.validation import (
    FIELD_CLIENT_ID,
    FIELD_END_DATE,
    check_date_range,
)
from policy_management.models.base import utcnow
from policy_management.models.client import Client
from policy_management.models.policy import Policy, PolicyStatus, PolicyType
from policy_management.repositories.filters import (
    POLICY_ORDERING,
    PolicyFilter,
    build_policy_filters,
)
from policy_management.repositories.persistence import (
    SaveOutcome,
    flush_with_conflict_check,
    record_exists,
)

logger = get_logger(__name__)


class PolicyRepository:
    """Policy Record Store."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_policies(self, policy_filter: PolicyFilter | None = None) -> list[Policy]:
        """List policies matching every supplied predicate, by start date."""
        filters = build_policy_filters(policy_filter or PolicyFilter())
        stmt = select(Policy).order_by(*POLICY_ORDERING)
        if filters:
            stmt = stmt.where(*filters)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_client(
        self,
        client_id: int,
        status: PolicyStatus | None = None,
    ) -> list[Policy]:
        """List one client's policies, optionally restricted to ``status``.

        Raises:
            NotFoundError: the client does not exist.
        """
        if not await record_exists(self.session, Client, client_id):
            raise NotFoundError("Client", client_id)
        return await self.list_policies(PolicyFilter(client_id=client_id, status=status))

    async def get(self, policy_id: int) -> Policy:
        """Fetch a policy by primary key or raise NotFoundError."""
        policy = await self.session.get(Policy, policy_id)
        if policy is None:
            raise NotFoundError("Policy", policy_id)
        return policy

    async def create(
        self,
        *,
        type: PolicyType,
        start_date: date,
        end_date: date,
        insured_amount: Decimal,
        client_id: int,
    ) -> Policy:
        """Create an Active policy for an existing client.

        Raises:
            InvalidDateRangeError: end date is not after the start date.
            ReferenceNotFoundError: the client does not exist.
        """
        date_errors = check_date_range(start_date, end_date)
        if date_errors:
            raise InvalidDateRangeError({FIELD_END_DATE: date_errors})

        if not await record_exists(self.session, Client, client_id):
            raise ReferenceNotFoundError(FIELD_CLIENT_ID, client_id)

        policy = Policy(
            type=type,
            start_date=start_date,
            end_date=end_date,
            insured_amount=insured_amount,
            status=PolicyStatus.ACTIVE,
            client_id=client_id,
        )
        self.session.add(policy)
        await self.session.flush()

        logger.info("policy_created", policy_id=policy.id, client_id=client_id)
        return policy

    async def update_status(
        self,
        policy_id: int,
        *,
        status: PolicyStatus,
        type: PolicyType | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        insured_amount: Decimal | None = None,
        client_id: int | None = None,
    ) -> Policy:
        """Administrative update: overwrite status and any supplied field.

        No transition rule applies here (a cancelled policy may be set back to
        Active). When either date is supplied, the resulting pair must still
        satisfy end > start.

        Raises:
            NotFoundError: policy absent, or deleted by a concurrent writer.
            InvalidDateRangeError: a supplied date leaves end <= start.
            ReferenceNotFoundError: a new ``client_id`` does not exist.
            ConcurrencyConflictError: concurrent change on a live record.
        """
        policy = await self.get(policy_id)

        if start_date is not None or end_date is not None:
            date_errors = check_date_range(
                start_date or policy.start_date, end_date or policy.end_date
            )
            if date_errors:
                raise InvalidDateRangeError({FIELD_END_DATE: date_errors})

        if client_id is not None and client_id != policy.client_id:
            if not await record_exists(self.session, Client, client_id):
                raise ReferenceNotFoundError(FIELD_CLIENT_ID, client_id)
            policy.client_id = client_id

        if policy.status is PolicyStatus.CANCELLED and status is PolicyStatus.ACTIVE:
            logger.warning("policy_status_overridden", policy_id=policy_id)

        policy.status = status
        if type is not None:
            policy.type = type
        if start_date is not None:
            policy.start_date = start_date
        if end_date is not None:
            policy.end_date = end_date
        if insured_amount is not None:
            policy.insured_amount = insured_amount
        policy.updated_at = utcnow()

        await self._save(policy_id)
        logger.info("policy_status_updated", policy_id=policy_id, status=status.value)
        return policy

    async def cancel(self, client_id: int, policy_id: int) -> Policy:
        """Cancel one of a client's policies through the lifecycle machine.

        Raises:
            NotFoundError: policy absent or owned by another client.
            AlreadyInTerminalStateError: policy already cancelled.
        """
        result = await self.session.execute(
            select(Policy).where(Policy.id == policy_id, Policy.client_id == client_id)
        )
        policy = result.scalar_one_or_none()
        if policy is None:
            raise NotFoundError(
                "Policy",
                policy_id,
                "Policy not found or does not belong to the specified client",
            )

        lifecycle = create_lifecycle(policy)
        try:
            lifecycle.cancel()
        except TransitionNotAllowed as exc:
            raise AlreadyInTerminalStateError(policy_id) from exc

        await self._save(policy_id)
        return policy

    async def delete(self, policy_id: int) -> None:
        policy = await self.get(policy_id)
        await self.session.delete(policy)
        await self._save(policy_id)
        logger.info("policy_deleted", policy_id=policy_id)

    async def _save(self, policy_id: int) -> None:
        outcome = await flush_with_conflict_check(self.session, Policy, policy_id)
        if outcome is SaveOutcome.NOT_FOUND_AFTER_CONFLICT:
            raise NotFoundError("Policy", policy_id)
        if outcome is SaveOutcome.CONFLICT_FATAL:
            raise ConcurrencyConflictError("Policy", policy_id)
