"""
Client repository containing all data-access operations for the clients table.

Repository rules:
- Pure data-access logic only
- Built around an explicit AsyncSession handed in by the request
- Methods flush, but never commit
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from policy_management.core.logging import get_logger
from policy_management.domain.errors import (
    ConcurrencyConflictError,
    DuplicateValueError,
    EmailInUseError,
    NotFoundError,
)
from policy_management.domain.validation import (
    FIELD_EMAIL,
    FIELD_IDENTIFICATION_NUMBER,
    FieldErrors,
    normalize_email,
)
from policy_management.models.base import utcnow
from policy_management.models.client import Client
from policy_management.repositories.filters import (
    CLIENT_ORDERING,
    build_client_search_filter,
)
from policy_management.repositories.persistence import (
    SaveOutcome,
    flush_with_conflict_check,
    record_exists,
)

logger = get_logger(__name__)

DUPLICATE_IDENTIFICATION_MESSAGE = "A client with this identification number already exists"
DUPLICATE_EMAIL_MESSAGE = "A client with this email already exists"


class ClientRepository:
    """Client Record Store."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_clients(self, search: str | None = None) -> list[Client]:
        """List clients ordered by full name, optionally filtered by ``search``."""
        stmt = select(Client).order_by(*CLIENT_ORDERING)
        search_filter = build_client_search_filter(search)
        if search_filter is not None:
            stmt = stmt.where(search_filter)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find(self, client_id: int) -> Client | None:
        """Fetch a client by primary key, or None."""
        return await self.session.get(Client, client_id)

    async def get(self, client_id: int) -> Client:
        """Fetch a client by primary key or raise NotFoundError."""
        client = await self.find(client_id)
        if client is None:
            raise NotFoundError("Client", client_id)
        return client

    async def exists(self, client_id: int) -> bool:
        return await record_exists(self.session, Client, client_id)

    async def create(
        self,
        *,
        identification_number: str,
        full_name: str,
        email: str,
        phone: str,
    ) -> Client:
        """Create a client after checking both uniqueness constraints.

        Raises:
            DuplicateValueError: identification number and/or email taken.
        """
        identification_number = identification_number.strip()
        email = normalize_email(email)

        errors = await self._duplicate_errors(identification_number, email)
        if errors:
            raise DuplicateValueError(errors)

        client = Client(
            identification_number=identification_number,
            full_name=full_name.strip(),
            email=email,
            phone=phone.strip(),
        )
        self.session.add(client)
        try:
            await self.session.flush()
        except IntegrityError:
            # Lost a race against a concurrent insert of the same values.
            await self.session.rollback()
            errors = await self._duplicate_errors(identification_number, email)
            if errors:
                raise DuplicateValueError(errors) from None
            raise

        logger.info("client_created", client_id=client.id)
        return client

    async def update(
        self,
        client_id: int,
        *,
        identification_number: str,
        full_name: str,
        email: str,
        phone: str,
    ) -> Client:
        """Overwrite all mutable client fields.

        Raises:
            NotFoundError: client absent, or deleted by a concurrent writer.
            DuplicateValueError: another client holds the number or email.
            ConcurrencyConflictError: concurrent change on a live record.
        """
        client = await self.get(client_id)

        identification_number = identification_number.strip()
        email = normalize_email(email)
        errors = await self._duplicate_errors(
            identification_number, email, exclude_id=client_id
        )
        if errors:
            raise DuplicateValueError(errors)

        client.identification_number = identification_number
        client.full_name = full_name.strip()
        client.email = email
        client.phone = phone.strip()
        client.updated_at = utcnow()

        await self._save(client_id)
        logger.info("client_updated", client_id=client_id)
        return client

    async def delete(self, client_id: int) -> None:
        """Delete a client; its policies go with it (ON DELETE CASCADE)."""
        client = await self.get(client_id)
        await self.session.delete(client)
        await self._save(client_id)
        logger.info("client_deleted", client_id=client_id)

    async def update_profile(
        self,
        client_id: int,
        *,
        email: str | None = None,
        phone: str | None = None,
    ) -> Client:
        """Narrow update of email and/or phone.

        Blank values are ignored. The email is trimmed but kept in the case
        the customer typed it, unlike ``create``/``update``.

        Raises:
            NotFoundError: client absent.
            EmailInUseError: another client already holds the email.
        """
        client = await self.get(client_id)
        changed = False

        if email is not None and email.strip():
            trimmed_email = email.strip()
            in_use = await self.session.execute(
                select(Client.id).where(
                    Client.id != client_id, Client.email == trimmed_email
                )
            )
            if in_use.first() is not None:
                raise EmailInUseError(trimmed_email)
            if client.email != trimmed_email:
                client.email = trimmed_email
                changed = True

        if phone is not None and phone.strip():
            trimmed_phone = phone.strip()
            if client.phone != trimmed_phone:
                client.phone = trimmed_phone
                changed = True

        if changed:
            client.updated_at = utcnow()
            await self._save(client_id)
            logger.info("client_profile_updated", client_id=client_id)
        return client

    async def _duplicate_errors(
        self,
        identification_number: str,
        email: str,
        exclude_id: int | None = None,
    ) -> FieldErrors:
        """Collect every uniqueness violation instead of stopping at the first."""
        errors: FieldErrors = {}

        id_stmt = select(Client.id).where(
            Client.identification_number == identification_number
        )
        email_stmt = select(Client.id).where(Client.email == email)
        if exclude_id is not None:
            id_stmt = id_stmt.where(Client.id != exclude_id)
            email_stmt = email_stmt.where(Client.id != exclude_id)

        if (await self.session.execute(id_stmt.limit(1))).first() is not None:
            errors[FIELD_IDENTIFICATION_NUMBER] = [DUPLICATE_IDENTIFICATION_MESSAGE]
        if (await self.session.execute(email_stmt.limit(1))).first() is not None:
            errors[FIELD_EMAIL] = [DUPLICATE_EMAIL_MESSAGE]
        return errors

    async def _save(self, client_id: int) -> None:
        outcome = await flush_with_conflict_check(self.session, Client, client_id)
        if outcome is SaveOutcome.NOT_FOUND_AFTER_CONFLICT:
            raise NotFoundError("Client", client_id)
        if outcome is SaveOutcome.CONFLICT_FATAL:
            raise ConcurrencyConflictError("Client", client_id)
