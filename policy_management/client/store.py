"""Client-side store: dispatches actions and runs network intents.

Every intent follows three phases: the issue action (loading on, error
cleared), the gateway call, then a success or ``RequestFailed`` action.
Intents are not serialized; when two are in flight, whichever response
resolves last is what the state ends up holding.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx

from policy_management.api.schemas.clients import (
    ClientCreateRequest,
    ClientResponse,
    ClientUpdateRequest,
    CustomerProfileUpdateRequest,
)
from policy_management.api.schemas.policies import (
    PolicyCreateRequest,
    PolicyResponse,
    PolicyStatusUpdateRequest,
)
from policy_management.client.forms import (
    validate_client_form,
    validate_policy_form,
    validate_policy_update_form,
    validate_profile_form,
)
from policy_management.client.gateway import ApiError, PolicyApiGateway
from policy_management.client.reducers import reduce
from policy_management.client.state import (
    Action,
    CancelPolicy,
    ClientDeleted,
    ClientSaved,
    CreateClient,
    CreatePolicy,
    DeleteClient,
    DeletePolicy,
    LoadClients,
    LoadClientsSuccess,
    LoadCustomerPolicies,
    LoadPolicies,
    LoadPoliciesSuccess,
    PolicyDeleted,
    PolicySaved,
    PolicyStateModel,
    RequestFailed,
    SelectClient,
    SelectPolicy,
    UpdateClient,
    UpdatePolicy,
    UpdateProfile,
)
from policy_management.core.logging import get_logger
from policy_management.domain.validation import FieldErrors

logger = get_logger(__name__)

T = TypeVar("T")
Listener = Callable[[PolicyStateModel], None]

INVALID_FORM_MESSAGE = "Please correct the highlighted fields"
NETWORK_ERROR_MESSAGE = "Could not reach the server"


class PolicyStore:
    """Holds the current PolicyStateModel and notifies subscribers on change."""

    def __init__(
        self,
        gateway: PolicyApiGateway,
        state: PolicyStateModel | None = None,
    ) -> None:
        self.gateway = gateway
        self._state = state or PolicyStateModel()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> PolicyStateModel:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> PolicyStateModel:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def select_policy(self, policy: PolicyResponse | None) -> None:
        self.dispatch(SelectPolicy(policy))

    def select_client(self, client: ClientResponse | None) -> None:
        self.dispatch(SelectClient(client))

    # Reads

    async def load_policies(self, query: LoadPolicies | None = None) -> None:
        query = query or LoadPolicies()
        await self._run(
            query,
            lambda: self.gateway.list_policies(
                type=query.type,
                status=query.status,
                start_date_from=query.start_date_from,
                start_date_to=query.start_date_to,
                end_date_from=query.end_date_from,
                end_date_to=query.end_date_to,
            ),
            lambda policies: LoadPoliciesSuccess(tuple(policies)),
        )

    async def load_customer_policies(self, query: LoadCustomerPolicies) -> None:
        await self._run(
            query,
            lambda: self.gateway.list_customer_policies(query.client_id, query.status),
            lambda policies: LoadPoliciesSuccess(tuple(policies)),
        )

    async def load_clients(self, query: LoadClients | None = None) -> None:
        query = query or LoadClients()
        await self._run(
            query,
            lambda: self.gateway.list_clients(query.search),
            lambda clients: LoadClientsSuccess(tuple(clients)),
        )

    # Policy intents

    async def create_policy(self, form: CreatePolicy) -> PolicyResponse | None:
        if not self._form_is_valid(validate_policy_form(form)):
            return None
        payload = PolicyCreateRequest(
            type=form.type,
            start_date=form.start_date,
            end_date=form.end_date,
            insured_amount=form.insured_amount,
            client_id=form.client_id,
        )
        return await self._run(
            form, lambda: self.gateway.create_policy(payload), PolicySaved
        )

    async def update_policy(self, form: UpdatePolicy) -> PolicyResponse | None:
        if not self._form_is_valid(validate_policy_update_form(form)):
            return None
        payload = PolicyStatusUpdateRequest(status=form.status, **form.changes)

        async def update_and_reload() -> PolicyResponse:
            await self.gateway.update_policy_status(form.policy_id, payload)
            return await self.gateway.get_policy(form.policy_id)

        return await self._run(form, update_and_reload, PolicySaved)

    async def cancel_policy(self, intent: CancelPolicy) -> PolicyResponse | None:
        async def cancel_and_reload() -> PolicyResponse:
            await self.gateway.cancel_policy(intent.client_id, intent.policy_id)
            return await self.gateway.get_policy(intent.policy_id)

        return await self._run(intent, cancel_and_reload, PolicySaved)

    async def delete_policy(self, intent: DeletePolicy) -> None:
        await self._run(
            intent,
            lambda: self.gateway.delete_policy(intent.policy_id),
            lambda _: PolicyDeleted(intent.policy_id),
        )

    # Client intents

    async def create_client(self, form: CreateClient) -> ClientResponse | None:
        if not self._form_is_valid(validate_client_form(form)):
            return None
        payload = ClientCreateRequest(
            identification_number=form.identification_number,
            full_name=form.full_name,
            email=form.email,
            phone=form.phone,
        )
        return await self._run(
            form, lambda: self.gateway.create_client(payload), ClientSaved
        )

    async def update_client(self, form: UpdateClient) -> ClientResponse | None:
        if not self._form_is_valid(validate_client_form(form)):
            return None
        payload = ClientUpdateRequest(
            identification_number=form.identification_number,
            full_name=form.full_name,
            email=form.email,
            phone=form.phone,
        )

        async def update_and_reload() -> ClientResponse:
            await self.gateway.update_client(form.client_id, payload)
            return await self.gateway.get_client(form.client_id)

        return await self._run(form, update_and_reload, ClientSaved)

    async def update_profile(self, form: UpdateProfile) -> ClientResponse | None:
        if not self._form_is_valid(validate_profile_form(form)):
            return None
        payload = CustomerProfileUpdateRequest(email=form.email, phone=form.phone)

        async def update_and_reload() -> ClientResponse:
            await self.gateway.update_profile(form.client_id, payload)
            return await self.gateway.get_client(form.client_id)

        return await self._run(form, update_and_reload, ClientSaved)

    async def delete_client(self, intent: DeleteClient) -> None:
        await self._run(
            intent,
            lambda: self.gateway.delete_client(intent.client_id),
            lambda _: ClientDeleted(intent.client_id),
        )

    def _form_is_valid(self, errors: FieldErrors) -> bool:
        if errors:
            self.dispatch(RequestFailed(INVALID_FORM_MESSAGE, errors))
            return False
        return True

    async def _run(
        self,
        action: Action,
        operation: Callable[[], Awaitable[T]],
        on_success: Callable[[T], Action],
    ) -> T | None:
        self.dispatch(action)
        try:
            result = await operation()
        except ApiError as exc:
            self.dispatch(RequestFailed(exc.message, exc.field_errors))
            return None
        except httpx.HTTPError as exc:
            logger.warning(
                "api_unreachable", action=type(action).__name__, error=str(exc)
            )
            self.dispatch(RequestFailed(NETWORK_ERROR_MESSAGE))
            return None
        self.dispatch(on_success(result))
        return result
