"""Async HTTP gateway to the policy management API."""

from enum import Enum
from typing import Any

import httpx
from pydantic.alias_generators import to_camel

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
from policy_management.core.logging import get_logger
from policy_management.domain.validation import FieldErrors
from policy_management.models.policy import PolicyStatus

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        field_errors: FieldErrors | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field_errors = field_errors or {}


def _raise_for_status(response: httpx.Response) -> None:
    if response.is_success:
        return
    try:
        body: Any = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    field_errors = body.get("errors") or {}
    message = body.get("detail") or body.get("title") or response.reason_phrase
    logger.warning(
        "api_request_failed",
        method=response.request.method,
        url=str(response.request.url),
        status_code=response.status_code,
    )
    raise ApiError(response.status_code, str(message), field_errors)


def _body(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


class PolicyApiGateway:
    """Typed wrapper over the HTTP surface.

    Owns an ``httpx.AsyncClient`` unless one is supplied (tests pass one
    wired to ``ASGITransport`` or ``MockTransport``).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PolicyApiGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # Clients

    async def list_clients(self, search: str | None = None) -> list[ClientResponse]:
        params = {"search": search} if search else None
        response = await self._client.get("/api/clients", params=params)
        _raise_for_status(response)
        return [ClientResponse.model_validate(item) for item in response.json()]

    async def get_client(self, client_id: int) -> ClientResponse:
        response = await self._client.get(f"/api/clients/{client_id}")
        _raise_for_status(response)
        return ClientResponse.model_validate(response.json())

    async def create_client(self, payload: ClientCreateRequest) -> ClientResponse:
        response = await self._client.post("/api/clients", json=_body(payload))
        _raise_for_status(response)
        return ClientResponse.model_validate(response.json())

    async def update_client(self, client_id: int, payload: ClientUpdateRequest) -> None:
        response = await self._client.put(f"/api/clients/{client_id}", json=_body(payload))
        _raise_for_status(response)

    async def delete_client(self, client_id: int) -> None:
        response = await self._client.delete(f"/api/clients/{client_id}")
        _raise_for_status(response)

    async def update_profile(
        self, client_id: int, payload: CustomerProfileUpdateRequest
    ) -> None:
        response = await self._client.put(
            f"/api/customers/{client_id}/profile", json=_body(payload)
        )
        _raise_for_status(response)

    # Policies

    async def list_policies(self, **filters: Any) -> list[PolicyResponse]:
        params = {
            to_camel(key): value.value if isinstance(value, Enum) else str(value)
            for key, value in filters.items()
            if value is not None
        }
        response = await self._client.get("/api/policies", params=params or None)
        _raise_for_status(response)
        return [PolicyResponse.model_validate(item) for item in response.json()]

    async def list_customer_policies(
        self, client_id: int, status: PolicyStatus | None = None
    ) -> list[PolicyResponse]:
        params = {"status": status.value} if status else None
        response = await self._client.get(
            f"/api/customers/{client_id}/policies", params=params
        )
        _raise_for_status(response)
        return [PolicyResponse.model_validate(item) for item in response.json()]

    async def get_policy(self, policy_id: int) -> PolicyResponse:
        response = await self._client.get(f"/api/policies/{policy_id}")
        _raise_for_status(response)
        return PolicyResponse.model_validate(response.json())

    async def create_policy(self, payload: PolicyCreateRequest) -> PolicyResponse:
        response = await self._client.post("/api/policies", json=_body(payload))
        _raise_for_status(response)
        return PolicyResponse.model_validate(response.json())

    async def update_policy_status(
        self, policy_id: int, payload: PolicyStatusUpdateRequest
    ) -> None:
        response = await self._client.put(
            f"/api/policies/{policy_id}/status", json=_body(payload)
        )
        _raise_for_status(response)

    async def cancel_policy(self, client_id: int, policy_id: int) -> None:
        response = await self._client.post(
            f"/api/customers/{client_id}/policies/{policy_id}/cancel"
        )
        _raise_for_status(response)

    async def delete_policy(self, policy_id: int) -> None:
        response = await self._client.delete(f"/api/policies/{policy_id}")
        _raise_for_status(response)
