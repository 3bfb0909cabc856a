"""Pydantic request/response schemas for the HTTP surface."""

from policy_management.api.schemas.base import ErrorDetail, ValidationProblem
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

__all__ = [
    "ClientCreateRequest",
    "ClientResponse",
    "ClientUpdateRequest",
    "CustomerProfileUpdateRequest",
    "ErrorDetail",
    "PolicyCreateRequest",
    "PolicyResponse",
    "PolicyStatusUpdateRequest",
    "ValidationProblem",
]
