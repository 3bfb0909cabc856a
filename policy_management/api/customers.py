"""Customer-scoped endpoints: own policies, cancellation, profile update."""

from fastapi import APIRouter, Depends, Query, Response, status

from policy_management.api.deps import get_client_repository, get_policy_repository
from policy_management.api.schemas.base import ErrorDetail
from policy_management.api.schemas.clients import CustomerProfileUpdateRequest
from policy_management.api.schemas.policies import PolicyResponse
from policy_management.core.logging import client_id_ctx
from policy_management.models.policy import PolicyStatus
from policy_management.repositories.clients import ClientRepository
from policy_management.repositories.policies import PolicyRepository

router = APIRouter(
    prefix="/api/customers/{customer_id}",
    tags=["customers"],
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorDetail}},
)


@router.get("/policies", response_model=list[PolicyResponse])
async def list_customer_policies(
    customer_id: int,
    status_filter: PolicyStatus | None = Query(default=None, alias="status"),
    policies: PolicyRepository = Depends(get_policy_repository),
) -> list[PolicyResponse]:
    """List the customer's policies, optionally only those with ``status``."""
    client_id_ctx.set(customer_id)
    rows = await policies.list_for_client(customer_id, status=status_filter)
    return [PolicyResponse.model_validate(row) for row in rows]


@router.post(
    "/policies/{policy_id}/cancel",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorDetail}},
)
async def cancel_policy(
    customer_id: int,
    policy_id: int,
    policies: PolicyRepository = Depends(get_policy_repository),
) -> Response:
    """Cancel an Active policy that belongs to the customer."""
    client_id_ctx.set(customer_id)
    await policies.cancel(customer_id, policy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put(
    "/profile",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorDetail}},
)
async def update_profile(
    customer_id: int,
    payload: CustomerProfileUpdateRequest,
    clients: ClientRepository = Depends(get_client_repository),
) -> Response:
    """Update the customer's email and/or phone."""
    client_id_ctx.set(customer_id)
    await clients.update_profile(customer_id, email=payload.email, phone=payload.phone)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
