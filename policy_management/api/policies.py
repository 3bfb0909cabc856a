"""Policies API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request, Response, status

from policy_management.api.deps import get_policy_repository
from policy_management.api.schemas.base import ErrorDetail, ValidationProblem
from policy_management.api.schemas.policies import (
    PolicyCreateRequest,
    PolicyResponse,
    PolicyStatusUpdateRequest,
)
from policy_management.models.policy import PolicyStatus, PolicyType
from policy_management.repositories.filters import PolicyFilter
from policy_management.repositories.policies import PolicyRepository

router = APIRouter(
    prefix="/api/policies",
    tags=["policies"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationProblem},
        status.HTTP_404_NOT_FOUND: {"model": ErrorDetail},
    },
)


@router.get("", response_model=list[PolicyResponse])
async def list_policies(
    policy_type: PolicyType | None = Query(default=None, alias="type"),
    status_filter: PolicyStatus | None = Query(default=None, alias="status"),
    start_date_from: date | None = Query(default=None, alias="startDateFrom"),
    start_date_to: date | None = Query(default=None, alias="startDateTo"),
    end_date_from: date | None = Query(default=None, alias="endDateFrom"),
    end_date_to: date | None = Query(default=None, alias="endDateTo"),
    policies: PolicyRepository = Depends(get_policy_repository),
) -> list[PolicyResponse]:
    """List policies by start date, filtered by type, status and date ranges."""
    rows = await policies.list_policies(
        PolicyFilter(
            type=policy_type,
            status=status_filter,
            start_date_from=start_date_from,
            start_date_to=start_date_to,
            end_date_from=end_date_from,
            end_date_to=end_date_to,
        )
    )
    return [PolicyResponse.model_validate(row) for row in rows]


@router.get("/{policy_id}", response_model=PolicyResponse)
async def get_policy(
    policy_id: int,
    policies: PolicyRepository = Depends(get_policy_repository),
) -> PolicyResponse:
    """Get policy by ID."""
    return PolicyResponse.model_validate(await policies.get(policy_id))


@router.post("", response_model=PolicyResponse, status_code=status.HTTP_201_CREATED)
async def create_policy(
    payload: PolicyCreateRequest,
    request: Request,
    response: Response,
    policies: PolicyRepository = Depends(get_policy_repository),
) -> PolicyResponse:
    """Create an Active policy for an existing client."""
    policy = await policies.create(
        type=payload.type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        insured_amount=payload.insured_amount,
        client_id=payload.client_id,
    )
    response.headers["Location"] = str(request.url_for("get_policy", policy_id=policy.id))
    return PolicyResponse.model_validate(policy)


@router.put(
    "/{policy_id}/status",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_policy_status(
    policy_id: int,
    payload: PolicyStatusUpdateRequest,
    policies: PolicyRepository = Depends(get_policy_repository),
) -> Response:
    """Set the policy status (and any other supplied field) without transition checks."""
    await policies.update_status(
        policy_id,
        status=payload.status,
        type=payload.type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        insured_amount=payload.insured_amount,
        client_id=payload.client_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{policy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_policy(
    policy_id: int,
    policies: PolicyRepository = Depends(get_policy_repository),
) -> Response:
    """Delete a policy."""
    await policies.delete(policy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
