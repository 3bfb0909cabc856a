"""Request and response schemas for policies."""

from datetime import date, datetime

from pydantic import Field, field_validator

from policy_management.api.schemas.base import Amount, ApiModel, ApiRequest, apply_rule
from policy_management.domain.validation import check_insured_amount
from policy_management.models.policy import PolicyStatus, PolicyType


class PolicyCreateRequest(ApiRequest):
    """Payload for creating a policy. The date pair is checked by the store."""

    type: PolicyType
    start_date: date
    end_date: date
    insured_amount: Amount
    client_id: int = Field(gt=0)

    @field_validator("insured_amount")
    @classmethod
    def validate_insured_amount(cls, value: Amount) -> Amount:
        return apply_rule(check_insured_amount, value)


class PolicyStatusUpdateRequest(ApiRequest):
    """Payload for the administrative status update.

    ``status`` is required; every other field is applied only when supplied.
    """

    status: PolicyStatus
    type: PolicyType | None = None
    start_date: date | None = None
    end_date: date | None = None
    insured_amount: Amount | None = None
    client_id: int | None = Field(default=None, gt=0)

    @field_validator("insured_amount")
    @classmethod
    def validate_insured_amount(cls, value: Amount | None) -> Amount | None:
        if value is None:
            return value
        return apply_rule(check_insured_amount, value)


class PolicyResponse(ApiModel):
    """Policy response model."""

    id: int
    type: PolicyType
    start_date: date
    end_date: date
    insured_amount: Amount
    status: PolicyStatus
    client_id: int
    created_at: datetime
    updated_at: datetime | None
