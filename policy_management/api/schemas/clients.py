"""Request and response schemas for clients and customer profiles."""

from datetime import datetime

from pydantic import field_validator

from policy_management.api.schemas.base import ApiModel, ApiRequest, apply_rule
from policy_management.domain.validation import (
    check_email,
    check_full_name,
    check_identification_number,
    check_phone,
)


class ClientCreateRequest(ApiRequest):
    """Payload for creating a client."""

    identification_number: str
    full_name: str
    email: str
    phone: str

    @field_validator("identification_number")
    @classmethod
    def validate_identification_number(cls, value: str) -> str:
        return apply_rule(check_identification_number, value)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        return apply_rule(check_full_name, value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return apply_rule(check_email, value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        return apply_rule(check_phone, value)


class ClientUpdateRequest(ClientCreateRequest):
    """Payload for a full client update (all four fields required)."""


class CustomerProfileUpdateRequest(ApiRequest):
    """Payload for the narrow profile update. Blank fields are not applied."""

    email: str | None = None
    phone: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        if not value:
            return value
        return apply_rule(check_email, value)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if not value:
            return value
        return apply_rule(check_phone, value)


class ClientResponse(ApiModel):
    """Client response model."""

    id: int
    identification_number: str
    full_name: str
    email: str
    phone: str
    created_at: datetime
    updated_at: datetime | None
