"""Shared Pydantic base for camelCase JSON payloads."""

from collections.abc import Callable
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Insured amounts are Decimal internally but travel as JSON numbers.
Amount = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ApiModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiRequest(ApiModel):
    """Base for request bodies; surrounding whitespace is trimmed on input."""

    model_config = ConfigDict(str_strip_whitespace=True)


def apply_rule(check: Callable[[Any], list[str]], value: Any) -> Any:
    """Run a shared validation rule and surface its first message as-is."""
    messages = check(value)
    if messages:
        raise PydanticCustomError("field_rule", messages[0])
    return value


class ValidationProblem(BaseModel):
    """Body of every 400 response that carries field-level messages."""

    title: str = "One or more validation errors occurred."
    status: int = 400
    errors: dict[str, list[str]]


class ErrorDetail(BaseModel):
    """Body of 404/409/400 responses without field-level messages."""

    detail: str
