"""Translate domain errors into HTTP responses.

| Domain error                                   | Status |
|------------------------------------------------|--------|
| NotFoundError                                  | 404    |
| ValidationFailedError (duplicates, date range) | 400    |
| ReferenceNotFoundError                         | 400    |
| request body/query validation                  | 400    |
| AlreadyInTerminalStateError                    | 400    |
| EmailInUseError                                | 409    |
| ConcurrencyConflictError, anything unexpected  | 500    |
"""

from typing import Any

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from policy_management.api.schemas.base import ValidationProblem
from policy_management.core.logging import get_logger
from policy_management.domain.errors import (
    AlreadyInTerminalStateError,
    ConcurrencyConflictError,
    EmailInUseError,
    NotFoundError,
    ReferenceNotFoundError,
    ValidationFailedError,
)
from policy_management.domain.validation import FieldErrors

logger = get_logger(__name__)

GENERIC_SERVER_ERROR = {
    "title": "An unexpected error occurred.",
    "status": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def validation_problem(errors: FieldErrors) -> JSONResponse:
    """Build a 400 response carrying a field -> messages map."""
    body = ValidationProblem(errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


def _detail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def _field_name(loc: tuple[Any, ...]) -> str:
    """Pick the JSON field name out of a pydantic error location."""
    names = [part for part in loc[1:] if isinstance(part, str)]
    if names:
        return names[0]
    return str(loc[0]) if loc else "body"


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: FieldErrors = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(
            str(error.get("msg", "Invalid value"))
        )
    return validation_problem(errors)


async def handle_validation_failed(
    request: Request, exc: ValidationFailedError
) -> JSONResponse:
    logger.info("request_rejected", reason=type(exc).__name__, fields=list(exc.errors))
    return validation_problem(exc.errors)


async def handle_reference_not_found(
    request: Request, exc: ReferenceNotFoundError
) -> JSONResponse:
    return validation_problem({exc.field: [exc.message]})


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _detail(status.HTTP_404_NOT_FOUND, exc.message)


async def handle_already_cancelled(
    request: Request, exc: AlreadyInTerminalStateError
) -> JSONResponse:
    return _detail(status.HTTP_400_BAD_REQUEST, exc.message)


async def handle_email_in_use(request: Request, exc: EmailInUseError) -> JSONResponse:
    return _detail(status.HTTP_409_CONFLICT, exc.message)


async def handle_concurrency_conflict(
    request: Request, exc: ConcurrencyConflictError
) -> JSONResponse:
    logger.error(
        "concurrency_conflict",
        resource=exc.resource,
        record_id=exc.record_id,
        path=request.url.path,
    )
    sentry_sdk.capture_exception(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=GENERIC_SERVER_ERROR
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=GENERIC_SERVER_ERROR
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every domain-error handler on ``app``."""
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(ValidationFailedError, handle_validation_failed)
    app.add_exception_handler(ReferenceNotFoundError, handle_reference_not_found)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(AlreadyInTerminalStateError, handle_already_cancelled)
    app.add_exception_handler(EmailInUseError, handle_email_in_use)
    app.add_exception_handler(ConcurrencyConflictError, handle_concurrency_conflict)
    app.add_exception_handler(Exception, handle_unexpected)
