"""Domain error taxonomy raised by the record stores.

Repositories raise these; the API layer maps them to HTTP responses in
``policy_management.api.errors``.
"""

from policy_management.domain.validation import FieldErrors


class PolicyManagementError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(PolicyManagementError):
    """A record addressed by id does not exist."""

    def __init__(
        self, resource: str, record_id: int, message: str | None = None
    ) -> None:
        super().__init__(message or f"{resource} not found")
        self.resource = resource
        self.record_id = record_id


class ValidationFailedError(PolicyManagementError):
    """One or more fields violate a constraint."""

    def __init__(self, errors: FieldErrors) -> None:
        super().__init__("One or more validation errors occurred.")
        self.errors = errors


class DuplicateValueError(ValidationFailedError):
    """Identification number and/or email already belong to another client."""


class InvalidDateRangeError(ValidationFailedError):
    """Policy end date is not after its start date."""


class ReferenceNotFoundError(PolicyManagementError):
    """A policy references a client that does not exist."""

    def __init__(self, field: str, client_id: int) -> None:
        super().__init__("The specified client does not exist")
        self.field = field
        self.client_id = client_id


class AlreadyInTerminalStateError(PolicyManagementError):
    """The policy is already cancelled."""

    def __init__(self, policy_id: int) -> None:
        super().__init__("The policy is already cancelled")
        self.policy_id = policy_id


class EmailInUseError(PolicyManagementError):
    """Profile update tried to take an email owned by another client."""

    def __init__(self, email: str) -> None:
        super().__init__("The email is already in use by another client")
        self.email = email


class ConcurrencyConflictError(PolicyManagementError):
    """A concurrent writer changed a record that still exists."""

    def __init__(self, resource: str, record_id: int) -> None:
        super().__init__(f"{resource} {record_id} was modified concurrently")
        self.resource = resource
        self.record_id = record_id
