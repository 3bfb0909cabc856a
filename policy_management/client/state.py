"""Client-side state model, actions and selectors.

The state is an immutable snapshot; reducers in ``reducers.py`` return a new
snapshot for every action. Records reuse the API response schemas so the
client and server share one definition of a client and a policy.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from policy_management.api.schemas.clients import ClientResponse
from policy_management.api.schemas.policies import PolicyResponse
from policy_management.domain.validation import FieldErrors
from policy_management.models.policy import PolicyStatus, PolicyType


@dataclass(frozen=True)
class PolicyStateModel:
    """Everything the views render from."""

    policies: tuple[PolicyResponse, ...] = ()
    clients: tuple[ClientResponse, ...] = ()
    selected_policy: PolicyResponse | None = None
    selected_client: ClientResponse | None = None
    is_loading: bool = False
    error: str | None = None
    field_errors: FieldErrors = field(default_factory=dict)


# Issue actions: set is_loading, clear error.


@dataclass(frozen=True)
class LoadPolicies:
    type: PolicyType | None = None
    status: PolicyStatus | None = None
    start_date_from: date | None = None
    start_date_to: date | None = None
    end_date_from: date | None = None
    end_date_to: date | None = None


@dataclass(frozen=True)
class LoadCustomerPolicies:
    client_id: int
    status: PolicyStatus | None = None


@dataclass(frozen=True)
class LoadClients:
    search: str | None = None


@dataclass(frozen=True)
class CreatePolicy:
    type: PolicyType
    start_date: date
    end_date: date
    insured_amount: Decimal
    client_id: int


@dataclass(frozen=True)
class UpdatePolicy:
    policy_id: int
    status: PolicyStatus
    changes: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CancelPolicy:
    client_id: int
    policy_id: int


@dataclass(frozen=True)
class DeletePolicy:
    policy_id: int


@dataclass(frozen=True)
class CreateClient:
    identification_number: str
    full_name: str
    email: str
    phone: str


@dataclass(frozen=True)
class UpdateClient:
    client_id: int
    identification_number: str
    full_name: str
    email: str
    phone: str


@dataclass(frozen=True)
class UpdateProfile:
    client_id: int
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class DeleteClient:
    client_id: int


ISSUE_ACTIONS = (
    LoadPolicies,
    LoadCustomerPolicies,
    LoadClients,
    CreatePolicy,
    UpdatePolicy,
    CancelPolicy,
    DeletePolicy,
    CreateClient,
    UpdateClient,
    UpdateProfile,
    DeleteClient,
)


# Success actions: fold the result into a slice, clear is_loading.


@dataclass(frozen=True)
class LoadPoliciesSuccess:
    policies: tuple[PolicyResponse, ...]


@dataclass(frozen=True)
class LoadClientsSuccess:
    clients: tuple[ClientResponse, ...]


@dataclass(frozen=True)
class PolicySaved:
    policy: PolicyResponse


@dataclass(frozen=True)
class PolicyDeleted:
    policy_id: int


@dataclass(frozen=True)
class ClientSaved:
    client: ClientResponse


@dataclass(frozen=True)
class ClientDeleted:
    client_id: int


# Failure action: set error, clear is_loading.


@dataclass(frozen=True)
class RequestFailed:
    error: str
    field_errors: FieldErrors = field(default_factory=dict)


# Selection: no network call.


@dataclass(frozen=True)
class SelectPolicy:
    policy: PolicyResponse | None


@dataclass(frozen=True)
class SelectClient:
    client: ClientResponse | None


Action = (
    LoadPolicies
    | LoadCustomerPolicies
    | LoadClients
    | CreatePolicy
    | UpdatePolicy
    | CancelPolicy
    | DeletePolicy
    | CreateClient
    | UpdateClient
    | UpdateProfile
    | DeleteClient
    | LoadPoliciesSuccess
    | LoadClientsSuccess
    | PolicySaved
    | PolicyDeleted
    | ClientSaved
    | ClientDeleted
    | RequestFailed
    | SelectPolicy
    | SelectClient
)


def active_policy_count(state: PolicyStateModel) -> int:
    return sum(1 for policy in state.policies if policy.status is PolicyStatus.ACTIVE)


def policies_for_client(
    state: PolicyStateModel, client_id: int
) -> tuple[PolicyResponse, ...]:
    return tuple(policy for policy in state.policies if policy.client_id == client_id)
