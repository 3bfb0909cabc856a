"""Pure reducer folding actions into a new PolicyStateModel."""

from dataclasses import replace
from typing import TypeVar

from policy_management.api.schemas.clients import ClientResponse
from policy_management.api.schemas.policies import PolicyResponse
from policy_management.client.state import (
    ISSUE_ACTIONS,
    Action,
    ClientDeleted,
    ClientSaved,
    LoadClientsSuccess,
    LoadPoliciesSuccess,
    PolicyDeleted,
    PolicySaved,
    PolicyStateModel,
    RequestFailed,
    SelectClient,
    SelectPolicy,
)

Record = TypeVar("Record", PolicyResponse, ClientResponse)


def _upsert(records: tuple[Record, ...], record: Record) -> tuple[Record, ...]:
    """Replace the record with the same id in place, or append it."""
    if any(existing.id == record.id for existing in records):
        return tuple(record if existing.id == record.id else existing for existing in records)
    return (*records, record)


def _reselect(selected: Record | None, record: Record) -> Record | None:
    if selected is not None and selected.id == record.id:
        return record
    return selected


def reduce(state: PolicyStateModel, action: Action) -> PolicyStateModel:
    """Return the state that results from applying ``action`` to ``state``."""
    if isinstance(action, ISSUE_ACTIONS):
        return replace(state, is_loading=True, error=None, field_errors={})

    if isinstance(action, LoadPoliciesSuccess):
        return replace(state, policies=action.policies, is_loading=False)

    if isinstance(action, LoadClientsSuccess):
        return replace(state, clients=action.clients, is_loading=False)

    if isinstance(action, PolicySaved):
        return replace(
            state,
            policies=_upsert(state.policies, action.policy),
            selected_policy=_reselect(state.selected_policy, action.policy),
            is_loading=False,
        )

    if isinstance(action, PolicyDeleted):
        selected = state.selected_policy
        return replace(
            state,
            policies=tuple(p for p in state.policies if p.id != action.policy_id),
            selected_policy=None if selected and selected.id == action.policy_id else selected,
            is_loading=False,
        )

    if isinstance(action, ClientSaved):
        return replace(
            state,
            clients=_upsert(state.clients, action.client),
            selected_client=_reselect(state.selected_client, action.client),
            is_loading=False,
        )

    if isinstance(action, ClientDeleted):
        # The server cascades the delete to the client's policies; mirror it.
        selected_client = state.selected_client
        selected_policy = state.selected_policy
        return replace(
            state,
            clients=tuple(c for c in state.clients if c.id != action.client_id),
            policies=tuple(p for p in state.policies if p.client_id != action.client_id),
            selected_client=(
                None
                if selected_client and selected_client.id == action.client_id
                else selected_client
            ),
            selected_policy=(
                None
                if selected_policy and selected_policy.client_id == action.client_id
                else selected_policy
            ),
            is_loading=False,
        )

    if isinstance(action, RequestFailed):
        return replace(
            state,
            error=action.error,
            field_errors=action.field_errors,
            is_loading=False,
        )

    if isinstance(action, SelectPolicy):
        return replace(state, selected_policy=action.policy)

    if isinstance(action, SelectClient):
        return replace(state, selected_client=action.client)

    raise TypeError(f"Unsupported action: {type(action).__name__}")
