"""Tests for the client-side reducer and selectors."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from policy_management.api.schemas.clients import ClientResponse
from policy_management.api.schemas.policies import PolicyResponse
from policy_management.client.reducers import reduce
from policy_management.client.state import (
    CancelPolicy,
    ClientDeleted,
    ClientSaved,
    LoadClients,
    LoadPolicies,
    LoadPoliciesSuccess,
    PolicyDeleted,
    PolicySaved,
    PolicyStateModel,
    RequestFailed,
    SelectClient,
    SelectPolicy,
    active_policy_count,
    policies_for_client,
)
from policy_management.models import PolicyStatus, PolicyType

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def policy(policy_id: int, client_id: int = 1, status=PolicyStatus.ACTIVE) -> PolicyResponse:
    return PolicyResponse(
        id=policy_id,
        type=PolicyType.LIFE,
        start_date=date(2024, 1, 1),
        end_date=date(2025, 1, 1),
        insured_amount=Decimal("100.00"),
        status=status,
        client_id=client_id,
        created_at=NOW,
        updated_at=None,
    )


def client(client_id: int, name: str = "Ana Lopez") -> ClientResponse:
    return ClientResponse(
        id=client_id,
        identification_number=f"{client_id:010d}",
        full_name=name,
        email=f"c{client_id}@test.com",
        phone="555",
        created_at=NOW,
        updated_at=None,
    )


class TestPhases:
    def test_issue_sets_loading_and_clears_error(self):
        state = PolicyStateModel(error="boom", field_errors={"email": ["bad"]})

        new_state = reduce(state, LoadPolicies())

        assert new_state.is_loading
        assert new_state.error is None
        assert new_state.field_errors == {}
        assert state.error == "boom"

    def test_success_replaces_slice(self):
        state = reduce(PolicyStateModel(policies=(policy(9),)), LoadPolicies())

        new_state = reduce(state, LoadPoliciesSuccess((policy(1), policy(2))))

        assert [p.id for p in new_state.policies] == [1, 2]
        assert not new_state.is_loading

    def test_failure_sets_error(self):
        state = reduce(PolicyStateModel(), LoadClients())

        new_state = reduce(state, RequestFailed("Client not found", {"email": ["taken"]}))

        assert new_state.error == "Client not found"
        assert new_state.field_errors == {"email": ["taken"]}
        assert not new_state.is_loading

    def test_unknown_action_is_rejected(self):
        with pytest.raises(TypeError):
            reduce(PolicyStateModel(), object())


class TestPolicySlice:
    def test_saved_policy_replaces_in_place(self):
        state = PolicyStateModel(
            policies=(policy(1), policy(2)), selected_policy=policy(2)
        )
        cancelled = policy(2, status=PolicyStatus.CANCELLED)

        new_state = reduce(reduce(state, CancelPolicy(1, 2)), PolicySaved(cancelled))

        assert [p.id for p in new_state.policies] == [1, 2]
        assert new_state.policies[1].status is PolicyStatus.CANCELLED
        assert new_state.selected_policy == cancelled

    def test_saved_policy_appends_when_new(self):
        new_state = reduce(PolicyStateModel(policies=(policy(1),)), PolicySaved(policy(5)))
        assert [p.id for p in new_state.policies] == [1, 5]

    def test_deleted_policy_clears_selection(self):
        state = PolicyStateModel(policies=(policy(1),), selected_policy=policy(1))

        new_state = reduce(state, PolicyDeleted(1))

        assert new_state.policies == ()
        assert new_state.selected_policy is None

    def test_select_policy(self):
        new_state = reduce(PolicyStateModel(), SelectPolicy(policy(3)))
        assert new_state.selected_policy.id == 3
        assert not new_state.is_loading


class TestClientSlice:
    def test_saved_client_upserts(self):
        state = PolicyStateModel(clients=(client(1),), selected_client=client(1))
        renamed = client(1, "Ana Maria")

        new_state = reduce(state, ClientSaved(renamed))

        assert new_state.clients == (renamed,)
        assert new_state.selected_client == renamed

    def test_deleted_client_drops_its_policies(self):
        state = PolicyStateModel(
            clients=(client(1), client(2)),
            policies=(policy(10, client_id=1), policy(20, client_id=2)),
            selected_client=client(1),
            selected_policy=policy(10, client_id=1),
        )

        new_state = reduce(state, ClientDeleted(1))

        assert [c.id for c in new_state.clients] == [2]
        assert [p.id for p in new_state.policies] == [20]
        assert new_state.selected_client is None
        assert new_state.selected_policy is None

    def test_select_client(self):
        new_state = reduce(PolicyStateModel(), SelectClient(client(4)))
        assert new_state.selected_client.id == 4


class TestSelectors:
    def test_active_policy_count(self):
        state = PolicyStateModel(
            policies=(policy(1), policy(2, status=PolicyStatus.CANCELLED), policy(3))
        )
        assert active_policy_count(state) == 2

    def test_policies_for_client(self):
        state = PolicyStateModel(policies=(policy(1, client_id=1), policy(2, client_id=2)))
        assert [p.id for p in policies_for_client(state, 2)] == [2]
