"""Client-side state store mirroring the SPA's client and policy collections."""

from policy_management.client.gateway import ApiError, PolicyApiGateway
from policy_management.client.reducers import reduce
from policy_management.client.state import (
    PolicyStateModel,
    active_policy_count,
    policies_for_client,
)
from policy_management.client.store import PolicyStore

__all__ = [
    "ApiError",
    "PolicyApiGateway",
    "PolicyStateModel",
    "PolicyStore",
    "active_policy_count",
    "policies_for_client",
    "reduce",
]
