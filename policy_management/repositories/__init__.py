"""Record stores for clients and policies."""

from policy_management.repositories.clients import ClientRepository
from policy_management.repositories.filters import PolicyFilter
from policy_management.repositories.persistence import SaveOutcome
from policy_management.repositories.policies import PolicyRepository

__all__ = [
    "ClientRepository",
    "PolicyFilter",
    "PolicyRepository",
    "SaveOutcome",
]
