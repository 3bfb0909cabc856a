"""API module exports."""

from policy_management.api.clients import router as clients_router
from policy_management.api.customers import router as customers_router
from policy_management.api.deps import get_client_repository, get_db, get_policy_repository
from policy_management.api.health import router as health_router
from policy_management.api.policies import router as policies_router

__all__ = [
    "clients_router",
    "customers_router",
    "get_client_repository",
    "get_db",
    "get_policy_repository",
    "health_router",
    "policies_router",
]
