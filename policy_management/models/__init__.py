"""SQLAlchemy models for the policy management application."""

from policy_management.models.base import Base, TimestampMixin, utcnow
from policy_management.models.client import Client
from policy_management.models.policy import Policy, PolicyStatus, PolicyType

__all__ = [
    "Base",
    "TimestampMixin",
    "utcnow",
    "Client",
    "Policy",
    "PolicyStatus",
    "PolicyType",
]
