"""Read-side predicates and orderings for client and policy listings."""

from dataclasses import dataclass
from datetime import date

from sqlalchemy import ColumnElement, func, or_

from policy_management.models.client import Client
from policy_management.models.policy import Policy, PolicyStatus, PolicyType

CLIENT_ORDERING = (Client.full_name.asc(), Client.id.asc())
POLICY_ORDERING = (Policy.start_date.asc(), Policy.id.asc())


@dataclass(frozen=True)
class PolicyFilter:
    """Optional policy predicates, combined with AND. Ranges are inclusive."""

    type: PolicyType | None = None
    status: PolicyStatus | None = None
    start_date_from: date | None = None
    start_date_to: date | None = None
    end_date_from: date | None = None
    end_date_to: date | None = None
    client_id: int | None = None


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_client_search_filter(search: str | None) -> ColumnElement[bool] | None:
    """Substring match on identification number, full name or email.

    Case-insensitive, OR across the three fields. Blank input means no filter.
    """
    if search is None or not search.strip():
        return None

    pattern = _like_pattern(search.strip().lower())
    return or_(
        Client.identification_number.like(pattern, escape="\\"),
        func.lower(Client.full_name).like(pattern, escape="\\"),
        func.lower(Client.email).like(pattern, escape="\\"),
    )


def build_policy_filters(policy_filter: PolicyFilter) -> list[ColumnElement[bool]]:
    """Build SQLAlchemy filter clauses for policy listing."""
    filters: list[ColumnElement[bool]] = []
    if policy_filter.client_id is not None:
        filters.append(Policy.client_id == policy_filter.client_id)
    if policy_filter.type is not None:
        filters.append(Policy.type == policy_filter.type)
    if policy_filter.status is not None:
        filters.append(Policy.status == policy_filter.status)
    if policy_filter.start_date_from is not None:
        filters.append(Policy.start_date >= policy_filter.start_date_from)
    if policy_filter.start_date_to is not None:
        filters.append(Policy.start_date <= policy_filter.start_date_to)
    if policy_filter.end_date_from is not None:
        filters.append(Policy.end_date >= policy_filter.end_date_from)
    if policy_filter.end_date_to is not None:
        filters.append(Policy.end_date <= policy_filter.end_date_to)
    return filters
