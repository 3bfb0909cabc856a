"""Insurance policy SQLAlchemy model and its enumerations."""

import enum
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_management.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from policy_management.models.client import Client


class PolicyType(enum.Enum):
    """Closed set of insurance lines."""

    LIFE = "Life"
    AUTOMOBILE = "Automobile"
    HEALTH = "Health"
    HOME = "Home"


class PolicyStatus(enum.Enum):
    """Policy lifecycle status."""

    ACTIVE = "Active"
    CANCELLED = "Cancelled"


class Policy(Base, TimestampMixin):
    """An insurance contract owned by exactly one client."""

    __tablename__ = "policies"

    id: Mapped[int] = mapped_column(primary_key=True)
    type: Mapped[PolicyType] = mapped_column(Enum(PolicyType), nullable=False, index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    insured_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    status: Mapped[PolicyStatus] = mapped_column(
        Enum(PolicyStatus), default=PolicyStatus.ACTIVE, nullable=False
    )
    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(nullable=False)

    # Relationships
    client: Mapped["Client"] = relationship(back_populates="policies")

    __mapper_args__ = {"version_id_col": version}
