"""Client (policyholder) SQLAlchemy model."""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_management.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from policy_management.models.policy import Policy


class Client(Base, TimestampMixin):
    """A policyholder, unique by identification number and by email."""

    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True)
    identification_number: Mapped[str] = mapped_column(
        String(10), unique=True, nullable=False
    )
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    version: Mapped[int] = mapped_column(nullable=False)

    # Relationships
    policies: Mapped[list["Policy"]] = relationship(
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __mapper_args__ = {"version_id_col": version}
