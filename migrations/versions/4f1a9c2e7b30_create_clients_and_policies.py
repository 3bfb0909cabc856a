"""create_clients_and_policies

Revision ID: 4f1a9c2e7b30
Revises:
Create Date: 2026-10-19 09:12:44.517203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1a9c2e7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create clients and policies with uniqueness, FK cascade and filter indexes."""
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("identification_number", sa.String(length=10), nullable=False),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("identification_number"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "policies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column(
            "type",
            sa.Enum("LIFE", "AUTOMOBILE", "HEALTH", "HOME", name="policytype"),
            nullable=False,
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("insured_amount", sa.Numeric(precision=18, scale=2), nullable=False),
        sa.Column(
            "status",
            sa.Enum("ACTIVE", "CANCELLED", name="policystatus"),
            nullable=False,
        ),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_policies_type", "policies", ["type"])
    op.create_index("ix_policies_start_date", "policies", ["start_date"])
    op.create_index("ix_policies_end_date", "policies", ["end_date"])
    op.create_index("ix_policies_client_id", "policies", ["client_id"])


def downgrade() -> None:
    """Drop policies and clients."""
    op.drop_index("ix_policies_client_id", table_name="policies")
    op.drop_index("ix_policies_end_date", table_name="policies")
    op.drop_index("ix_policies_start_date", table_name="policies")
    op.drop_index("ix_policies_type", table_name="policies")
    op.drop_table("policies")
    op.drop_table("clients")
    sa.Enum(name="policystatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="policytype").drop(op.get_bind(), checkfirst=True)
