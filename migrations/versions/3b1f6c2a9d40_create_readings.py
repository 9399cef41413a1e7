"""create readings

Revision ID: 3b1f6c2a9d40
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the readings table."""
    op.create_table(
        "readings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("value >= 0 AND value <= 100", name="ck_readings_value_range"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_readings_active"), "readings", ["active"], unique=False)


def downgrade() -> None:
    """Drop the readings table."""
    op.drop_index(op.f("ix_readings_active"), table_name="readings")
    op.drop_table("readings")
