"""create_barcode_sequence_table

Revision ID: 3b1f0c2d9a10
Revises:
Create Date: 2026-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3b1f0c2d9a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create barcode_sequence table (one row per category and prefix, seeded at application startup)."""
    op.create_table(
        "barcode_sequence",
        sa.Column("category", sa.String(length=16), nullable=False),
        sa.Column("prefix", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.Column("last_value", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("category", "prefix"),
        sa.CheckConstraint("prefix >= 0 AND prefix <= 999", name="ck_barcode_sequence_prefix"),
        sa.CheckConstraint("last_value >= 0", name="ck_barcode_sequence_last_value"),
    )
    # At most one active counter per category; the others keep their last_value.
    op.create_index(
        "uq_barcode_sequence_active_category",
        "barcode_sequence",
        ["category"],
        unique=True,
        sqlite_where=sa.text("active"),
        postgresql_where=sa.text("active"),
    )


def downgrade() -> None:
    """Drop barcode_sequence table."""
    op.drop_index("uq_barcode_sequence_active_category", table_name="barcode_sequence")
    op.drop_table("barcode_sequence", if_exists=True)
