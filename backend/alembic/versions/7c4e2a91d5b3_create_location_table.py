"""create_location_table

Revision ID: 7c4e2a91d5b3
Revises: 3b1f0c2d9a10
Create Date: 2026-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "7c4e2a91d5b3"
down_revision: Union[str, Sequence[str], None] = "3b1f0c2d9a10"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create location table: building > room > cabinet > shelf via parent_id."""
    op.create_table(
        "location",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("parent_id", sa.String(length=36), nullable=True),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("barcode", sa.String(length=13), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=True),
        sa.Column("description", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["parent_id"], ["location.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("barcode"),
        sa.CheckConstraint(
            "type IN ('building', 'room', 'cabinet', 'shelf')",
            name="ck_location_type",
        ),
    )
    op.create_index("ix_location_parent_id", "location", ["parent_id"])
    op.create_index("ix_location_type", "location", ["type"])


def downgrade() -> None:
    """Drop location table."""
    op.drop_index("ix_location_type", table_name="location")
    op.drop_index("ix_location_parent_id", table_name="location")
    op.drop_table("location", if_exists=True)
