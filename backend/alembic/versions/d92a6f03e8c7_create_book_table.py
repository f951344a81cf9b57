"""create_book_table

Revision ID: d92a6f03e8c7
Revises: 7c4e2a91d5b3
Create Date: 2026-10-13

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "d92a6f03e8c7"
down_revision: Union[str, Sequence[str], None] = "7c4e2a91d5b3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create book table."""
    op.create_table(
        "book",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("barcode", sa.String(length=13), nullable=False),
        sa.Column("factory_barcode", sa.String(length=13), nullable=True),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("description", sa.String(length=2048), nullable=True),
        sa.Column("location_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["location_id"], ["location.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("barcode"),
        sa.UniqueConstraint("factory_barcode"),
    )
    op.create_index("ix_book_location_id", "book", ["location_id"])


def downgrade() -> None:
    """Drop book table."""
    op.drop_index("ix_book_location_id", table_name="book")
    op.drop_table("book", if_exists=True)
