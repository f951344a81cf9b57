"""BarcodeSequence model: one counter row per (category, prefix), one active row per category."""
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, func, text
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class BarcodeSequence(Base):
    """barcode_sequence table: category, prefix, description, last_value, active, updated_at.

    Rotating a category to another prefix switches which row is active; the
    rows of earlier prefixes keep their last_value, so a prefix that is
    rotated back in resumes after its highest issued value.
    """

    __tablename__ = "barcode_sequence"
    __table_args__ = (
        Index(
            "uq_barcode_sequence_active_category",
            "category",
            unique=True,
            sqlite_where=text("active"),
            postgresql_where=text("active"),
        ),
    )

    category: Mapped[str] = mapped_column(String(16), primary_key=True)
    prefix: Mapped[int] = mapped_column(Integer, primary_key=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Only ever incremented; values consumed by failed creations are not reused.
    last_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
