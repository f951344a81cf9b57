"""Location model for DB persistence."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Location(Base):
    """Location table: id, parent_id, type, name, barcode, address, description, timestamps."""

    __tablename__ = "location"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    # RESTRICT: a location with children can never be removed underneath them.
    parent_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("location.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    barcode: Mapped[str] = mapped_column(String(13), unique=True, nullable=False)
    # Required for buildings only; enforced by the hierarchy validator.
    address: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("type IN ('building', 'room', 'cabinet', 'shelf')", name="type"),
    )
