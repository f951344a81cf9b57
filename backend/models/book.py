"""Book model for DB persistence."""
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Book(Base):
    """Book table: id, barcode (issued), factory_barcode, title, year, description, location_id."""

    __tablename__ = "book"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    barcode: Mapped[str] = mapped_column(String(13), unique=True, nullable=False)
    # Barcode printed by the publisher; may collide with an issued one (unique constraint catches it).
    factory_barcode: Mapped[Optional[str]] = mapped_column(String(13), unique=True, nullable=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    location_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("location.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
