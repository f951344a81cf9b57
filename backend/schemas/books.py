"""Pydantic schemas for book API."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BookCreate(BaseModel):
    """Payload for creating a book. The library barcode is always issued, never supplied."""

    title: str = Field(min_length=1)
    factory_barcode: Optional[str] = None
    year: Optional[int] = None
    description: Optional[str] = None
    location_id: Optional[str] = None


class BookResponse(BaseModel):
    """Book in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    barcode: str
    factory_barcode: Optional[str] = None
    title: str
    year: Optional[int] = None
    description: Optional[str] = None
    location_id: Optional[str] = None
