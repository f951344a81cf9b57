"""Pydantic schemas for barcode validation and sequence administration."""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BarcodeValidation(BaseModel):
    """Result of GET /barcodes/validate/{code}."""

    barcode: str
    valid: bool


class SequenceUpdate(BaseModel):
    """Payload for setting a category's barcode prefix."""

    prefix: int
    description: Optional[str] = None


class SequenceResponse(BaseModel):
    """Barcode counter row."""

    model_config = ConfigDict(from_attributes=True)

    category: str
    prefix: int
    description: Optional[str] = None
    last_value: int
    active: bool
