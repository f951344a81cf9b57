"""Pydantic schemas for location API."""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class LocationCreate(BaseModel):
    """Payload for creating a location. type is parsed into a LocationType by the route."""

    type: str
    name: str
    parent_id: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class LocationUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    parent_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None


class LocationResponse(BaseModel):
    """Location in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: Optional[str] = None
    type: str
    name: str
    barcode: str
    address: Optional[str] = None
    description: Optional[str] = None
