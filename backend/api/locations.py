"""Location API routes.

Each mutating route reads the rows the hierarchy check depends on with
SELECT ... FOR UPDATE and writes in the same session, so the check and the
write form one transaction. Barcode issuance commits its counter increment
first; a request that fails afterwards leaves a gap in the sequence.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from catalog_core import barcode as barcode_codec
from catalog_core.barcode import BarcodeCategory
from catalog_core.barcode_image import PNG_MEDIA_TYPE, render_png
from catalog_core.deadline import Deadline
from catalog_core.errors import (
    BarcodeExists,
    InvalidBarcode,
    InvalidLocationType,
    NotFound,
    ParentNotFound,
    ValidationError,
)
from catalog_core.hierarchy import LocationCandidate, validate_create, validate_delete, validate_reparent
from catalog_core.issuer import BarcodeIssuer
from catalog_core.location_types import parse_location_type
from catalog_core.sequence_store import SqlSequenceStore
from db import get_db
from repositories.location_repository import (
    create_location as repo_create_location,
    delete_location as repo_delete_location,
    get_location,
    get_location_by_barcode,
    has_children,
    list_children,
    list_locations_by_type,
    update_location as repo_update_location,
)
from schemas.locations import LocationCreate, LocationResponse, LocationUpdate
from utils import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["locations"])


def _required(value: Optional[str], field: str) -> str:
    """Return value stripped; blank or missing raises ValidationError."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _not_blank(value: Optional[str], field: str) -> Optional[str]:
    """None passes through (field not being updated); blank raises ValidationError."""
    if value is None:
        return None
    return _required(value, field)


def _get_or_404(db: Session, location_id: str, for_update: bool = False):
    loc = get_location(db, location_id, for_update=for_update)
    if loc is None:
        raise NotFound("location not found", location_id=location_id)
    return loc


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(body: LocationCreate, db: Session = Depends(get_db)) -> LocationResponse:
    """Create a location: validate against the hierarchy, issue a barcode, insert."""
    deadline = Deadline.after(config.REQUEST_DEADLINE_S)
    location_type = parse_location_type(body.type)
    name = _required(body.name, "name")
    candidate = LocationCandidate(
        type=location_type,
        parent_id=body.parent_id,
        address=body.address.strip() if body.address else body.address,
    )
    # Reject bad input before consuming a sequence value.
    validate_create(candidate, lambda pid: get_location(db, pid), deadline)

    code = BarcodeIssuer(SqlSequenceStore(db)).issue(BarcodeCategory.LOCATION, deadline)
    if get_location_by_barcode(db, code) is not None:
        raise BarcodeExists(barcode=code)

    # Issuance committed; re-check under lock in the transaction that inserts.
    validate_create(candidate, lambda pid: get_location(db, pid, for_update=True), deadline)
    loc = repo_create_location(
        db,
        type=location_type,
        name=name,
        barcode=code,
        parent_id=candidate.parent_id,
        address=candidate.address,
        description=body.description,
    )
    logger.info("Created %s %s (%s)", loc.type, loc.id, loc.barcode)
    return LocationResponse.model_validate(loc)


@router.get("/type/{location_type}", response_model=list[LocationResponse])
def list_by_type(location_type: str, db: Session = Depends(get_db)) -> list[LocationResponse]:
    """List all locations of a type."""
    loc_type = parse_location_type(location_type)
    return [LocationResponse.model_validate(loc) for loc in list_locations_by_type(db, loc_type)]


@router.get("/barcode/{code}", response_model=LocationResponse)
def get_by_barcode(code: str, db: Session = Depends(get_db)) -> LocationResponse:
    """Look up a location by its barcode."""
    code = code.strip()
    if not barcode_codec.validate(code):
        raise InvalidBarcode(barcode=code)
    loc = get_location_by_barcode(db, code)
    if loc is None:
        raise NotFound("location not found", barcode=code)
    return LocationResponse.model_validate(loc)


@router.get("/{location_id}", response_model=LocationResponse)
def get_location_by_id(location_id: str, db: Session = Depends(get_db)) -> LocationResponse:
    """Get a location by id."""
    return LocationResponse.model_validate(_get_or_404(db, location_id))


@router.get("/{location_id}/children", response_model=list[LocationResponse])
def get_children(
    location_id: str,
    type: Optional[str] = None,
    db: Session = Depends(get_db),
) -> list[LocationResponse]:
    """List direct children; a requested type must be the parent's child type."""
    parent = get_location(db, location_id)
    if parent is None:
        raise ParentNotFound("parent location not found", parent_id=location_id)
    parent_type = parse_location_type(parent.type)
    requested = parse_location_type(type) if type is not None else None
    if requested is not None and requested is not parent_type.child_type:
        raise InvalidLocationType(
            f"a {parent_type.value} cannot contain a {requested.value}",
            type=requested.value,
            parent_type=parent_type.value,
        )
    return [LocationResponse.model_validate(loc) for loc in list_children(db, location_id, requested)]


@router.get(
    "/{location_id}/barcode",
    response_class=Response,
    responses={200: {"content": {PNG_MEDIA_TYPE: {}}}},
)
def get_location_barcode(location_id: str, db: Session = Depends(get_db)) -> Response:
    """PNG label of the location's barcode."""
    loc = _get_or_404(db, location_id)
    return Response(content=render_png(loc.barcode), media_type=PNG_MEDIA_TYPE)


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: str,
    body: LocationUpdate,
    db: Session = Depends(get_db),
) -> LocationResponse:
    """Rename, re-describe or re-parent a location."""
    deadline = Deadline.after(config.REQUEST_DEADLINE_S)
    loc = _get_or_404(db, location_id, for_update=True)
    if body.parent_id is not None:
        validate_reparent(loc, body.parent_id, lambda pid: get_location(db, pid, for_update=True), deadline)
    loc = repo_update_location(
        db,
        loc,
        parent_id=body.parent_id,
        name=_not_blank(body.name, "name"),
        address=_not_blank(body.address, "address"),
        description=_not_blank(body.description, "description"),
    )
    return LocationResponse.model_validate(loc)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(location_id: str, db: Session = Depends(get_db)) -> None:
    """Delete a location that has no child locations and no books."""
    deadline = Deadline.after(config.REQUEST_DEADLINE_S)
    loc = _get_or_404(db, location_id, for_update=True)
    loc_type = loc.type
    validate_delete(loc, lambda lid: has_children(db, lid), deadline)
    if not repo_delete_location(db, location_id):
        raise NotFound("location not found", location_id=location_id)
    logger.info("Deleted %s %s", loc_type, location_id)
