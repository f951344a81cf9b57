"""Location repository: create, get, list, children check, update, delete."""
from typing import Optional

from sqlalchemy import exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_core.errors import BarcodeExists
from catalog_core.location_types import LocationType
from models.book import Book
from models.location import Location


def create_location(
    session: Session,
    *,
    type: LocationType,
    name: str,
    barcode: str,
    parent_id: Optional[str] = None,
    address: Optional[str] = None,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> Location:
    """Create a location, commit, and return it. Id is generated if not provided."""
    loc = Location(
        parent_id=parent_id,
        type=type.value,
        name=name,
        barcode=barcode,
        address=address,
        description=description,
    )
    if location_id is not None:
        loc.id = location_id
    session.add(loc)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if "barcode" in str(e.orig).lower():
            raise BarcodeExists(barcode=barcode) from e
        raise
    session.refresh(loc)
    return loc


def get_location(session: Session, location_id: str, for_update: bool = False) -> Optional[Location]:
    """Return a location by id or None. for_update locks the row until the transaction ends."""
    if not for_update:
        return session.get(Location, location_id)
    return session.execute(
        select(Location).where(Location.id == location_id).with_for_update()
    ).scalar_one_or_none()


def get_location_by_barcode(session: Session, barcode: str) -> Optional[Location]:
    """Return the location with this barcode or None."""
    return session.execute(
        select(Location).where(Location.barcode == barcode)
    ).scalar_one_or_none()


def list_locations_by_type(session: Session, location_type: LocationType) -> list[Location]:
    """Return all locations of a type, ordered by name."""
    result = session.execute(
        select(Location).where(Location.type == location_type.value).order_by(Location.name)
    )
    return list(result.scalars().all())


def list_children(
    session: Session,
    parent_id: str,
    location_type: Optional[LocationType] = None,
) -> list[Location]:
    """Return the direct children of a location, optionally of one type."""
    stmt = select(Location).where(Location.parent_id == parent_id)
    if location_type is not None:
        stmt = stmt.where(Location.type == location_type.value)
    result = session.execute(stmt.order_by(Location.name))
    return list(result.scalars().all())


def has_children(session: Session, location_id: str) -> bool:
    """True if any location or book references this location."""
    stmt = select(
        or_(
            exists().where(Location.parent_id == location_id),
            exists().where(Book.location_id == location_id),
        )
    )
    return bool(session.execute(stmt).scalar())


def count_locations(session: Session) -> int:
    """Return the number of locations."""
    result = session.execute(select(func.count()).select_from(Location))
    return result.scalar() or 0


def update_location(
    session: Session,
    location: Location,
    *,
    parent_id: Optional[str] = None,
    name: Optional[str] = None,
    address: Optional[str] = None,
    description: Optional[str] = None,
) -> Location:
    """Apply the given (already validated) fields, commit, and return the location."""
    if parent_id is not None:
        location.parent_id = parent_id
    if name is not None:
        location.name = name
    if address is not None:
        location.address = address
    if description is not None:
        location.description = description
    location.updated_at = func.now()
    session.commit()
    session.refresh(location)
    return location


def delete_location(session: Session, location_id: str) -> bool:
    """Delete a location by id. Returns True if deleted, False if not found."""
    loc = get_location(session, location_id)
    if loc is None:
        return False
    session.delete(loc)
    session.commit()
    return True
