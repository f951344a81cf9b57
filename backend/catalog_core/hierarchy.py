"""Location hierarchy validation for create, reparent and delete.

These functions are decision points only. They read through the lookups they
are given and never write, so the caller must run the lookups and the
following insert/update/delete in one transaction (see api/locations.py,
which locks the rows it reads with SELECT ... FOR UPDATE).

Levels are strict (a child is exactly one level below its parent), so a
location can never become its own ancestor and no cycle check is needed.
"""
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from catalog_core.deadline import Deadline, check_deadline
from catalog_core.errors import (
    InvalidLocationType,
    LocationCannotHaveParent,
    LocationHasChildren,
    ParentNotFound,
    ValidationError,
)
from catalog_core.location_types import LocationType, parse_location_type

# id -> object with a ``type`` attribute (LocationType or its string value), or None
ParentLookup = Callable[[str], Optional[Any]]
# id -> True if any row depends on the location
ChildrenLookup = Callable[[str], bool]


@dataclass
class LocationCandidate:
    """The hierarchy-relevant fields of a location about to be written."""

    type: LocationType
    parent_id: Optional[str] = None
    address: Optional[str] = None
    id: Optional[str] = None


def _type_of(location: Any) -> LocationType:
    return parse_location_type(location.type)


def _check_parent(
    child_type: LocationType,
    parent_id: Optional[str],
    parent_lookup: ParentLookup,
    deadline: Optional[Deadline],
) -> None:
    if parent_id is None:
        raise ParentNotFound(f"parent_id is required for a {child_type.value}", type=child_type.value)
    check_deadline(deadline, "parent lookup")
    parent = parent_lookup(parent_id)
    if parent is None:
        raise ParentNotFound(parent_id=parent_id)
    parent_type = _type_of(parent)
    if not child_type.is_child_of(parent_type):
        raise InvalidLocationType(
            f"a {child_type.value} cannot be placed in a {parent_type.value}",
            type=child_type.value,
            parent_type=parent_type.value,
        )


def validate_create(
    candidate: LocationCandidate,
    parent_lookup: ParentLookup,
    deadline: Optional[Deadline] = None,
) -> None:
    """Accept or reject a new location. Raises a CatalogError subclass on rejection."""
    if candidate.type is LocationType.BUILDING:
        if candidate.parent_id is not None:
            raise LocationCannotHaveParent(type=candidate.type.value, parent_id=candidate.parent_id)
        if candidate.address is None or not candidate.address.strip():
            raise ValidationError("address is required for a building")
        return
    _check_parent(candidate.type, candidate.parent_id, parent_lookup, deadline)


def validate_reparent(
    location: Any,
    new_parent_id: Optional[str],
    parent_lookup: ParentLookup,
    deadline: Optional[Deadline] = None,
) -> None:
    """Accept or reject moving an existing location under new_parent_id."""
    location_type = _type_of(location)
    if location_type is LocationType.BUILDING:
        # Even new_parent_id=None is refused: a building has nothing to re-parent.
        raise LocationCannotHaveParent(type=location_type.value, parent_id=new_parent_id)
    _check_parent(location_type, new_parent_id, parent_lookup, deadline)


def validate_delete(
    location: Any,
    children_lookup: ChildrenLookup,
    deadline: Optional[Deadline] = None,
) -> None:
    """Reject deleting a location that still has dependent rows."""
    check_deadline(deadline, "children lookup")
    if children_lookup(location.id):
        raise LocationHasChildren(location_id=location.id)
