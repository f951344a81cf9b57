"""Location types and their parent/child ordering."""
from enum import Enum

from catalog_core.errors import InvalidLocationType


class LocationType(str, Enum):
    """Building > room > cabinet > shelf."""

    BUILDING = "building"
    ROOM = "room"
    CABINET = "cabinet"
    SHELF = "shelf"

    @property
    def level(self) -> int:
        return _LEVELS[self]

    def is_child_of(self, parent: "LocationType") -> bool:
        return self.level == parent.level + 1

    @property
    def child_type(self) -> "LocationType | None":
        """Type one level below, or None for a shelf."""
        return _BY_LEVEL.get(self.level + 1)


_LEVELS = {
    LocationType.BUILDING: 1,
    LocationType.ROOM: 2,
    LocationType.CABINET: 3,
    LocationType.SHELF: 4,
}
_BY_LEVEL = {level: t for t, level in _LEVELS.items()}


def parse_location_type(value: str) -> LocationType:
    """Parse boundary input into a LocationType. Raises InvalidLocationType."""
    try:
        return LocationType(value)
    except ValueError:
        raise InvalidLocationType(value=value) from None
