"""Location models.

A saved location is identified by an opaque id. Two locations with the same
name and coordinates are still different locations unless their ids match.
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """A latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class Location(BaseModel):
    """A user-selected location."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    latitude: float
    longitude: float

    def __eq__(self, other: object) -> bool:
        """Compare locations by id only."""
        if not isinstance(other, Location):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash by id, consistent with equality."""
        return hash(self.id)

    @property
    def coordinates(self) -> Coordinates:
        """Coordinates of this location."""
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class PlaceMatch(BaseModel):
    """Forward geocoding result."""

    model_config = ConfigDict(frozen=True)

    place_name: str
    latitude: float
    longitude: float

    def to_location(self) -> Location:
        """Create a new saved-location candidate with a fresh id."""
        return Location(name=self.place_name, latitude=self.latitude, longitude=self.longitude)


class ReversePlace(BaseModel):
    """Reverse geocoding result."""

    model_config = ConfigDict(frozen=True)

    place_name: str
    timezone_id: str
