"""
RescueLink - Geospatial Utilities
Geolocation value type and distance calculations.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from rescuelink.core.exceptions import InvalidLocation

# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

LONGITUDE_RANGE = (-180.0, 180.0)
LATITUDE_RANGE = (-90.0, 90.0)


def _coerce_coordinate(name: str, value: Any, bounds: Tuple[float, float]) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidLocation(f"{name} is required")

    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidLocation(f"{name} is required")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidLocation(f"{name} must be a number, got {value!r}")

    if not math.isfinite(number):
        raise InvalidLocation(f"{name} must be finite")

    low, high = bounds
    if not low <= number <= high:
        raise InvalidLocation(f"{name} {number} outside [{low:g}, {high:g}]")

    return number


@dataclass(frozen=True)
class GeoLocation:
    """
    Validated geographic point.

    Coordinates are always exposed as [longitude, latitude], the order
    GeoJSON and PostGIS expect.
    """
    longitude: float
    latitude: float

    def __post_init__(self):
        object.__setattr__(
            self, "longitude", _coerce_coordinate("longitude", self.longitude, LONGITUDE_RANGE)
        )
        object.__setattr__(
            self, "latitude", _coerce_coordinate("latitude", self.latitude, LATITUDE_RANGE)
        )

    @classmethod
    def from_values(cls, longitude: Any, latitude: Any) -> "GeoLocation":
        """Build a location from raw request values (numbers or numeric strings)."""
        return cls(longitude=longitude, latitude=latitude)

    @property
    def coordinates(self) -> List[float]:
        return [self.longitude, self.latitude]

    def to_geojson(self) -> Dict[str, Any]:
        """GeoJSON Point representation."""
        return {"type": "Point", "coordinates": self.coordinates}

    def distance_km(self, other: "GeoLocation") -> float:
        return haversine_distance(self.latitude, self.longitude, other.latitude, other.longitude)


@dataclass
class BoundingBox:
    """Geographic bounding box."""
    west: float   # min longitude
    south: float  # min latitude
    east: float   # max longitude
    north: float  # max latitude

    @classmethod
    def from_values(cls, west: Any, south: Any, east: Any, north: Any) -> "BoundingBox":
        """Build a box from raw request values; corners are validated like any location."""
        south_west = GeoLocation.from_values(west, south)
        north_east = GeoLocation.from_values(east, north)
        if south_west.longitude > north_east.longitude or south_west.latitude > north_east.latitude:
            raise InvalidLocation("bounding box must satisfy west <= east and south <= north")
        return cls(
            west=south_west.longitude,
            south=south_west.latitude,
            east=north_east.longitude,
            north=north_east.latitude,
        )

    def contains(self, location: GeoLocation) -> bool:
        """Check if a location is within the bounding box."""
        return (
            self.west <= location.longitude <= self.east and
            self.south <= location.latitude <= self.north
        )


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate the great-circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates in decimal degrees
        lat2, lon2: Second point coordinates in decimal degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c
