"""
RescueLink - Core Utilities
Central configuration, errors and geospatial helpers.
"""

from rescuelink.core.config import settings, get_settings
from rescuelink.core.exceptions import (
    RescueLinkError,
    ValidationError,
    InvalidLocation,
    NotFound,
    ClaimConflict,
    AuthenticationError,
    StorageFailure,
)
from rescuelink.core.geo_utils import (
    GeoLocation,
    BoundingBox,
    haversine_distance,
)

__all__ = [
    "settings",
    "get_settings",
    "RescueLinkError",
    "ValidationError",
    "InvalidLocation",
    "NotFound",
    "ClaimConflict",
    "AuthenticationError",
    "StorageFailure",
    "GeoLocation",
    "BoundingBox",
    "haversine_distance",
]
