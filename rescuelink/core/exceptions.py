"""
RescueLink - Error taxonomy
"""


class RescueLinkError(Exception):
    """Base class for all RescueLink errors."""


class ValidationError(RescueLinkError):
    """Malformed input; nothing was persisted."""


class InvalidLocation(ValidationError):
    """Missing, non-numeric or out-of-range coordinates."""


class NotFound(RescueLinkError):
    """The requested record does not exist."""


class ClaimConflict(RescueLinkError):
    """Another NGO already claimed the report (exclusive claim mode only)."""


class AuthenticationError(RescueLinkError):
    """Caller credentials are missing, invalid or unknown."""


class StorageFailure(RescueLinkError):
    """Transient persistence error. Not retried by the core."""
