"""
NGO identity extraction

Tokens are issued by the NGO signup/login service. RescueLink only
decodes them and resolves the NGO through the directory.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from rescuelink.core.config import settings
from rescuelink.core.exceptions import AuthenticationError, NotFound
from rescuelink.ngos.directory import Ngo, NgoDirectory


def create_access_token(ngo_id: str, expires_minutes: Optional[int] = None) -> str:
    """Issue a bearer token for an NGO (used by the login service and tests)."""
    now = datetime.now(timezone.utc)
    payload = {
        "id": ngo_id,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes or settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_ngo_id(authorization: Optional[str]) -> str:
    """Extract the NGO id from an `Authorization: Bearer <token>` header value."""
    if not authorization:
        raise AuthenticationError("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Invalid auth scheme")

    try:
        data = jwt.decode(token.strip(), settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    ngo_id = data.get("id")
    if not ngo_id:
        raise AuthenticationError("Token carries no NGO id")
    return str(ngo_id)


def resolve_acting_ngo(authorization: Optional[str], directory: NgoDirectory) -> Ngo:
    ngo_id = decode_ngo_id(authorization)
    try:
        return directory.get(ngo_id)
    except NotFound:
        raise AuthenticationError(f"Unknown NGO {ngo_id}")
