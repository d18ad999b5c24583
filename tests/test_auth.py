"""
Tests for NGO identity extraction
"""
import pytest
from jose import jwt

from rescuelink.api.auth import create_access_token, decode_ngo_id, resolve_acting_ngo
from rescuelink.core.config import settings
from rescuelink.core.exceptions import AuthenticationError


class TestIdentity:
    """Test suite for bearer token handling."""

    def test_round_trip(self):
        token = create_access_token("ngo1")
        assert decode_ngo_id(f"Bearer {token}") == "ngo1"

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer garbage"])
    def test_bad_headers(self, header):
        with pytest.raises(AuthenticationError):
            decode_ngo_id(header)

    def test_expired_token(self):
        token = create_access_token("ngo1", expires_minutes=-5)
        with pytest.raises(AuthenticationError):
            decode_ngo_id(f"Bearer {token}")

    def test_wrong_secret(self):
        token = jwt.encode({"id": "ngo1"}, "some-other-secret", algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError):
            decode_ngo_id(f"Bearer {token}")

    def test_token_without_id(self):
        token = jwt.encode({"sub": "ngo1"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(AuthenticationError):
            decode_ngo_id(f"Bearer {token}")

    def test_resolves_name_from_directory(self, directory):
        ngo = resolve_acting_ngo(f"Bearer {create_access_token('ngo2')}", directory)
        assert ngo.name == "Street Tails Trust"

        with pytest.raises(AuthenticationError):
            resolve_acting_ngo(f"Bearer {create_access_token('ngo9')}", directory)
