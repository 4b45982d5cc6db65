"""Unit tests for JWT token creation, decoding, and validation."""

from datetime import timedelta

import pytest
from jose import JWTError

from lodgedesk.auth.jwt import (
    ACCESS,
    REFRESH,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
)


class TestCreateAccessToken:
    """Test access token creation."""

    def test_claims(self):
        payload = decode_token(create_access_token("user-123", "frontdesk"))
        assert payload["type"] == ACCESS
        assert payload["sub"] == "user-123"
        assert payload["username"] == "frontdesk"
        assert "iat" in payload
        assert "exp" in payload

    def test_username_optional(self):
        payload = decode_token(create_access_token("user-123"))
        assert "username" not in payload

    def test_custom_expiry_delta(self):
        token = create_access_token("user-123", expires_delta=timedelta(hours=1))
        assert decode_token(token)["sub"] == "user-123"


class TestCreateRefreshToken:
    def test_contains_type_refresh(self):
        payload = decode_token(create_refresh_token("user-xyz"))
        assert payload["type"] == REFRESH
        assert payload["sub"] == "user-xyz"


class TestDecodeToken:
    """Test token decoding and validation."""

    def test_expected_type_matches(self):
        token = create_refresh_token("user-123")
        assert decode_token(token, expected_type=REFRESH)["sub"] == "user-123"

    def test_expected_type_mismatch_raises(self):
        token = create_refresh_token("user-123")
        with pytest.raises(JWTError):
            decode_token(token, expected_type=ACCESS)

    def test_decode_expired_token_raises(self):
        token = create_access_token("user-123", expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_decode_invalid_token_raises(self):
        with pytest.raises(JWTError):
            decode_token("not.a.valid.token")

    def test_decode_empty_string_raises(self):
        with pytest.raises(JWTError):
            decode_token("")


class TestCreateTokenPair:
    def test_pair(self):
        tokens = create_token_pair("user-123", "frontdesk")
        assert tokens["token_type"] == "bearer"
        assert decode_token(tokens["access_token"])["type"] == ACCESS
        assert decode_token(tokens["refresh_token"])["type"] == REFRESH
