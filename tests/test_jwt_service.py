import os
import sys

import jwt
import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from core.jwt_service import JWTService
from core.exceptions import AuthenticationError, ConfigurationError


@pytest.fixture
def jwt_service():
    """Create JWTService with deterministic secret."""
    return JWTService("a" * 32)


def test_generate_and_validate_token(jwt_service):
    token_data = jwt_service.generate_token(user_id="1", username="alice", role="admin")

    payload = jwt_service.validate_token(token_data["token"])

    assert payload["sub"] == "1"
    assert payload["username"] == "alice"
    assert payload["role"] == "admin"
    assert payload["jti"] == token_data["token_id"]
    assert token_data["expires_in"] == 24 * 3600


def test_invalid_and_expired_tokens(jwt_service):
    # invalid token string
    with pytest.raises(AuthenticationError):
        jwt_service.validate_token("invalid.token")

    # expired token
    jwt_service.token_expiry_hours = -1
    expired_token = jwt_service.generate_token("1", "bob", "user")["token"]
    with pytest.raises(AuthenticationError):
        jwt_service.validate_token(expired_token)


def test_token_signed_with_other_secret_is_rejected(jwt_service):
    other = JWTService("b" * 32).generate_token("1", "eve", "admin")["token"]

    with pytest.raises(AuthenticationError):
        jwt_service.validate_token(other)


def test_missing_claims_are_rejected(jwt_service):
    token = jwt.encode({"sub": "1"}, "a" * 32, algorithm="HS256")

    with pytest.raises(AuthenticationError):
        jwt_service.validate_token(token)


def test_revoked_token(jwt_service):
    token_data = jwt_service.generate_token("1", "alice", "admin")
    jwt_service.revoke_token(token_data["token_id"])

    assert jwt_service.is_token_revoked(token_data["token_id"])
    with pytest.raises(AuthenticationError):
        jwt_service.validate_token(token_data["token"])


def test_unsafe_payload_and_missing_secret(jwt_service):
    token = jwt_service.generate_token("1", "alice", "admin")["token"]

    assert jwt_service.get_token_payload_unsafe(token)["username"] == "alice"
    assert jwt_service.get_token_payload_unsafe("garbage") is None
    with pytest.raises(ConfigurationError):
        JWTService("")
