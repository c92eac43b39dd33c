import os
import sys
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.constants import Messages, StorageKeys
from core.exceptions import ApiError, AuthenticationError, NetworkError, ValidationError
from core.session import AuthSession, MemoryStore
from service.auth_service import AuthService
from service.query_cache import QueryCache


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def auth(store):
    api = Mock()
    return AuthService(api, AuthSession(store).init(), QueryCache())


def test_login_with_api_envelope(auth, store):
    auth.api.login.return_value = {"data": {"accessToken": "acc", "refreshToken": "ref",
                                            "user": {"username": "admin", "role": "admin"}}}

    user = auth.login("admin@shop", "admin123")

    assert user == {"username": "admin", "role": "admin"}
    assert store.get(StorageKeys.AUTH_TOKEN) == "acc"
    assert store.get(StorageKeys.REFRESH_TOKEN) == "ref"
    assert auth.session.is_authenticated


def test_login_with_mock_server_shape(auth, store):
    auth.api.login.return_value = {"token": "jwt", "user": {"id": "1", "username": "admin"},
                                   "message": "Login successful"}

    auth.login("admin", "admin123")

    assert store.get(StorageKeys.AUTH_TOKEN) == "jwt"
    assert store.get(StorageKeys.REFRESH_TOKEN) is None


def test_login_rejected_maps_to_invalid_credentials(auth):
    auth.api.login.side_effect = ApiError(401, {"message": "Unauthorized"})

    with pytest.raises(AuthenticationError) as exc_info:
        auth.login("admin", "wrong")

    assert exc_info.value.message == Messages.INVALID_CREDENTIALS
    assert not auth.session.is_authenticated


def test_login_network_failure_propagates(auth):
    auth.api.login.side_effect = NetworkError("down")

    with pytest.raises(NetworkError):
        auth.login("admin", "admin123")


def test_login_requires_both_fields(auth):
    with pytest.raises(ValidationError):
        auth.login("", "pw")
    auth.api.login.assert_not_called()


def test_logout_clears_session_and_cache(auth, store):
    auth.api.login.return_value = {"token": "jwt", "user": {"username": "admin"}}
    auth.login("admin", "admin123")
    auth.cache.set(("users", None, 1, 10), "cached")

    auth.logout()

    assert all(store.get(key) is None for key in StorageKeys.ALL)
    assert len(auth.cache) == 0


def test_change_password_checks_confirmation(auth):
    with pytest.raises(ValidationError) as exc_info:
        auth.change_password("old", "new1", "new2")

    assert exc_info.value.message == Messages.PASSWORD_MISMATCH
    auth.api.change_password.assert_not_called()

    auth.change_password("old", "new1", "new1")
    auth.api.change_password.assert_called_once_with("old", "new1")


def test_update_profile_merges_into_session(auth):
    auth.session.login({"username": "admin", "email": "old@x"})
    auth.api.update_me.return_value = {"data": {"email": "new@x"}}

    merged = auth.update_profile({"email": "new@x"})

    assert merged == {"username": "admin", "email": "new@x"}
    assert auth.session.user["email"] == "new@x"
