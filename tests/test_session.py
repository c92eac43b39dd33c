import json
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.constants import StorageKeys
from core.exceptions import StorageError
from core.session import AuthSession, JsonFileStore, MemoryStore


def _logged_in_store():
    return MemoryStore({
        StorageKeys.USER: json.dumps({"username": "admin", "role": "admin"}),
        StorageKeys.IS_AUTHENTICATED: "true",
        StorageKeys.AUTH_TOKEN: "access",
        StorageKeys.REFRESH_TOKEN: "refresh",
    })


def test_init_restores_stored_session():
    session = AuthSession(_logged_in_store()).init()

    assert session.is_authenticated
    assert session.user == {"username": "admin", "role": "admin"}
    assert session.auth_token == "access"
    assert not session.is_loading


def test_init_with_corrupt_user_clears_all_keys():
    store = _logged_in_store()
    store.set(StorageKeys.USER, "{not json")

    session = AuthSession(store).init()

    assert not session.is_authenticated
    assert session.user is None
    for key in StorageKeys.ALL:
        assert store.get(key) is None


def test_logout_removes_the_four_keys():
    store = _logged_in_store()
    session = AuthSession(store).init()

    session.logout()

    assert not session.is_authenticated
    assert all(store.get(key) is None for key in StorageKeys.ALL)


def test_login_persists_user_and_tokens():
    store = MemoryStore()
    session = AuthSession(store).init()

    session.store_tokens("a", "r")
    session.login({"username": "demo"})

    assert store.get(StorageKeys.IS_AUTHENTICATED) == "true"
    assert json.loads(store.get(StorageKeys.USER)) == {"username": "demo"}
    assert session.refresh_token == "r"

    restored = AuthSession(store).init()
    assert restored.is_authenticated


def test_json_file_store_round_trip(tmp_path):
    path = str(tmp_path / "nested" / "session.json")
    store = JsonFileStore(path)

    store.set("authToken", "abc")
    assert JsonFileStore(path).get("authToken") == "abc"

    store.remove("authToken")
    assert store.get("authToken") is None


def test_json_file_store_rejects_garbage(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("not json")

    with pytest.raises(StorageError):
        JsonFileStore(str(path)).get("user")
