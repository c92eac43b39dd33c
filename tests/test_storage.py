import json
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from core.exceptions import StorageError, ValidationError
from data.storage import MockStorage

FIXTURE = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "data", "mock_data.json"))


@pytest.fixture
def storage():
    return MockStorage(FIXTURE, bcrypt_rounds=4)


def test_verify_demo_credentials(storage):
    assert storage.verify_credentials("admin", "admin123")["role"] == "admin"
    assert storage.verify_credentials("user@shopnro.local", "user123")["username"] == "user"
    assert storage.verify_credentials("admin", "wrong") is None
    assert storage.verify_credentials("nguyenvana", "anything") is None
    assert storage.verify_credentials("ghost", "demo") is None


def test_non_admin_users(storage):
    users = storage.get_non_admin_users()

    assert users
    assert all(user["role"] != "admin" for user in users)


def test_create_user_assigns_id_and_defaults(storage):
    count = len(storage.get_all_users())

    user = storage.create_user({"username": "bob", "email": "bob@x.com"})

    assert user["id"] == str(count + 1)
    assert user["role"] == "user"
    assert user["status"] == "active"
    assert user["lastLogin"] is None
    assert storage.get_user(user["id"])["username"] == "bob"


@pytest.mark.parametrize("data", [
    {"email": "bob@x.com"},
    {"username": "bob", "email": "not-an-email"},
    {"username": "bob", "email": "bob@x.com", "role": 0},
])
def test_create_user_validation(storage, data):
    with pytest.raises(ValidationError):
        storage.create_user(data)


def test_update_and_delete(storage):
    updated = storage.update_user("2", {"phone": "0999"})
    assert updated["phone"] == "0999"
    assert storage.update_user("404", {"phone": "1"}) is None

    assert storage.delete_user("2") is True
    assert storage.get_user("2") is None
    assert storage.delete_user("2") is False


def test_create_after_delete_gets_a_unique_id(storage):
    storage.delete_user("1")

    new = storage.create_user({"username": "carol", "email": "carol@x.com"})

    ids = [user["id"] for user in storage.get_all_users()]
    assert ids.count(new["id"]) == 1
    assert storage.get_user(new["id"])["username"] == "carol"


def test_returned_records_are_copies(storage):
    storage.get_all_users()[0]["username"] = "changed"

    assert storage.get_all_users()[0]["username"] != "changed"


def test_catalog_collections(storage):
    assert storage.get_all_tools()
    assert storage.get_all_vps()
    assert storage.get_all_proxies()
    with pytest.raises(KeyError):
        storage.get_all("orders")


def test_persist_writes_back(tmp_path):
    path = tmp_path / "mock.json"
    path.write_text(json.dumps({"users": [], "tools": [], "vps": [], "proxies": []}))
    storage = MockStorage(str(path), persist=True, bcrypt_rounds=4)

    storage.create_user({"username": "bob", "email": "bob@x.com"})

    assert json.loads(path.read_text())["users"][0]["username"] == "bob"


def test_missing_or_invalid_fixture(tmp_path):
    with pytest.raises(StorageError):
        MockStorage(str(tmp_path / "missing.json"), bcrypt_rounds=4)

    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]")
    with pytest.raises(StorageError):
        MockStorage(str(bad), bcrypt_rounds=4)
