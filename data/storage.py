"""
JSON-fixture storage behind the mock server.

The fixture is loaded once; mutations stay in memory unless the storage
was created with persist=True, in which case they are written back.
"""

import copy
import json
import os
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import bcrypt

from config.constants import MOCK_CREDENTIALS
from core.exceptions import StorageError, ValidationError

COLLECTIONS = ("users", "tools", "vps", "proxies")
USER_FIELDS = ("username", "email", "phone", "role", "status", "accountBalance")

def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

class MockStorage:
    """
    In-memory view of the fixture with the user operations the mock API exposes.
    """

    def __init__(self, path: str, persist: bool = False, bcrypt_rounds: int = 12) -> None:
        self.path = path
        self.persist = persist
        self._lock = threading.RLock()
        self._data = self._load()
        self._password_hashes = {
            username: bcrypt.hashpw(password.encode('utf-8'),
                                    bcrypt.gensalt(rounds=bcrypt_rounds)).decode('utf-8')
            for username, password in MOCK_CREDENTIALS.items()
        }

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except FileNotFoundError:
            raise StorageError(f"Mock data file not found: {self.path}")
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read mock data {self.path}: {e}")
        if not isinstance(raw, dict):
            raise StorageError(f"Mock data {self.path} is not a JSON object")
        return {name: list(raw.get(name) or []) for name in COLLECTIONS}

    def _save(self) -> None:
        if not self.persist:
            return
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write mock data {self.path}: {e}")

    def verify_credentials(self, login: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the user whose username (or email) and demo password match."""
        user = self.get_user_by_username(login) or self.get_user_by_email(login)
        if not user:
            return None
        password_hash = self._password_hashes.get(user['username'])
        if not password_hash or not password:
            return None
        if not bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8')):
            return None
        return user

    def get_all_users(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._data['users'])

    def get_non_admin_users(self) -> List[Dict[str, Any]]:
        return [user for user in self.get_all_users() if user.get('role') != 'admin']

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        for user in self.get_all_users():
            if user.get('id') == user_id:
                return user
        return None

    def get_user_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        for user in self.get_all_users():
            if user.get('username') == username:
                return user
        return None

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        for user in self.get_all_users():
            if user.get('email') and user.get('email') == email:
                return user
        return None

    @staticmethod
    def _validate_user(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        cleaned = {key: data[key] for key in USER_FIELDS if key in data}
        if not partial or 'username' in cleaned:
            if not str(cleaned.get('username') or '').strip():
                raise ValidationError("username is required", field='username')
        if not partial or 'email' in cleaned:
            if '@' not in str(cleaned.get('email') or ''):
                raise ValidationError("email must be a valid address", field='email')
        for key in ('role', 'status'):
            if key in cleaned and not isinstance(cleaned[key], str):
                raise ValidationError(f"{key} must be a string", field=key)
        return cleaned

    @staticmethod
    def _next_id(records: List[Dict[str, Any]]) -> str:
        """One past the highest numeric id, so it never collides with a live record."""
        numeric = [int(r["id"]) for r in records if str(r.get("id", "")).isdigit()]
        return str(max(numeric, default=0) + 1)

    def create_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        cleaned = self._validate_user(data)
        with self._lock:
            users = self._data['users']
            new_user = {
                'id': self._next_id(users),
                'username': cleaned['username'],
                'email': cleaned['email'],
                'phone': cleaned.get('phone'),
                'role': cleaned.get('role') or 'user',
                'status': cleaned.get('status') or 'active',
                'createdAt': _now(),
                'lastLogin': None,
            }
            users.append(new_user)
            self._save()
            return copy.deepcopy(new_user)

    def update_user(self, user_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        cleaned = self._validate_user(data, partial=True)
        with self._lock:
            for index, user in enumerate(self._data['users']):
                if user.get('id') == user_id:
                    updated = dict(user)
                    updated.update(cleaned)
                    self._data['users'][index] = updated
                    self._save()
                    return copy.deepcopy(updated)
        return None

    def delete_user(self, user_id: str) -> bool:
        with self._lock:
            users = self._data['users']
            remaining = [user for user in users if user.get('id') != user_id]
            if len(remaining) == len(users):
                return False
            self._data['users'] = remaining
            self._save()
            return True

    def get_all(self, collection: str) -> List[Dict[str, Any]]:
        if collection not in COLLECTIONS:
            raise KeyError(collection)
        with self._lock:
            return copy.deepcopy(self._data[collection])

    def get_all_tools(self) -> List[Dict[str, Any]]:
        return self.get_all('tools')

    def get_all_vps(self) -> List[Dict[str, Any]]:
        return self.get_all('vps')

    def get_all_proxies(self) -> List[Dict[str, Any]]:
        return self.get_all('proxies')
