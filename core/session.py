"""
Admin session state backed by a key-value store.

The store holds four keys (user, isAuthenticated, authToken, refreshToken);
AuthSession reads them once at init and is the only writer afterwards.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from config.constants import StorageKeys
from core.exceptions import StorageError
from core.logging_config import LoggerMixin

class KeyValueStore(ABC):
    """Minimal string key-value persistence."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

class JsonFileStore(KeyValueStore):
    """Store persisted as one JSON object on disk."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read session file {self.path}: {e}")
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, str]) -> None:
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write session file {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

class AuthSession(LoggerMixin):
    """Process-wide admin session with explicit init/login/logout lifecycle."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.user: Optional[Dict[str, Any]] = None
        self.is_authenticated = False
        self.is_loading = True

    def init(self) -> 'AuthSession':
        """Restore state from the store; a corrupt user record clears the session."""
        stored_auth = self.store.get(StorageKeys.IS_AUTHENTICATED)
        stored_user = self.store.get(StorageKeys.USER)
        stored_token = self.store.get(StorageKeys.AUTH_TOKEN)

        if stored_auth == "true" and stored_user and stored_token:
            try:
                user = json.loads(stored_user)
                if not isinstance(user, dict):
                    raise ValueError("user record is not an object")
                self.user = user
                self.is_authenticated = True
            except ValueError as e:
                self.logger.error("Failed to parse stored user", error=str(e))
                self._clear_store()

        self.is_loading = False
        return self

    @property
    def auth_token(self) -> Optional[str]:
        return self.store.get(StorageKeys.AUTH_TOKEN)

    @property
    def refresh_token(self) -> Optional[str]:
        return self.store.get(StorageKeys.REFRESH_TOKEN)

    def store_tokens(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        self.store.set(StorageKeys.AUTH_TOKEN, access_token)
        if refresh_token:
            self.store.set(StorageKeys.REFRESH_TOKEN, refresh_token)

    def login(self, user: Dict[str, Any]) -> None:
        self.store.set(StorageKeys.USER, json.dumps(user))
        self.store.set(StorageKeys.IS_AUTHENTICATED, "true")
        self.user = user
        self.is_authenticated = True
        self.logger.info("Admin logged in", username=user.get("username"))

    def logout(self) -> None:
        self._clear_store()
        self.user = None
        self.is_authenticated = False
        self.logger.info("Admin logged out")

    def _clear_store(self) -> None:
        for key in StorageKeys.ALL:
            self.store.remove(key)
