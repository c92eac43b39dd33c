import threading
from typing import Any, Dict, Hashable, Optional, Tuple

CacheKey = Tuple[Hashable, ...]

class QueryCache:
    """
    Results of read queries keyed by (resource, *params).
    Mutations call invalidate(resource) so the next read refetches.
    """

    def __init__(self):
        self._entries: Dict[CacheKey, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: CacheKey, value: Any) -> None:
        with self._lock:
            self._entries[key] = value

    def invalidate(self, resource: Hashable) -> int:
        with self._lock:
            stale = [key for key in self._entries if key and key[0] == resource]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
