"""
Shared query/mutation behaviour of the resource services.

List queries never raise: failures are logged and turned into an empty
page. Mutations raise, so callers can show the error and keep their form
open; on success they invalidate the resource's cached lists.
"""

from typing import Any, Dict, Optional, Type

from core.exceptions import NotFoundError
from core.logging_config import LoggerMixin, log_function_call
from core.normalization import empty_list, normalize_list, unwrap_entity
from core.types import ListResult
from service.query_cache import QueryCache

ACTIVE_VALUES = ("1", "active")

class QueryService(LoggerMixin):
    resource = ""
    model: Optional[Type[Any]] = None

    def __init__(self, api: Any, cache: Optional[QueryCache] = None):
        self.api = api
        self.cache = cache if cache is not None else QueryCache()

    def list(self, keyword: Optional[str] = None, page: Optional[int] = None,
             limit: Optional[int] = None, force: bool = False) -> ListResult:
        key = (self.resource, keyword or None, page, limit)
        if not force:
            cached = self.cache.get(key)
            if cached is not None:
                return cached

        try:
            body = self.api.list(keyword=keyword or None, page=page, limit=limit)
            result = normalize_list(body, page, limit,
                                    mapper=self.model.from_api if self.model else None)
        except Exception as e:
            self.logger.error(f"Error fetching {self.resource} data",
                              error=str(e), error_type=type(e).__name__)
            return empty_list(page, limit)

        self.cache.set(key, result)
        return result

    def invalidate(self) -> None:
        self.cache.invalidate(self.resource)

    def _to_model(self, body: Any) -> Optional[Any]:
        entity = unwrap_entity(body)
        if entity is None:
            return None
        return self.model.from_api(entity) if self.model else entity

class MutableService(QueryService):
    """Create/read/update/delete on a REST resource."""

    def detail(self, entity_id: str) -> Any:
        entity = self._to_model(self.api.detail(entity_id))
        if entity is None:
            raise NotFoundError(self.resource, entity_id)
        return entity

    @log_function_call
    def create(self, data: Dict[str, Any]) -> Optional[Any]:
        body = self.api.create(data)
        self.invalidate()
        return self._to_model(body)

    @log_function_call
    def update(self, entity_id: str, data: Dict[str, Any]) -> Optional[Any]:
        body = self.api.update(entity_id, data)
        self.invalidate()
        return self._to_model(body)

    @log_function_call
    def delete(self, entity_id: str) -> None:
        self.api.delete(entity_id)
        self.invalidate()

def is_active_value(value: Any) -> bool:
    return str(value).lower() in ACTIVE_VALUES

class ToggleableService(MutableService):
    """Products with a 0/1 status switched through dedicated endpoints."""

    @log_function_call
    def activate(self, entity_id: str) -> None:
        self.api.active(entity_id)
        self.invalidate()

    @log_function_call
    def pause(self, entity_id: str) -> None:
        self.api.pause(entity_id)
        self.invalidate()

    def change_status(self, entity_id: str, current_status: Any, target_status: Any) -> bool:
        """
        Dispatch activate or pause for a status select.

        Returns False without calling the API when the target equals the
        current status.
        """
        if is_active_value(current_status) == is_active_value(target_status):
            return False
        if is_active_value(target_status):
            self.activate(entity_id)
        else:
            self.pause(entity_id)
        return True
