from typing import Any, Callable, Optional

from core.logging_config import LoggerMixin
from core.normalization import unwrap_envelope
from data.models import DashboardSummary, Timeline
from service.query_cache import QueryCache

class DashboardService(LoggerMixin):
    """Summary counters and per-month timelines for the dashboard charts."""

    resource = "dashboard"

    def __init__(self, api: Any, cache: Optional[QueryCache] = None):
        self.api = api
        self.cache = cache if cache is not None else QueryCache()

    def _query(self, key, fetch: Callable[[], Any], build: Callable[[Any], Any],
               force: bool = False) -> Optional[Any]:
        if not force:
            cached = self.cache.get(key)
            if cached is not None:
                return cached
        try:
            # some deployments wrap the payload twice
            body = unwrap_envelope(fetch())
        except Exception as e:
            self.logger.error("Error fetching dashboard data", query=key[1],
                              error=str(e), error_type=type(e).__name__)
            return None
        result = build(body)
        self.cache.set(key, result)
        return result

    def summary(self, force: bool = False) -> Optional[DashboardSummary]:
        return self._query((self.resource, "summary"), self.api.summary,
                           DashboardSummary.from_api, force)

    def user_timeline(self, year: int, force: bool = False) -> Optional[Timeline]:
        return self._query((self.resource, "users", year),
                           lambda: self.api.user_summary(year),
                           lambda body: Timeline.from_api(body, year), force)

    def revenue_timeline(self, year: int, force: bool = False) -> Optional[Timeline]:
        return self._query((self.resource, "revenue", year),
                           lambda: self.api.revenue_summary(year),
                           lambda body: Timeline.from_api(body, year), force)

    def invalidate(self) -> None:
        self.cache.invalidate(self.resource)
