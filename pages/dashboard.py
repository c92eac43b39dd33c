from datetime import date
from typing import Any, List, Optional, Tuple

from data.models import Timeline
from pages.base_page import Page
from ui.formatting import format_vnd
from ui.notifications import Notifier

MISSING = "-"

class DashboardPage(Page):
    path = "/"
    title = "Dashboard"
    description = "Tổng quan hệ thống quản lý"

    def __init__(self, service: Any, notifier: Notifier, year: Optional[int] = None):
        super().__init__(notifier)
        self.service = service
        self.year = year or date.today().year

    def stats(self) -> List[Tuple[str, Any]]:
        """Counter cards; every value shows "-" while the summary is unavailable."""
        summary = self.service.summary()
        if summary is None:
            return [(label, MISSING) for label in
                    ("Tổng người dùng", "Tổng Tool", "Tổng VPS", "Tổng Proxy")]
        return [
            ("Tổng người dùng", summary.total_user),
            ("Tổng Tool", summary.total_tool),
            ("Tổng VPS", summary.total_vps),
            ("Tổng Proxy", summary.total_proxy),
        ]

    def set_year(self, year: int) -> None:
        self.year = int(year)

    @staticmethod
    def _series(timeline: Optional[Timeline], fmt=str) -> List[Tuple[str, str]]:
        if timeline is None:
            return []
        return [(f"Tháng {month}", fmt(total))
                for month, total in enumerate(timeline.points, start=1)]

    def revenue_chart(self) -> List[Tuple[str, str]]:
        return self._series(self.service.revenue_timeline(self.year), format_vnd)

    def new_users_chart(self) -> List[Tuple[str, str]]:
        return self._series(self.service.user_timeline(self.year))

    def refresh(self) -> None:
        self.service.invalidate()
