from typing import Any, Dict, List

from data.models import Tool, ToolPlan
from pages.base_page import CrudPage, StatusToggle
from ui.data_table import Column
from ui.entity_form import EntityForm, FormField
from ui.formatting import format_date, format_vnd
from ui.notifications import Notifier
from ui.safe_html import html_to_text
from ui.status_badge import StatusBadge
from ui.tool_form import TOOL_FIELDS, ToolForm

def plan_label(plan: ToolPlan) -> str:
    duration = "Vĩnh viễn" if plan.is_permanent else f"{plan.duration} ngày"
    return f"{plan.name}: {format_vnd(plan.price)} ({duration})"

class ToolsPage(CrudPage):
    path = "/tools"
    title = "Quản lý Tool"
    entity_label = "Tool"
    search_key = "name"
    search_placeholder = "Tìm kiếm tool..."

    def __init__(self, service: Any, file_service: Any, notifier: Notifier, page_size: int = 10):
        # build_form needs the upload service
        self.file_service = file_service
        super().__init__(service, notifier, page_size)
        self.status_toggle = StatusToggle(service, notifier, self.entity_label,
                                          on_changed=self.refetch)

    def columns(self) -> List[Column]:
        return [
            Column("Mã Tool", "code", "font-mono"),
            Column("Tên Tool", "name", "font-medium"),
            Column("Mô tả", lambda tool: html_to_text(tool.description or "")),
            Column("Gói giá", lambda tool: "; ".join(plan_label(p) for p in tool.plans)
                   or "Chưa có gói"),
            Column("Thống kê", lambda tool: f"Đã bán: {tool.sold_quantity} / Lượt xem: {tool.view_count}"),
            Column("Trạng thái", lambda tool: StatusBadge(tool.status).label),
            Column("Demo", lambda tool: tool.demo or ""),
            Column("Ngày tạo", lambda tool: format_date(tool.created_at)),
        ]

    def form_fields(self) -> List[FormField]:
        return TOOL_FIELDS

    def build_form(self) -> EntityForm:
        return ToolForm(self.form_title(), self.file_service, on_submit=self.handle_submit,
                        on_open_change=self.set_form_open)

    def to_form_data(self, item: Tool) -> Dict[str, Any]:
        return item.to_dict()

    def change_status(self, tool: Tool, status: Any) -> bool:
        return self.status_toggle.change(tool, status)
