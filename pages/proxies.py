from typing import Any, Dict, List

from data.models import Proxy
from pages.base_page import CrudPage, StatusToggle
from ui.data_table import Column
from ui.entity_form import FieldType, FormField
from ui.formatting import format_date, format_vnd, to_number
from ui.notifications import Notifier
from ui.status_badge import StatusBadge
from ui.tool_form import STATUS_OPTIONS

class ProxiesPage(CrudPage):
    path = "/proxies"
    title = "Quản lý Proxy"
    entity_label = "Proxy"
    search_key = "name"
    search_placeholder = "Tìm kiếm proxy..."

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.status_toggle = StatusToggle(service, notifier, self.entity_label,
                                          on_changed=self.refetch)

    def columns(self) -> List[Column]:
        return [
            Column("Tên Proxy", "name", "font-medium"),
            Column("Mô tả", "description"),
            Column("Giá", lambda proxy: format_vnd(proxy.price)),
            Column("Tồn kho", lambda proxy: str(proxy.inventory)),
            Column("Đã bán", lambda proxy: str(proxy.sold_quantity)),
            Column("Trạng thái", lambda proxy: StatusBadge(proxy.status).label),
            Column("Ngày tạo", lambda proxy: format_date(proxy.created_at)),
        ]

    def form_fields(self) -> List[FormField]:
        return [
            FormField("name", "Tên Proxy", required=True),
            FormField("description", "Mô tả", FieldType.TEXTAREA),
            FormField("price", "Giá (VNĐ)", FieldType.NUMBER),
            FormField("inventory", "Tồn kho", FieldType.NUMBER),
            FormField("status", "Trạng thái", FieldType.SELECT, options=STATUS_OPTIONS),
        ]

    def to_form_data(self, item: Proxy) -> Dict[str, Any]:
        return {
            "name": item.name,
            "description": item.description,
            "price": str(to_number(item.price)),
            "inventory": str(item.inventory),
            "status": str(item.status),
        }

    def to_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "name": data.get("name", ""),
            "description": data.get("description", ""),
            "price": to_number(data.get("price")),
            "inventory": int(to_number(data.get("inventory"))),
            "status": int(data.get("status") or 1),
        }

    def change_status(self, proxy: Proxy, status: Any) -> bool:
        return self.status_toggle.change(proxy, status)
