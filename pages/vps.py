from typing import Any, Dict, List, Optional

from data.models import Vps
from pages.base_page import CrudPage, StatusToggle
from ui.data_table import Column
from ui.entity_form import FieldType, FormField
from ui.formatting import format_date, format_vnd, to_number
from ui.notifications import Notifier
from ui.status_badge import StatusBadge
from ui.tool_form import STATUS_OPTIONS

NUMBER_FIELDS = ("cpu", "ram", "disk", "bandwidth", "price")

class VpsPage(CrudPage):
    path = "/vps"
    title = "Quản lý VPS"
    entity_label = "VPS"
    search_key = "name"
    search_placeholder = "Tìm kiếm VPS..."

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.status_toggle = StatusToggle(service, notifier, self.entity_label,
                                          on_changed=self.refetch)
        self.selected: Optional[Vps] = None

    def columns(self) -> List[Column]:
        return [
            Column("Tên VPS", "name", "font-medium"),
            Column("Vị trí", lambda vps: vps.location or "N/A"),
            Column("Hệ điều hành", lambda vps: vps.os or "N/A"),
            Column("Cấu hình", lambda vps: f"{vps.cpu} CPU / {vps.ram} GB RAM / {vps.disk} GB"),
            Column("Bandwidth", lambda vps: f"{vps.bandwidth} GB/tháng"),
            Column("Giá", lambda vps: format_vnd(vps.price)),
            Column("Trạng thái", lambda vps: StatusBadge(vps.status).label),
            Column("Ngày tạo", lambda vps: format_date(vps.created_at)),
        ]

    def form_fields(self) -> List[FormField]:
        return [
            FormField("name", "Tên VPS", required=True),
            FormField("description", "Mô tả", FieldType.TEXTAREA),
            FormField("cpu", "CPU (core)", FieldType.NUMBER),
            FormField("ram", "RAM (GB)", FieldType.NUMBER),
            FormField("disk", "Ổ cứng (GB)", FieldType.NUMBER),
            FormField("bandwidth", "Bandwidth (GB/tháng)", FieldType.NUMBER),
            FormField("location", "Vị trí"),
            FormField("os", "Hệ điều hành"),
            FormField("price", "Giá (VNĐ)", FieldType.NUMBER, required=True),
            FormField("tags", "Tags", placeholder="Phân tách bằng dấu phẩy"),
            FormField("status", "Trạng thái", FieldType.SELECT, options=STATUS_OPTIONS),
        ]

    def to_form_data(self, item: Vps) -> Dict[str, Any]:
        data = item.to_dict()
        data["tags"] = ", ".join(item.tags)
        data["status"] = str(item.status)
        return data

    def to_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "name": data.get("name", ""),
            "description": data.get("description", ""),
            "location": data.get("location", ""),
            "os": data.get("os", ""),
            "tags": [tag.strip() for tag in str(data.get("tags") or "").split(",") if tag.strip()],
            "status": int(data.get("status") or 1),
        }
        for name in NUMBER_FIELDS:
            payload[name] = to_number(data.get(name))
        return payload

    def show_detail(self, vps_id: str) -> Vps:
        self.selected = self.service.detail(vps_id)
        return self.selected

    def change_status(self, vps: Vps, status: Any) -> bool:
        return self.status_toggle.change(vps, status)
