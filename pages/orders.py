from typing import Any, List

from core.types import OrderStatus, OrderType
from data.models import Order
from pages.base_page import ListPage
from ui.data_table import Column
from ui.formatting import format_date, format_vnd
from ui.notifications import Notifier
from ui.order_forms import OrderSetupForm, ToolApiKeyForm

TYPE_LABELS = {
    OrderType.PROXY.value: "Proxy",
    OrderType.TOOL.value: "Tool",
    OrderType.VPS.value: "VPS",
}

STATUS_LABELS = {
    OrderStatus.SETUP.value: "Đang cài đặt",
    OrderStatus.ACTIVE.value: "Hoạt động",
    OrderStatus.CANCELLED.value: "Đã hủy",
}

def product_name(order: Order) -> str:
    if order.product_name:
        return order.product_name
    if order.tool_order and order.tool_order.name:
        return order.tool_order.name
    return "N/A"

class OrdersPage(ListPage):
    path = "/orders"
    title = "Quản lý Đơn hàng"
    search_key = "code"
    search_placeholder = "Tìm kiếm theo mã đơn hàng..."

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.setup_form = OrderSetupForm(service, notifier, on_setup_success=self.refetch)
        self.api_key_form = ToolApiKeyForm(service, notifier, on_change_success=self.refetch)

    def columns(self) -> List[Column]:
        return [
            Column("Mã đơn hàng", "code", "font-mono"),
            Column("Khách hàng", lambda order: order.user.fullname or "N/A"),
            Column("Loại", lambda order: TYPE_LABELS.get(order.type, order.type)),
            Column("Sản phẩm", product_name),
            Column("Ngày tạo", lambda order: format_date(order.created_at)),
            Column("Ngày hết hạn", lambda order: format_date(order.expired_at)),
            Column("Trạng thái", lambda order: STATUS_LABELS.get(order.status, order.status)),
            Column("Tổng tiền", lambda order: format_vnd(order.total_price)),
            Column("Thao tác", self.action_label),
        ]

    @staticmethod
    def action_label(order: Order) -> str:
        if order.needs_setup:
            return "Setup"
        if order.type == OrderType.TOOL.value:
            return "Đổi API key"
        return ""

    def open_setup(self, order: Order) -> bool:
        """Only VPS/proxy orders still waiting in setup can be provisioned."""
        if not order.needs_setup:
            return False
        self.setup_form.open(order)
        return True

    def open_api_key(self, order: Order) -> bool:
        if order.type != OrderType.TOOL.value:
            return False
        self.api_key_form.open(order)
        return True
