"""
Order provisioning dialogs: VPS/proxy setup and tool API key change.
"""

from typing import Any, Callable, Dict, Optional

from config.constants import Messages
from core.logging_config import LoggerMixin
from core.normalization import extract_error_message
from core.types import OrderType
from data.models import Order
from ui.notifications import Notifier

class OrderSetupForm(LoggerMixin):
    """Setup dialog for a VPS or proxy order waiting in "setup"."""

    FIELDS = ("ip", "username", "password", "proxies", "expiredAt")

    def __init__(self, order_service: Any, notifier: Notifier,
                 on_setup_success: Optional[Callable[[], None]] = None,
                 on_open_change: Optional[Callable[[bool], None]] = None):
        self.order_service = order_service
        self.notifier = notifier
        self.on_setup_success = on_setup_success
        self.on_open_change = on_open_change
        self.order: Optional[Order] = None
        self.is_open = False
        self.form_data: Dict[str, str] = {}

    def open(self, order: Order) -> None:
        self.order = order
        self.is_open = True
        self.form_data = {name: "" for name in self.FIELDS}

    def set_value(self, name: str, value: str) -> None:
        if name not in self.FIELDS:
            raise KeyError(name)
        self.form_data[name] = value

    @property
    def title(self) -> str:
        if self.order and self.order.type == OrderType.VPS.value:
            return "Setup VPS"
        if self.order and self.order.type == OrderType.PROXY.value:
            return "Setup Proxy"
        return "Setup"

    @property
    def can_submit(self) -> bool:
        data = self.form_data
        if not self.order:
            return False
        if self.order.type == OrderType.VPS.value:
            return bool(data.get("ip") and data.get("username") and data.get("password"))
        if self.order.type == OrderType.PROXY.value:
            return bool(data.get("proxies") and data.get("expiredAt"))
        return False

    def _close(self) -> None:
        self.is_open = False
        if self.on_open_change:
            self.on_open_change(False)

    def submit(self) -> bool:
        order = self.order
        if order is None:
            return False
        data = self.form_data
        try:
            if order.type == OrderType.VPS.value:
                self.order_service.setup_vps(order.id, data.get("ip", ""),
                                             data.get("username", ""), data.get("password", ""))
                self.notifier.success("Đã setup VPS thành công")
            elif order.type == OrderType.PROXY.value:
                if not data.get("expiredAt"):
                    self.notifier.error(Messages.EXPIRED_AT_REQUIRED)
                    return False
                self.order_service.setup_proxy(order.id, data.get("proxies", ""),
                                               data["expiredAt"])
                self.notifier.success("Đã setup Proxy thành công")
            else:
                return False
        except Exception as e:
            self.logger.error("Setup error", order_id=order.id, error=str(e))
            self.notifier.error(extract_error_message(e, Messages.SETUP_ERROR))
            return False

        if self.on_setup_success:
            self.on_setup_success()
        self._close()
        return True

    def cancel(self) -> None:
        self._close()

class ToolApiKeyForm(LoggerMixin):
    """Replaces the API key of a tool order."""

    def __init__(self, order_service: Any, notifier: Notifier,
                 on_change_success: Optional[Callable[[], None]] = None,
                 on_open_change: Optional[Callable[[bool], None]] = None):
        self.order_service = order_service
        self.notifier = notifier
        self.on_change_success = on_change_success
        self.on_open_change = on_open_change
        self.order: Optional[Order] = None
        self.is_open = False
        self.api_key = ""

    def open(self, order: Order) -> None:
        self.order = order
        self.is_open = True
        self.api_key = (order.tool_order.api_key if order.tool_order else None) or ""

    @property
    def description(self) -> str:
        return f"Thay đổi API key cho đơn hàng tool: {self.order.code if self.order else ''}"

    def _close(self) -> None:
        self.is_open = False
        self.api_key = ""
        if self.on_open_change:
            self.on_open_change(False)

    def submit(self) -> bool:
        if self.order is None or not self.api_key:
            return False
        try:
            self.order_service.change_tool_api_key(self.order.id, self.api_key)
        except Exception as e:
            self.logger.error("Change API key error", order_id=self.order.id, error=str(e))
            self.notifier.error(extract_error_message(e, Messages.API_KEY_ERROR))
            return False

        self.notifier.success("Đã cập nhật API key thành công")
        if self.on_change_success:
            self.on_change_success()
        self._close()
        return True

    def cancel(self) -> None:
        self._close()
