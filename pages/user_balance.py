from typing import Any, Dict, List, Optional

from config.constants import Messages
from core.exceptions import ValidationError
from core.normalization import extract_error_message
from core.types import BalanceOperation
from data.models import User
from pages.base_page import ListPage
from ui.data_table import Column
from ui.formatting import format_vnd

OPERATION_OPTIONS = [
    (str(BalanceOperation.ADD.value), "Cộng tiền"),
    (str(BalanceOperation.SUBTRACT.value), "Trừ tiền"),
]

class UserBalancePage(ListPage):
    """Search users, pick one, then add to or subtract from their balance."""

    path = "/user-balance"
    title = "Quản lý số dư tài khoản"
    search_key = "fullname"
    search_placeholder = "Tìm kiếm người dùng..."

    def __init__(self, service: Any, notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.selected: Optional[User] = None
        self.is_dialog_open = False
        self.form_data: Dict[str, str] = {}

    def columns(self) -> List[Column]:
        return [
            Column("Tên người dùng", "fullname", "font-medium"),
            Column("Email", "email"),
            Column("Số dư", lambda user: format_vnd(user.account_balance)),
        ]

    def select_user(self, user: User) -> None:
        self.selected = user
        self.is_dialog_open = True
        self.form_data = {"amount": "", "operation": OPERATION_OPTIONS[0][0], "reason": ""}

    def set_value(self, name: str, value: str) -> None:
        self.form_data[name] = value

    def close(self) -> None:
        self.is_dialog_open = False
        self.selected = None

    def submit(self) -> bool:
        user = self.selected
        if user is None:
            return False
        try:
            amount = float(self.form_data.get("amount") or 0)
        except ValueError:
            amount = 0
        if amount <= 0:
            self.notifier.error(Messages.AMOUNT_MUST_BE_POSITIVE)
            return False

        try:
            self.service.update_balance(user.id, amount, int(self.form_data.get("operation", 1)),
                                        self.form_data.get("reason", ""))
        except ValidationError as e:
            self.notifier.error(e.message)
            return False
        except Exception as e:
            self.logger.error("Balance update failed", user_id=user.id, error=str(e))
            self.notifier.error(extract_error_message(
                e, "Có lỗi xảy ra khi cập nhật số dư tài khoản"))
            return False

        self.notifier.success(
            f"Đã cập nhật số dư tài khoản cho người dùng {user.username} thành công")
        self.close()
        self.refetch()
        return True
