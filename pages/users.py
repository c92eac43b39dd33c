from typing import Any, Dict, List

from core.normalization import extract_error_message
from data.models import User
from pages.base_page import CrudPage
from service.user_service import UserService
from ui.data_table import Column
from ui.entity_form import FieldType, FormField
from ui.formatting import format_date

ROLE_OPTIONS = [("0", "User"), ("1", "Admin")]

class UsersPage(CrudPage):
    path = "/users"
    title = "Quản lý User"
    entity_label = "User"
    search_key = "fullname"
    search_placeholder = "Tìm kiếm user..."

    def columns(self) -> List[Column]:
        return [
            Column("Tên đăng nhập", "fullname", "font-medium"),
            Column("Email", "email"),
            Column("Số điện thoại", lambda user: user.phone or "Chưa cập nhật"),
            Column("Ngày tham gia", lambda user: format_date(user.created_at, "Không xác định")),
            Column("Trạng thái khóa",
                   lambda user: "Bị khóa" if user.is_locked else "Không bị khóa"),
        ]

    def form_fields(self) -> List[FormField]:
        fields = [
            FormField("fullname", "Tên đăng nhập", required=True),
            FormField("email", "Email", FieldType.EMAIL, required=True),
            FormField("phone", "Số điện thoại"),
            FormField("role", "Vai trò", FieldType.SELECT, options=ROLE_OPTIONS),
        ]
        # password is set on creation only; later changes go through reset
        if self.editing is None:
            fields.append(FormField("password", "Mật khẩu", required=True))
        return fields

    def to_form_data(self, item: User) -> Dict[str, Any]:
        return {
            "fullname": item.fullname,
            "email": item.email,
            "phone": item.phone or "",
            "role": "1" if item.is_admin else "0",
        }

    def to_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return UserService.build_payload(data, include_password=self.editing is None)

    def item_label(self, item: Any) -> str:
        if isinstance(item, User):
            return item.username
        return super().item_label(item)

    def set_locked(self, user: User, lock: bool) -> bool:
        """Lock or unlock from the row switch; no request when the state already matches."""
        verb = "khóa" if lock else "mở khóa"
        try:
            changed = self.service.change_lock(user.id, user.is_locked, lock)
        except Exception as e:
            self.logger.error("Lock change failed", user_id=user.id, error=str(e))
            self.notifier.error(extract_error_message(
                e, f"Có lỗi xảy ra khi {verb} user {user.username}"))
            return False
        if not changed:
            return False
        self.notifier.success(f"Đã {verb} user {user.username} thành công")
        self.refetch()
        return True

    def reset_password(self, user: User, password: str) -> bool:
        return self._run(
            lambda: self.service.reset_password(user.id, password),
            f"Đã đặt lại mật khẩu cho user {user.username}",
            f"Có lỗi xảy ra khi đặt lại mật khẩu cho user {user.username}",
        )
