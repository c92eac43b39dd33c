from typing import Any, Dict

from core.exceptions import ValidationError
from core.normalization import extract_error_message
from pages.base_page import Page
from ui.notifications import Notifier

PASSWORD_FIELDS = ("currentPassword", "newPassword", "confirmPassword")

class SettingsPage(Page):
    """Profile and password of the signed-in admin."""

    path = "/settings"
    title = "Thông tin Admin"
    description = "Cập nhật thông tin cá nhân và quản lý tài khoản"

    def __init__(self, auth_service: Any, session: Any, notifier: Notifier):
        super().__init__(notifier)
        self.auth_service = auth_service
        self.session = session
        self.message = ""
        self.is_error = False
        self.profile_data: Dict[str, str] = {}
        self.password_data: Dict[str, str] = {name: "" for name in PASSWORD_FIELDS}
        self.reset_profile()

    def reset_profile(self) -> None:
        user = self.session.user or {}
        self.profile_data = {
            "fullname": user.get("fullname") or user.get("username") or "",
            "email": user.get("email") or "",
            "phone": user.get("phone") or "",
        }

    def update_profile(self) -> bool:
        self.message = ""
        self.is_error = False
        try:
            self.auth_service.update_profile(dict(self.profile_data))
        except Exception as e:
            self.logger.error("Profile update failed", error=str(e))
            self.message = extract_error_message(e, "Có lỗi xảy ra khi cập nhật thông tin")
            self.is_error = True
            return False
        self.message = "Cập nhật thông tin thành công!"
        return True

    def change_password(self) -> bool:
        self.message = ""
        self.is_error = False
        data = self.password_data
        try:
            self.auth_service.change_password(data["currentPassword"], data["newPassword"],
                                              data["confirmPassword"])
        except ValidationError as e:
            self.message = e.message
            self.is_error = True
            return False
        except Exception as e:
            self.logger.error("Password change failed", error=str(e))
            self.message = extract_error_message(e, "Có lỗi xảy ra khi đổi mật khẩu")
            self.is_error = True
            return False
        self.message = "Đổi mật khẩu thành công!"
        self.password_data = {name: "" for name in PASSWORD_FIELDS}
        return True
