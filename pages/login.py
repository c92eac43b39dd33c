from typing import Any

from config.constants import Messages
from core.exceptions import AuthenticationError, ValidationError
from pages.base_page import Page
from ui.notifications import Notifier

class LoginPage(Page):
    path = "/login"
    title = "Đăng nhập"
    description = "Nhập thông tin đăng nhập để truy cập hệ thống"

    def __init__(self, auth_service: Any, session: Any, notifier: Notifier):
        super().__init__(notifier)
        self.auth_service = auth_service
        self.session = session
        self.error = ""
        self.is_loading = False

    @property
    def redirect_to(self) -> str:
        """Where to go instead of rendering the form; empty while logged out."""
        return "/" if self.session.is_authenticated else ""

    def submit(self, email: str, password: str) -> bool:
        self.is_loading = True
        self.error = ""
        try:
            self.auth_service.login(email, password)
            return True
        except (AuthenticationError, ValidationError):
            self.error = Messages.INVALID_CREDENTIALS
        except Exception as e:
            self.logger.error("Login error", error=str(e), error_type=type(e).__name__)
            self.error = Messages.LOGIN_ERROR
        finally:
            self.is_loading = False
        return False
