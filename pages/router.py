"""
Route table of the admin client.

Every path except /login requires a signed-in admin; unknown paths fall
through to the not-found page.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.logging_config import LoggerMixin
from pages.base_page import Page
from pages.dashboard import DashboardPage
from pages.login import LoginPage
from pages.not_found import NotFoundPage
from pages.orders import OrdersPage
from pages.proxies import ProxiesPage
from pages.settings import SettingsPage
from pages.tools import ToolsPage
from pages.transactions import TransactionsPage
from pages.user_balance import UserBalancePage
from pages.users import UsersPage
from pages.vps import VpsPage
from ui.notifications import Notifier

LOGIN_PATH = "/login"
HOME_PATH = "/"

PROTECTED_PATHS = (
    "/", "/users", "/user-balance", "/tools", "/vps",
    "/proxies", "/orders", "/transactions", "/settings",
)

@dataclass
class Route:
    path: str
    page: Optional[Page] = None
    redirect: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.redirect is not None

class Router(LoggerMixin):
    def __init__(self, session: Any, pages: Dict[str, Page], not_found: Optional[Page] = None):
        self.session = session
        self.pages = pages
        self.not_found = not_found or NotFoundPage(Notifier())

    def resolve(self, path: str) -> Route:
        path = "/" + (path or "").strip().strip("/")
        if path == LOGIN_PATH:
            if self.session.is_authenticated:
                return Route(path, redirect=HOME_PATH)
            return Route(path, page=self.pages.get(LOGIN_PATH))

        if path in PROTECTED_PATHS:
            if not self.session.is_authenticated:
                self.logger.info("Redirecting to login", path=path)
                return Route(path, redirect=LOGIN_PATH)
            page = self.pages.get(path)
            if page is not None:
                return Route(path, page=page)

        return Route(path, page=self.not_found)

    def navigate(self, path: str) -> Route:
        """Follow redirects until a page is reached."""
        route = self.resolve(path)
        seen: List[str] = [route.path]
        while route.is_redirect and route.redirect not in seen:
            route = self.resolve(route.redirect)
            seen.append(route.path)
        return route

def build_router(container: Any, notifier: Notifier, page_size: int = 10) -> Router:
    """Instantiate every page against the services registered in the container."""
    session = container.get('auth_session')
    auth_service = container.get('auth_service')
    pages: List[Page] = [
        LoginPage(auth_service, session, notifier),
        DashboardPage(container.get('dashboard_service'), notifier),
        UsersPage(container.get('user_service'), notifier, page_size),
        UserBalancePage(container.get('user_service'), notifier, page_size),
        ToolsPage(container.get('tool_service'), container.get('file_service'), notifier, page_size),
        VpsPage(container.get('vps_service'), notifier, page_size),
        ProxiesPage(container.get('proxy_service'), notifier, page_size),
        OrdersPage(container.get('order_service'), notifier, page_size),
        TransactionsPage(container.get('transaction_service'), notifier, page_size),
        SettingsPage(auth_service, session, notifier),
    ]
    return Router(session, {page.path: page for page in pages}, NotFoundPage(notifier))
