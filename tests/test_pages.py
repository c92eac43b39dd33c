"""
Page controllers against mocked services: toasts, dialog state and routing.
"""

import json
import os
import sys
from unittest.mock import Mock

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config.constants import Messages, StorageKeys
from core.dependency_container import DependencyContainer
from core.exceptions import ApiError, AuthenticationError, NetworkError, NotFoundError
from core.session import AuthSession, MemoryStore
from core.types import ListResult, PageMeta
from data.models import DashboardSummary, Order, Proxy, Timeline, User
from pages.dashboard import DashboardPage
from pages.login import LoginPage
from pages.orders import OrdersPage
from pages.proxies import ProxiesPage
from pages.router import Router, build_router
from pages.settings import SettingsPage
from pages.transactions import TransactionsPage
from pages.user_balance import UserBalancePage
from pages.users import UsersPage
from service.auth_service import AuthService
from service.catalog_service import ProxyService
from service.query_cache import QueryCache
from ui.notifications import Notifier

PROXY = Proxy(id="x1", name="Proxy VN", price=15000, inventory=3, status=1)


def _result(items, total=None):
    total = len(items) if total is None else total
    return ListResult(items=list(items), meta=PageMeta(total=total, page=1, limit=10, total_pages=1))


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def proxy_service():
    service = Mock()
    service.list.return_value = _result([PROXY])
    return service


class TestCrudPage:

    def test_delete_error_toasts_api_message_and_keeps_data(self, proxy_service, notifier):
        proxy_service.delete.side_effect = ApiError(400, {"message": "Cannot delete: in use"})
        page = ProxiesPage(proxy_service, notifier)
        page.load()

        table = page.table()
        table.request_delete(PROXY)
        table.confirm_delete()

        assert notifier.last.is_error
        assert notifier.last.description == "Cannot delete: in use"
        assert page.items == [PROXY]
        assert proxy_service.list.call_count == 1

    def test_delete_success_refetches(self, proxy_service, notifier):
        page = ProxiesPage(proxy_service, notifier)
        page.load()

        assert page.handle_delete(PROXY) is True
        assert notifier.last.description == "Đã xóa proxy Proxy VN thành công"
        assert proxy_service.list.call_args.kwargs["force"] is True

    def test_failed_create_keeps_form_open_with_values(self, proxy_service, notifier):
        proxy_service.create.side_effect = ApiError(422, {"message": "Tên đã tồn tại"})
        page = ProxiesPage(proxy_service, notifier)
        page.open_create()
        page.form.set_value("name", "Proxy VN")
        page.form.set_value("price", "15000")
        page.form.set_value("status", "1")

        assert page.form.submit() is False
        assert page.is_form_open
        assert page.form.is_open
        assert page.form.value("name") == "Proxy VN"
        assert notifier.last.description == "Tên đã tồn tại"

    def test_create_success_closes_and_converts_numbers(self, proxy_service, notifier):
        proxy_service.create.return_value = Proxy(id="x2", name="Proxy US")
        page = ProxiesPage(proxy_service, notifier)
        page.open_create()
        assert page.form_title() == "Thêm Proxy mới"
        for name, value in (("name", "Proxy US"), ("price", "20000"), ("inventory", "5"), ("status", "0")):
            page.form.set_value(name, value)

        assert page.form.submit() is True
        proxy_service.create.assert_called_once_with(
            {"name": "Proxy US", "description": "", "price": 20000, "inventory": 5, "status": 0})
        assert not page.is_form_open
        assert notifier.last.description == "Đã tạo proxy Proxy US thành công"

    def test_edit_updates_selected_item(self, proxy_service, notifier):
        proxy_service.update.return_value = PROXY
        page = ProxiesPage(proxy_service, notifier)
        page.open_edit(PROXY)

        assert page.form_title() == "Chỉnh sửa Proxy"
        assert page.form.value("price") == "15000"
        assert page.form.submit() is True
        assert proxy_service.update.call_args.args[0] == "x1"
        assert page.editing is None

    def test_search_resets_to_first_page(self, proxy_service, notifier):
        page = ProxiesPage(proxy_service, notifier)
        page.current_page = 3

        page.search("vn")

        assert page.current_page == 1
        proxy_service.list.assert_called_with(keyword="vn", page=1, limit=10, force=False)

    def test_pagination_hidden_when_empty(self, notifier):
        service = Mock()
        service.list.return_value = _result([])
        page = ProxiesPage(service, notifier)
        page.load()

        assert page.pagination() is None
        assert page.table().render().empty


class TestStatusToggle:

    def test_same_status_dispatches_nothing(self, notifier):
        api = Mock()
        api.list.return_value = [PROXY.to_dict()]
        page = ProxiesPage(ProxyService(api, QueryCache()), notifier)

        assert page.change_status(PROXY, "1") is False
        api.active.assert_not_called()
        api.pause.assert_not_called()
        assert notifier.toasts == []

    def test_pause_toasts_and_refetches(self, notifier):
        api = Mock()
        api.list.return_value = [PROXY.to_dict()]
        page = ProxiesPage(ProxyService(api, QueryCache()), notifier)

        assert page.change_status(PROXY, "0") is True
        api.pause.assert_called_once_with("x1")
        assert notifier.last.description == "Đã tạm dừng proxy Proxy VN thành công"
        api.list.assert_called_once()


class TestUsersPage:

    @pytest.fixture
    def user(self):
        return User(id="2", fullname="user", email="user@x", is_locked=False)

    def test_create_form_has_password_edit_form_does_not(self, user, notifier):
        service = Mock()
        page = UsersPage(service, notifier)

        page.open_create()
        assert "password" in [f.name for f in page.form.fields]

        page.open_edit(user)
        assert "password" not in [f.name for f in page.form.fields]
        assert page.form.value("role") == "0"

    def test_create_payload(self, notifier):
        service = Mock()
        service.create.return_value = None
        page = UsersPage(service, notifier)
        page.open_create()
        for name, value in (("fullname", "bob"), ("email", "bob@x"), ("role", "0"), ("password", "pw")):
            page.form.set_value(name, value)

        assert page.form.submit() is True
        service.create.assert_called_once_with(
            {"fullname": "bob", "email": "bob@x", "phone": None, "role": 0, "password": "pw"})

    def test_lock_toggle(self, user, notifier):
        service = Mock()
        service.change_lock.return_value = True
        page = UsersPage(service, notifier)

        assert page.set_locked(user, True) is True
        service.change_lock.assert_called_once_with("2", False, True)
        assert notifier.last.description == "Đã khóa user user thành công"

    def test_reset_password_success_toasts_and_refetches(self, user, notifier):
        service = Mock()
        service.list.return_value = _result([user])
        page = UsersPage(service, notifier)

        assert page.reset_password(user, "n3w-pass") is True
        service.reset_password.assert_called_once_with("2", "n3w-pass")
        assert notifier.last.description == "Đã đặt lại mật khẩu cho user user"
        assert not notifier.last.is_error
        service.list.assert_called_once()

    def test_reset_password_failure_toasts_api_message(self, user, notifier):
        service = Mock()
        service.reset_password.side_effect = ApiError(400, {"message": "Mật khẩu quá ngắn"})
        page = UsersPage(service, notifier)

        assert page.reset_password(user, "x") is False
        assert notifier.last.is_error
        assert notifier.last.description == "Mật khẩu quá ngắn"
        service.list.assert_not_called()

    def test_columns(self, user, notifier):
        service = Mock()
        service.list.return_value = _result([user])
        page = UsersPage(service, notifier)
        page.load()

        row = page.table().render().rows[0]
        assert row[2] == "Chưa cập nhật"
        assert row[3] == "Không xác định"
        assert row[4] == "Không bị khóa"


class TestUserBalancePage:

    def test_amount_must_be_positive(self, notifier):
        service = Mock()
        page = UserBalancePage(service, notifier)
        page.select_user(User(id="2", fullname="user", email="u@x"))
        page.set_value("amount", "0")

        assert page.submit() is False
        assert notifier.last.description == Messages.AMOUNT_MUST_BE_POSITIVE
        service.update_balance.assert_not_called()
        assert page.is_dialog_open

    def test_success(self, notifier):
        service = Mock()
        service.list.return_value = _result([])
        page = UserBalancePage(service, notifier)
        page.select_user(User(id="2", fullname="user", email="u@x"))
        page.set_value("amount", "50000")
        page.set_value("operation", "-1")
        page.set_value("reason", "refund")

        assert page.submit() is True
        service.update_balance.assert_called_once_with("2", 50000.0, -1, "refund")
        assert notifier.last.description == "Đã cập nhật số dư tài khoản cho người dùng user thành công"
        assert not page.is_dialog_open

    def test_failure_uses_fallback(self, notifier):
        service = Mock()
        service.update_balance.side_effect = NetworkError("")
        page = UserBalancePage(service, notifier)
        page.select_user(User(id="2", fullname="user", email="u@x"))
        page.set_value("amount", "1000")

        assert page.submit() is False
        assert notifier.last.description == "Có lỗi xảy ra khi cập nhật số dư tài khoản"


class TestOrdersPage:

    def test_setup_only_for_pending_vps_and_proxy(self, notifier):
        service = Mock()
        page = OrdersPage(service, notifier)
        vps = Order.from_api({"id": "1", "code": "A", "type": "vps", "status": "setup"})
        tool = Order.from_api({"id": "2", "code": "B", "type": "tool", "status": "active",
                               "toolOrder": {"apiKey": "k"}})

        assert page.open_setup(vps) is True
        assert page.setup_form.title == "Setup VPS"
        assert page.open_setup(tool) is False
        assert page.open_api_key(tool) is True
        assert page.open_api_key(vps) is False
        assert OrdersPage.action_label(vps) == "Setup"
        assert OrdersPage.action_label(tool) == "Đổi API key"

    def test_columns(self, notifier):
        service = Mock()
        service.list.return_value = _result([Order.from_api({
            "id": "1", "code": "DH1", "type": "proxy", "status": "cancelled", "totalPrice": 30000,
            "user": {"fullname": "user"}, "proxy": {"name": "Proxy VN"},
        })])
        page = OrdersPage(service, notifier)
        page.load()

        row = page.table().render().rows[0]
        assert row[:4] == ["DH1", "user", "Proxy", "Proxy VN"]
        assert row[6] == "Đã hủy"
        assert row[7] == "30.000 ₫"


def test_transaction_detail_not_found(notifier):
    service = Mock()
    service.detail.side_effect = NotFoundError("transactions", "9")
    page = TransactionsPage(service, notifier)

    assert page.show_detail("9") is None
    assert notifier.last.is_error
    assert page.detail_rows() == []


def test_dashboard_shows_dash_when_summary_missing(notifier):
    service = Mock()
    service.summary.return_value = None
    service.revenue_timeline.return_value = Timeline(year=2024, points=[0, 1500000] + [0] * 10)
    page = DashboardPage(service, notifier, year=2024)

    assert [value for _, value in page.stats()] == ["-", "-", "-", "-"]
    assert page.revenue_chart()[1] == ("Tháng 2", "1.500.000 ₫")

    service.summary.return_value = DashboardSummary(total_user=4)
    assert page.stats()[0] == ("Tổng người dùng", 4)


def _session(authenticated=True):
    store = MemoryStore()
    if authenticated:
        store.set(StorageKeys.USER, json.dumps({"username": "admin"}))
        store.set(StorageKeys.IS_AUTHENTICATED, "true")
        store.set(StorageKeys.AUTH_TOKEN, "tok")
        store.set(StorageKeys.REFRESH_TOKEN, "ref")
    return AuthSession(store).init(), store


class TestLoginAndSettings:

    def test_login_errors(self, notifier):
        session, _ = _session(authenticated=False)
        auth_service = Mock()
        page = LoginPage(auth_service, session, notifier)

        auth_service.login.side_effect = AuthenticationError("nope")
        assert page.submit("admin", "bad") is False
        assert page.error == Messages.INVALID_CREDENTIALS

        auth_service.login.side_effect = NetworkError("down")
        assert page.submit("admin", "admin123") is False
        assert page.error == Messages.LOGIN_ERROR
        assert page.redirect_to == ""

    def test_login_redirects_when_authenticated(self, notifier):
        session, _ = _session()
        assert LoginPage(Mock(), session, notifier).redirect_to == "/"

    def test_password_mismatch(self, notifier):
        session, _ = _session()
        page = SettingsPage(AuthService(Mock(), session), session, notifier)
        page.password_data.update(currentPassword="old", newPassword="a", confirmPassword="b")

        assert page.change_password() is False
        assert page.is_error
        assert page.message == Messages.PASSWORD_MISMATCH
        assert page.profile_data["fullname"] == "admin"


class TestRouter:

    @pytest.fixture
    def pages(self, notifier):
        return {"/users": UsersPage(Mock(), notifier), "/login": Mock()}

    def test_logout_then_protected_route_redirects_to_login(self, pages):
        session, store = _session()
        auth_service = AuthService(Mock(), session)
        router = Router(session, pages)

        assert router.resolve("/users").page is pages["/users"]

        auth_service.logout()

        assert all(store.get(key) is None for key in StorageKeys.ALL)
        route = router.resolve("/users")
        assert route.redirect == "/login"
        assert router.navigate("/users").page is pages["/login"]

    def test_login_redirects_home_when_authenticated(self, pages):
        session, _ = _session()
        assert Router(session, pages).resolve("/login").redirect == "/"

    def test_unknown_path_is_not_found(self, pages):
        session, _ = _session()
        router = Router(session, pages)

        assert router.resolve("/nowhere").page is router.not_found
        assert router.resolve("/users/").page is pages["/users"]


def test_build_router_wires_every_page(notifier):
    session, _ = _session()
    container = DependencyContainer()
    container.register_instance('auth_session', session)
    for name in ('auth_service', 'dashboard_service', 'user_service', 'tool_service',
                 'file_service', 'vps_service', 'proxy_service', 'order_service',
                 'transaction_service'):
        container.register_instance(name, Mock())

    router = build_router(container, notifier)

    for path in ("/", "/users", "/user-balance", "/tools", "/vps", "/proxies",
                 "/orders", "/transactions", "/settings"):
        route = router.resolve(path)
        assert route.page is not None and route.page.path == path
