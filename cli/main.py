#!/usr/bin/env python3
import os
import sys
from getpass import getpass
from typing import Any, Callable, Optional, Tuple

real_script_path = os.path.realpath(__file__)
project_root = os.path.abspath(os.path.join(os.path.dirname(real_script_path), '..'))
sys.path.insert(0, project_root)

from config.app_config import get_config
from core.dependency_container import initialize_container, get_container, cleanup_container
from core.exceptions import ShopAdminError, ValidationError
from core.logging_config import setup_structured_logging
from pages.base_page import CrudPage, ListPage
from pages.router import Router, build_router
from ui.notifications import Notifier
from ui.renderer import render_lines, render_pagination, render_table, render_toast
from ui.tool_form import ToolForm

MENU = [
    ("1", "/", "Dashboard"),
    ("2", "/users", "Quản lý User"),
    ("3", "/user-balance", "Quản lý số dư"),
    ("4", "/tools", "Quản lý Tool"),
    ("5", "/vps", "Quản lý VPS"),
    ("6", "/proxies", "Quản lý Proxy"),
    ("7", "/orders", "Quản lý Đơn hàng"),
    ("8", "/transactions", "Danh sách giao dịch"),
    ("9", "/settings", "Thông tin Admin"),
]

def print_toast(toast) -> None:
    print(render_toast(toast))

def ask(prompt: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    return input(f"{prompt}{suffix}: ").strip() or default

def pick(page: ListPage) -> Optional[Any]:
    """Select a row of the current page by its 1-based number."""
    raw = input("Row number: ").strip()
    if not raw.isdigit() or not 1 <= int(raw) <= len(page.items):
        print("❌ Invalid row.")
        return None
    return page.items[int(raw) - 1]

def show_list(page: ListPage) -> None:
    print()
    print(render_table(page.table().render()))
    footer = render_pagination(page.pagination())
    if footer:
        print(footer)

def fill_form(page: CrudPage) -> None:
    form = page.form
    print(f"\n--- {form.title} ---")
    for form_field in form.fields:
        current = str(form.value(form_field.name))
        if form_field.options:
            choices = ", ".join(f"{value}={label}" for value, label in form_field.options)
            print(f"  {form_field.label} ({choices})")
        if form_field.is_secret:
            value = getpass(f"{form_field.label}: ") or current
        else:
            value = ask(form_field.label, current)
        form.set_value(form_field.name, value)

def edit_tool_extras(form: ToolForm) -> None:
    """Images (uploaded on selection) and pricing plans of a tool."""
    picker = form.file_picker()
    while True:
        print("\nẢnh: " + (", ".join(image["fileName"] for image in form.images) or "-"))
        for index, plan in enumerate(form.plans, 1):
            print(f"  {index}) {plan.get('name', '')} | {plan.get('price', '')} | {plan.get('duration', '')}")
        print("[i] add images  [x] remove image  [a] add plan  [e] edit plan  [r] remove plan  [d] done")
        choice = input("> ").strip().lower()

        if choice == 'd':
            return
        elif choice == 'i':
            paths = [p.strip() for p in input("Image paths (comma separated): ").split(",")]
            try:
                picker.select(paths)
            except ValidationError as e:
                print(f"❌ {e.message}")
                continue
            if form.upload_errors:
                print(f"❌ Upload failed: {', '.join(form.upload_errors)}")
                form.upload_errors = []
        elif choice in ('x', 'e', 'r'):
            items = form.images if choice == 'x' else form.plans
            raw = input("Number: ").strip()
            if not raw.isdigit() or not 1 <= int(raw) <= len(items):
                print("❌ Invalid number.")
                continue
            index = int(raw) - 1
            if choice == 'x':
                form.remove_image(index)
            elif choice == 'r':
                form.remove_plan(index)
            else:
                edit_plan(form, index)
        elif choice == 'a':
            form.add_plan()
            edit_plan(form, len(form.plans) - 1)
        else:
            print("Invalid choice. Please try again.")

def edit_plan(form: ToolForm, index: int) -> None:
    plan = form.plans[index]
    form.update_plan(index, "name", ask("Tên gói", str(plan.get("name", ""))))
    form.update_plan(index, "price", ask("Giá", str(plan.get("price", ""))))
    form.update_plan(index, "duration", ask("Thời hạn (ngày, -1 = vĩnh viễn)", str(plan.get("duration", ""))))

def submit_form(page: CrudPage) -> None:
    """Keep prompting until the dialog closes or the admin gives up."""
    while page.is_form_open:
        fill_form(page)
        if isinstance(page.form, ToolForm):
            edit_tool_extras(page.form)
        if page.form.submit():
            return
        for name, error in page.form.errors.items():
            print(f"❌ {name}: {error}")
        if ask("Try again? (y/n)", "y").lower() != 'y':
            page.form.cancel()

Actions = Tuple[str, Callable[[str], bool]]

def list_flow(page: ListPage, actions: Optional[Actions] = None) -> None:
    """Shared list loop: search, paging, and page-specific actions."""
    hint, extra = actions if actions else ("", None)
    page.load()
    while True:
        show_list(page)
        print("\n[s] search  [n] next  [p] previous  [r] refresh", end="")
        if isinstance(page, CrudPage):
            print("  [a] add  [e] edit  [d] delete", end="")
        if hint:
            print(f"  {hint}", end="")
        print("  [b] back")
        choice = input("> ").strip().lower()

        if choice == 'b':
            return
        elif choice == 's':
            page.search(input("Keyword: ").strip())
        elif choice in ('n', 'p'):
            pagination = page.pagination()
            if pagination:
                pagination.go_to(pagination.next() if choice == 'n' else pagination.previous())
        elif choice == 'r':
            page.refetch()
        elif choice == 'a' and isinstance(page, CrudPage):
            page.open_create()
            submit_form(page)
        elif choice == 'e' and isinstance(page, CrudPage):
            item = pick(page)
            if item is not None:
                page.open_edit(item)
                submit_form(page)
        elif choice == 'd' and isinstance(page, CrudPage):
            item = pick(page)
            if item is not None and ask(f"Delete {page.item_label(item)}? (y/n)", "n").lower() == 'y':
                page.handle_delete(item)
        elif extra is None or not extra(choice):
            print("Invalid choice. Please try again.")

def status_actions(page) -> Actions:
    def handle(choice: str) -> bool:
        if choice != 't':
            return False
        item = pick(page)
        if item is not None:
            page.change_status(item, ask("Status (1=Hoạt động, 0=Không hoạt động)", "1"))
        return True
    return "[t] change status", handle

def users_actions(page) -> Actions:
    def handle(choice: str) -> bool:
        if choice not in ('l', 'u', 'w'):
            return False
        user = pick(page)
        if user is None:
            return True
        if choice == 'w':
            page.reset_password(user, getpass("New password: "))
        else:
            page.set_locked(user, choice == 'l')
        return True
    return "[l] lock  [u] unlock  [w] reset password", handle

def balance_actions(page) -> Actions:
    def handle(choice: str) -> bool:
        if choice != 'c':
            return False
        user = pick(page)
        if user is None:
            return True
        page.select_user(user)
        page.set_value("amount", ask("Số tiền"))
        page.set_value("operation", ask("Thao tác (1=Cộng tiền, -1=Trừ tiền)", "1"))
        page.set_value("reason", ask("Lý do"))
        page.submit()
        return True
    return "[c] change balance", handle

def orders_actions(page) -> Actions:
    def handle(choice: str) -> bool:
        if choice not in ('x', 'k'):
            return False
        order = pick(page)
        if order is None:
            return True
        if choice == 'x':
            if not page.open_setup(order):
                print("❌ This order does not need setup.")
                return True
            form = page.setup_form
            if order.type == "vps":
                form.set_value("ip", ask("IP"))
                form.set_value("username", ask("Username"))
                form.set_value("password", getpass("Password: "))
            else:
                form.set_value("proxies", ask("Proxies"))
                form.set_value("expiredAt", ask("Expired at (YYYY-MM-DD)"))
            form.submit()
        else:
            if not page.open_api_key(order):
                print("❌ Only tool orders have an API key.")
                return True
            page.api_key_form.api_key = ask("API key", page.api_key_form.api_key)
            page.api_key_form.submit()
        return True
    return "[x] setup  [k] change API key", handle

def transactions_actions(page) -> Actions:
    def handle(choice: str) -> bool:
        if choice != 'v':
            return False
        tx = pick(page)
        if tx is not None and page.show_detail(tx.id):
            print(render_lines("Chi tiết giao dịch", page.detail_rows()))
        return True
    return "[v] view detail", handle

def dashboard_flow(page) -> None:
    print()
    print(render_lines(page.title, page.stats()))
    print(render_lines(f"Người dùng mới {page.year}", page.new_users_chart()))
    print(render_lines(f"Doanh thu {page.year}", page.revenue_chart()))

def settings_flow(page) -> None:
    print("\n1) Cập nhật thông tin\n2) Đổi mật khẩu\n3) Back")
    choice = input("Enter your choice: ").strip()
    if choice == '1':
        page.reset_profile()
        for name in ("fullname", "email", "phone"):
            page.profile_data[name] = ask(name, page.profile_data[name])
        page.update_profile()
    elif choice == '2':
        page.password_data["currentPassword"] = getpass("Current password: ")
        page.password_data["newPassword"] = getpass("New password: ")
        page.password_data["confirmPassword"] = getpass("Confirm new password: ")
        page.change_password()
    else:
        return
    print(f"{'❌' if page.is_error else '✅'} {page.message}")

def login_flow(router: Router) -> bool:
    route = router.navigate("/login")
    if route.page is None or route.path != "/login":
        return True
    page = route.page
    print(f"--- {page.title} ---")
    print(page.description)
    for _ in range(3):
        email = input("Email: ").strip()
        password = getpass("Password: ")
        if page.submit(email, password):
            print("✅ Đăng nhập thành công")
            return True
        print(f"❌ {page.error}")
    return False

PAGE_ACTIONS = {
    "/users": users_actions,
    "/user-balance": balance_actions,
    "/tools": status_actions,
    "/vps": status_actions,
    "/proxies": status_actions,
    "/orders": orders_actions,
    "/transactions": transactions_actions,
}

def open_path(router: Router, path: str) -> None:
    route = router.navigate(path)
    page = route.page
    if route.path == "/login":
        login_flow(router)
        return
    if path == "/":
        dashboard_flow(page)
    elif path == "/settings":
        settings_flow(page)
    elif isinstance(page, ListPage):
        actions = PAGE_ACTIONS.get(path)
        list_flow(page, actions(page) if actions else None)
    else:
        print(f"❌ {page.title}")

def print_main_menu(router: Router) -> None:
    user = router.session.user or {}
    print("\n--- Shop Admin ---")
    print(f"Signed in as: {user.get('username') or user.get('email') or 'N/A'}")
    for key, _, label in MENU:
        print(f"{key}) {label}")
    print("10) Logout")
    print("11) Exit")

def main() -> None:
    config = get_config()
    setup_structured_logging(config.monitoring.log_level)
    initialize_container(config)

    notifier = Notifier(listener=print_toast)
    router = build_router(get_container(), notifier, config.api.default_page_size)
    auth_service = get_container().get('auth_service')

    try:
        if not login_flow(router):
            sys.exit(1)

        routes = {key: path for key, path, _ in MENU}
        while True:
            print_main_menu(router)
            try:
                choice = input("Enter your choice: ").strip()
            except KeyboardInterrupt:
                print("\n\nGoodbye!")
                sys.exit(0)

            if choice in routes:
                try:
                    open_path(router, routes[choice])
                except ShopAdminError as e:
                    print(f"❌ {e}")
            elif choice == '10':
                auth_service.logout()
                print("✅ Đã đăng xuất")
                if not login_flow(router):
                    break
            elif choice == '11':
                print("Goodbye!")
                break
            else:
                print("Invalid choice. Please try again.")
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)
    finally:
        cleanup_container()

if __name__ == "__main__":
    main()
