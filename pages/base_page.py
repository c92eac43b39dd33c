"""
Page controllers: the state and side effects behind each admin screen.

A page owns its search keyword, current page, dialog state and editing
target. Mutations toast on success and close the dialog; on failure they
toast the extracted error message and leave the dialog open.
"""

from typing import Any, Callable, Dict, List, Optional

from config.constants import Messages
from core.logging_config import LoggerMixin
from core.normalization import extract_error_message
from core.types import ListResult
from service.base_service import is_active_value
from ui.data_table import Column, DataTable
from ui.entity_form import EntityForm, FormField
from ui.notifications import Notifier
from ui.pagination import Pagination

class Page(LoggerMixin):
    path = ""
    title = ""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

class ListPage(Page):
    """Paginated, server-searched list of one resource."""

    search_key: Optional[str] = None
    search_placeholder = Messages.SEARCH_PLACEHOLDER

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(notifier)
        self.service = service
        self.page_size = page_size
        self.keyword = ""
        self.current_page = 1
        self.result: ListResult = ListResult()

    def load(self, force: bool = False) -> ListResult:
        self.result = self.service.list(keyword=self.keyword or None, page=self.current_page,
                                        limit=self.page_size, force=force)
        return self.result

    def refetch(self) -> ListResult:
        return self.load(force=True)

    @property
    def items(self) -> List[Any]:
        return self.result.items

    def search(self, keyword: str) -> None:
        self.keyword = keyword or ""
        self.current_page = 1
        self.load()

    def change_page(self, page: int) -> None:
        self.current_page = page
        self.load()

    def columns(self) -> List[Column]:
        raise NotImplementedError

    def table(self) -> DataTable:
        table = DataTable(self.title, self.items, self.columns(),
                          search_placeholder=self.search_placeholder,
                          search_key=self.search_key, on_search=self.search)
        table.search = self.keyword
        return table

    def pagination(self) -> Optional[Pagination]:
        """Footer controls; hidden while the list is empty."""
        if self.result.meta.total <= 0:
            return None
        return Pagination.from_meta(self.result.meta, on_page_change=self.change_page)

    def _run(self, action: Callable[[], Any], success: str, failure: str) -> bool:
        """Run a mutation with toast side effects; True when it succeeded."""
        try:
            action()
        except Exception as e:
            self.logger.error("Mutation failed", page=self.title, error=str(e))
            self.notifier.error(extract_error_message(e, failure))
            return False
        self.notifier.success(success)
        self.refetch()
        return True

class CrudPage(ListPage):
    """List page with a create/edit dialog and confirmed delete."""

    entity_label = ""

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.is_form_open = False
        self.editing: Optional[Any] = None
        self.form = self.build_form()

    def form_fields(self) -> List[FormField]:
        raise NotImplementedError

    def build_form(self) -> EntityForm:
        return EntityForm(self.form_title(), self.form_fields(), on_submit=self.handle_submit,
                          on_open_change=self.set_form_open)

    def form_title(self) -> str:
        if self.editing is not None:
            return f"Chỉnh sửa {self.entity_label}"
        return f"Thêm {self.entity_label} mới"

    def set_form_open(self, is_open: bool) -> None:
        self.is_form_open = is_open
        self.form.is_open = is_open
        if not is_open:
            self.editing = None

    def open_create(self) -> None:
        self.editing = None
        self.is_form_open = True
        self.form.title = self.form_title()
        self.form.fields = self.form_fields()
        self.form.bind(True, {})

    def open_edit(self, item: Any) -> None:
        self.editing = item
        self.is_form_open = True
        self.form.title = self.form_title()
        self.form.fields = self.form_fields()
        self.form.bind(True, self.to_form_data(item))

    def to_form_data(self, item: Any) -> Dict[str, Any]:
        return item.to_dict() if hasattr(item, "to_dict") else dict(item)

    def to_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def item_label(self, item: Any) -> str:
        return getattr(item, "name", "") or str(getattr(item, "id", ""))

    def table(self) -> DataTable:
        table = super().table()
        table.on_add = self.open_create
        table.on_edit = self.open_edit
        table.on_delete = self.handle_delete
        return table

    def handle_submit(self, data: Dict[str, Any]) -> None:
        """
        on_submit for the dialog. Raises after toasting so the form stays open.
        """
        payload = self.to_payload(data)
        editing = self.editing
        try:
            if editing is not None:
                saved = self.service.update(editing.id, payload)
            else:
                saved = self.service.create(payload)
        except Exception as e:
            action = "cập nhật" if editing is not None else "tạo"
            self.notifier.error(extract_error_message(
                e, f"Có lỗi xảy ra khi {action} {self.entity_label.lower()}"))
            raise

        label = self.item_label(saved) if saved is not None else payload.get("name", "")
        if editing is not None:
            self.notifier.success(f"Đã cập nhật {self.entity_label.lower()} {label} thành công")
        else:
            self.notifier.success(f"Đã tạo {self.entity_label.lower()} {label} thành công")
        self.set_form_open(False)
        self.refetch()

    def handle_delete(self, item: Any) -> bool:
        label = self.item_label(item)
        return self._run(
            lambda: self.service.delete(item.id),
            f"Đã xóa {self.entity_label.lower()} {label} thành công",
            f"Có lỗi xảy ra khi xóa {self.entity_label.lower()} {label}",
        )

class StatusToggle(LoggerMixin):
    """
    Status select for products: "1"/active dispatches activate, anything
    else pause. Re-selecting the current value dispatches nothing.
    """

    def __init__(self, service: Any, notifier: Notifier, entity_label: str,
                 on_changed: Optional[Callable[[], Any]] = None):
        self.service = service
        self.notifier = notifier
        self.entity_label = entity_label
        self.on_changed = on_changed

    def change(self, item: Any, target: Any) -> bool:
        try:
            changed = self.service.change_status(item.id, item.status, target)
        except Exception as e:
            self.logger.error("Status change failed", item_id=item.id, error=str(e))
            self.notifier.error(extract_error_message(
                e, f"Có lỗi xảy ra khi cập nhật trạng thái {self.entity_label.lower()}"))
            return False
        if not changed:
            return False
        verb = "kích hoạt" if is_active_value(target) else "tạm dừng"
        self.notifier.success(f"Đã {verb} {self.entity_label.lower()} {getattr(item, 'name', '')} thành công")
        if self.on_changed:
            self.on_changed()
        return True
