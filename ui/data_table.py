"""
Generic list table: columns, client-side search, and delete confirmation.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from config.constants import Messages
from core.logging_config import LoggerMixin

T = TypeVar('T')

Accessor = Union[str, Callable[[Any], Any]]

@dataclass
class Column:
    header: str
    accessor: Accessor
    class_name: str = ""

def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)

def resolve_cell(column: Column, item: Any) -> Any:
    """A callable accessor renders whatever it returns; a field name renders as text."""
    if callable(column.accessor):
        return column.accessor(item)
    # falsy values, 0 included, render empty
    return str(_field(item, column.accessor) or "")

@dataclass
class TableView:
    title: str
    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)
    empty: bool = False
    colspan: int = 0

class DataTable(Generic[T], LoggerMixin):
    def __init__(self, title: str, data: List[T], columns: List[Column],
                 on_add: Optional[Callable[[], None]] = None,
                 on_edit: Optional[Callable[[T], None]] = None,
                 on_delete: Optional[Callable[[T], None]] = None,
                 search_placeholder: str = Messages.SEARCH_PLACEHOLDER,
                 search_key: Optional[str] = None,
                 on_search: Optional[Callable[[str], None]] = None):
        self.title = title
        self.data = list(data or [])
        self.columns = columns
        self.on_add = on_add
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.search_placeholder = search_placeholder
        self.search_key = search_key
        self.on_search = on_search
        self.search = ""
        self.pending_delete: Optional[T] = None

    @property
    def has_actions(self) -> bool:
        return self.on_edit is not None or self.on_delete is not None

    def set_search(self, value: str) -> None:
        self.search = value or ""
        if self.on_search:
            self.on_search(self.search)

    @property
    def filtered_data(self) -> List[T]:
        """Local filtering applies only when the parent does not search server-side."""
        if self.search and self.search_key and not self.on_search:
            needle = self.search.lower()
            return [item for item in self.data
                    if needle in str(_field(item, self.search_key)).lower()]
        return self.data

    def add(self) -> None:
        if self.on_add:
            self.on_add()

    def edit(self, item: T) -> None:
        if self.on_edit:
            self.on_edit(item)

    def request_delete(self, item: T) -> None:
        self.pending_delete = item

    def confirm_delete(self) -> bool:
        if self.pending_delete is None or not self.on_delete:
            return False
        item = self.pending_delete
        self.pending_delete = None
        self.on_delete(item)
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def render(self) -> TableView:
        headers = [column.header for column in self.columns]
        if self.has_actions:
            headers.append(Messages.ACTIONS_HEADER)

        items = self.filtered_data
        if not items:
            return TableView(title=self.title, headers=headers, rows=[[Messages.EMPTY_STATE]],
                             empty=True, colspan=len(headers))

        rows = [[resolve_cell(column, item) for column in self.columns] for item in items]
        return TableView(title=self.title, headers=headers, rows=rows)
