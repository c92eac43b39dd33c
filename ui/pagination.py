from typing import Callable, Optional

from config.constants import Messages

class Pagination:
    """
    Page navigation state for a list.

    Inputs are sanitized the way the list footer always has: page and
    total_pages are at least 1, total at least 0, items_per_page at least 1.
    """

    def __init__(self, current_page: int, total_pages: int, total_items: int,
                 items_per_page: int, on_page_change: Optional[Callable[[int], None]] = None):
        self.current_page = max(1, int(current_page or 1))
        self.total_pages = max(1, int(total_pages or 1))
        self.total_items = max(0, int(total_items or 0))
        self.items_per_page = max(1, int(items_per_page or 10))
        self.on_page_change = on_page_change

    def clamp(self, page: int) -> int:
        return min(self.total_pages, max(1, int(page)))

    @property
    def start_index(self) -> int:
        if self.total_items == 0:
            return 0
        return (self.current_page - 1) * self.items_per_page + 1

    @property
    def end_index(self) -> int:
        return min(self.current_page * self.items_per_page, self.total_items)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def first(self) -> int:
        return 1

    def previous(self) -> int:
        return self.clamp(self.current_page - 1)

    def next(self) -> int:
        return self.clamp(self.current_page + 1)

    def last(self) -> int:
        return self.total_pages

    def go_to(self, page: int) -> int:
        target = self.clamp(page)
        if self.on_page_change:
            self.on_page_change(target)
        return target

    def summary(self) -> str:
        return Messages.PAGE_SUMMARY.format(start=self.start_index, end=self.end_index,
                                            total=self.total_items)

    def position(self) -> str:
        return Messages.PAGE_POSITION.format(page=self.current_page, total_pages=self.total_pages)

    @classmethod
    def from_meta(cls, meta, on_page_change: Optional[Callable[[int], None]] = None) -> 'Pagination':
        return cls(meta.page, meta.total_pages, meta.total, meta.limit, on_page_change)
