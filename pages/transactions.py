from typing import Any, List, Optional, Tuple

from core.normalization import extract_error_message
from core.types import TransactionAction
from data.models import Transaction
from pages.base_page import ListPage
from ui.data_table import Column
from ui.formatting import format_vnd, parse_datetime
from ui.notifications import Notifier

UNKNOWN = "Không xác định"

ACTION_LABELS = {
    TransactionAction.DEPOSIT.value: "Nạp tiền",
    TransactionAction.WITHDRAW.value: "Rút tiền",
}

def format_datetime(value: Optional[str]) -> str:
    parsed = parse_datetime(value)
    if parsed is None:
        return UNKNOWN
    return parsed.strftime("%d/%m/%Y %H:%M")

class TransactionsPage(ListPage):
    """Read-only balance history with a detail view."""

    path = "/transactions"
    title = "Danh sách giao dịch"
    search_key = "code"
    search_placeholder = "Tìm kiếm giao dịch..."

    def __init__(self, service: Any, notifier: Notifier, page_size: int = 10):
        super().__init__(service, notifier, page_size)
        self.selected: Optional[Transaction] = None

    def columns(self) -> List[Column]:
        return [
            Column("ID", "id"),
            Column("Mã giao dịch", "code", "font-mono"),
            Column("Người dùng", lambda tx: tx.user.fullname or UNKNOWN),
            Column("Email", lambda tx: tx.user.email or UNKNOWN),
            Column("Số tiền", lambda tx: format_vnd(tx.amount)),
            Column("Hành động", lambda tx: ACTION_LABELS.get(tx.action, UNKNOWN)),
            Column("Ghi chú", "note"),
            Column("Thời gian", lambda tx: format_datetime(tx.created_at)),
        ]

    def show_detail(self, transaction_id: str) -> Optional[Transaction]:
        try:
            self.selected = self.service.detail(transaction_id)
        except Exception as e:
            self.logger.error("Transaction detail failed", transaction_id=transaction_id, error=str(e))
            self.notifier.error(extract_error_message(e, "Không tìm thấy giao dịch"))
            self.selected = None
        return self.selected

    def detail_rows(self) -> List[Tuple[str, Any]]:
        tx = self.selected
        if tx is None:
            return []
        return [
            ("Mã giao dịch", tx.code),
            ("Người dùng", tx.user.fullname or UNKNOWN),
            ("Số tiền", format_vnd(tx.amount)),
            ("Số dư trước", format_vnd(tx.balance_before)),
            ("Số dư sau", format_vnd(tx.balance_after)),
            ("Hành động", ACTION_LABELS.get(tx.action, UNKNOWN)),
            ("Ghi chú", tx.note),
            ("Thời gian", format_datetime(tx.created_at)),
        ]
