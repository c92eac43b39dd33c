from typing import Any

from config.constants import Messages
from core.exceptions import NotFoundError, ValidationError
from core.logging_config import log_function_call
from data.models import Order, Transaction
from service.base_service import QueryService

class OrderService(QueryService):
    """Order listing plus the provisioning steps an admin performs."""

    resource = "orders"
    model = Order

    @log_function_call
    def setup_vps(self, order_id: str, ip: str, username: str, password: str) -> Any:
        result = self.api.setup_vps(order_id, ip, username, password)
        self.invalidate()
        return result

    @log_function_call
    def setup_proxy(self, order_id: str, proxies: str, expired_at: str) -> Any:
        if not expired_at:
            raise ValidationError(Messages.EXPIRED_AT_REQUIRED, field="expiredAt")
        result = self.api.setup_proxy(order_id, proxies, expired_at)
        self.invalidate()
        return result

    @log_function_call
    def change_tool_api_key(self, order_id: str, api_key: str) -> Any:
        result = self.api.change_tool_api_key(order_id, api_key)
        self.invalidate()
        return result

class TransactionService(QueryService):
    """Read-only balance history."""

    resource = "transactions"
    model = Transaction

    def detail(self, transaction_id: str) -> Transaction:
        transaction = self._to_model(self.api.detail(transaction_id))
        if transaction is None:
            raise NotFoundError(self.resource, transaction_id)
        return transaction
