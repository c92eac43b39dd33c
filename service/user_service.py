from typing import Any, Dict

from config.constants import Messages
from core.exceptions import ValidationError
from core.logging_config import log_function_call
from core.types import BalanceOperation
from data.models import User
from service.base_service import MutableService

class UserService(MutableService):
    resource = "users"
    model = User

    @log_function_call
    def lock(self, user_id: str) -> None:
        self.api.lock(user_id)
        self.invalidate()

    @log_function_call
    def unlock(self, user_id: str) -> None:
        self.api.unlock(user_id)
        self.invalidate()

    def change_lock(self, user_id: str, is_locked: bool, lock: bool) -> bool:
        """Lock or unlock; nothing is sent when the user is already in that state."""
        if bool(is_locked) == bool(lock):
            return False
        if lock:
            self.lock(user_id)
        else:
            self.unlock(user_id)
        return True

    @log_function_call
    def update_balance(self, user_id: str, amount: float, operation: int, reason: str = "") -> Any:
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValidationError(Messages.AMOUNT_MUST_BE_POSITIVE, field="amount")
        if amount <= 0:
            raise ValidationError(Messages.AMOUNT_MUST_BE_POSITIVE, field="amount")
        operation = int(operation)
        if operation not in (BalanceOperation.ADD.value, BalanceOperation.SUBTRACT.value):
            raise ValidationError("Operation must be 1 (add) or -1 (subtract)", field="operation")

        result = self.api.update_balance(user_id, amount, operation, reason)
        self.invalidate()
        # the transaction list now has a new row
        self.cache.invalidate("transactions")
        return result

    def reset_password(self, user_id: str, password: str) -> Any:
        if not password:
            raise ValidationError(Messages.REQUIRED_FIELD, field="password")
        return self.api.reset_password(user_id, password)

    @staticmethod
    def build_payload(data: Dict[str, Any], include_password: bool = False) -> Dict[str, Any]:
        """Form values to the API's user payload (role as 0/1, empty phone as null)."""
        role = data.get("role", 0)
        payload: Dict[str, Any] = {
            "fullname": (data.get("fullname") or data.get("username") or "").strip(),
            "email": (data.get("email") or "").strip(),
            "phone": (data.get("phone") or "").strip() or None,
            "role": 1 if str(role) in ("1", "admin") else 0,
        }
        if include_password:
            payload["password"] = data.get("password") or ""
        return payload
