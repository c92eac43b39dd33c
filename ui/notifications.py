"""
Toast notifications raised by page controllers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from config.constants import Messages
from core.logging_config import LoggerMixin

class ToastVariant(Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"

@dataclass
class Toast:
    title: str
    description: str = ""
    variant: ToastVariant = ToastVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant is ToastVariant.DESTRUCTIVE

class Notifier(LoggerMixin):
    """Collects toasts and forwards each one to an optional listener (the console prints them)."""

    def __init__(self, listener: Optional[Callable[[Toast], None]] = None):
        self.listener = listener
        self.toasts: List[Toast] = []

    def toast(self, title: str, description: str = "",
              variant: ToastVariant = ToastVariant.DEFAULT) -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self.toasts.append(toast)
        if toast.is_error:
            self.logger.warning("Error toast", title=title, description=description)
        if self.listener:
            self.listener(toast)
        return toast

    def success(self, description: str, title: str = Messages.SUCCESS_TITLE) -> Toast:
        return self.toast(title, description)

    def error(self, description: str, title: str = Messages.ERROR_TITLE) -> Toast:
        return self.toast(title, description, ToastVariant.DESTRUCTIVE)

    @property
    def last(self) -> Optional[Toast]:
        return self.toasts[-1] if self.toasts else None

    def clear(self) -> None:
        self.toasts.clear()
