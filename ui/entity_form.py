"""
Dialog form state shared by every create/edit flow.

The form never closes itself: the owning page closes it from its
on_submit handler once the mutation succeeded. When on_submit raises,
the form stays open with the values the admin typed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from config.constants import Messages
from core.logging_config import LoggerMixin

class FieldType(Enum):
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"

@dataclass
class FormField:
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    options: List[Tuple[str, str]] = field(default_factory=list)  # (value, label)
    placeholder: str = ""
    required: bool = False

    @property
    def is_secret(self) -> bool:
        return self.type is FieldType.TEXT and self.name == "password"

    def option_values(self) -> List[str]:
        return [value for value, _ in self.options]

class EntityForm(LoggerMixin):
    def __init__(self, title: str, fields: List[FormField],
                 on_submit: Callable[[Dict[str, Any]], Any],
                 on_open_change: Optional[Callable[[bool], None]] = None,
                 description: str = ""):
        self.title = title
        self.description = description
        self.fields = fields
        self.on_submit = on_submit
        self.on_open_change = on_open_change
        self.is_open = False
        self.is_loading = False
        self.form_data: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.last_error: Optional[BaseException] = None

    def bind(self, is_open: bool, initial_data: Optional[Dict[str, Any]] = None) -> None:
        """Reseed local state whenever the dialog opens or the edited item changes."""
        self.is_open = is_open
        self.form_data = dict(initial_data or {})
        self.errors = {}
        self.last_error = None

    def field(self, name: str) -> Optional[FormField]:
        for form_field in self.fields:
            if form_field.name == name:
                return form_field
        return None

    def set_value(self, name: str, value: Any) -> None:
        self.form_data[name] = value
        self.errors.pop(name, None)

    def value(self, name: str) -> Any:
        return self.form_data.get(name) or ""

    def validate(self) -> bool:
        self.errors = {}
        for form_field in self.fields:
            value = self.form_data.get(form_field.name)
            empty = value is None or str(value).strip() == ""
            if form_field.required and empty:
                self.errors[form_field.name] = Messages.REQUIRED_FIELD
            elif form_field.type is FieldType.SELECT and not empty \
                    and str(value) not in form_field.option_values():
                self.errors[form_field.name] = f"Invalid option: {value}"
            elif form_field.type is FieldType.NUMBER and not empty:
                try:
                    float(value)
                except (TypeError, ValueError):
                    self.errors[form_field.name] = f"{form_field.label} must be a number"
        return not self.errors

    def payload(self) -> Dict[str, Any]:
        return dict(self.form_data)

    def submit(self) -> bool:
        """
        Validate then hand the values to on_submit.

        Returns True when on_submit completed, False when validation failed
        or on_submit raised; in both cases the dialog and its values stay.
        """
        if not self.validate():
            return False

        self.is_loading = True
        self.last_error = None
        try:
            self.on_submit(self.payload())
            return True
        except Exception as e:
            self.last_error = e
            self.logger.error("Form submission error", form=self.title, error=str(e))
            return False
        finally:
            self.is_loading = False

    def cancel(self) -> None:
        if self.on_open_change:
            self.on_open_change(False)
        else:
            self.is_open = False
