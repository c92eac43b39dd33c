import html
import re
from typing import Callable, Iterable, Optional

from ui.safe_html import html_to_text

_EMPTY_LISTS = (
    re.compile(r"<ul><li></li></ul>"),
    re.compile(r"<ul><li><br\s*/?></li></ul>"),
)
_WHITESPACE = re.compile(r"\s+")

_INLINE_TAGS = {"bold": "b", "italic": "i", "underline": "u"}

def clean_content(content: str) -> str:
    """Drop empty bullet lists and collapse whitespace."""
    for pattern in _EMPTY_LISTS:
        content = pattern.sub("", content)
    return _WHITESPACE.sub(" ", content).strip()

class RichTextEditor:
    """
    Minimal HTML editor for tool descriptions.

    Content is edited by appending formatted fragments; every change is
    cleaned and pushed to on_change.
    """

    def __init__(self, value: str = "", on_change: Optional[Callable[[str], None]] = None,
                 placeholder: str = ""):
        self.value = value or ""
        self.on_change = on_change
        self.placeholder = placeholder

    def _commit(self, content: str) -> str:
        self.value = clean_content(content)
        if self.on_change:
            self.on_change(self.value)
        return self.value

    def set_html(self, content: str) -> str:
        return self._commit(content or "")

    def insert_text(self, text: str, style: Optional[str] = None) -> str:
        fragment = html.escape(text)
        if style:
            if style not in _INLINE_TAGS:
                raise ValueError(f"Unknown text style: {style}")
            tag = _INLINE_TAGS[style]
            fragment = f"<{tag}>{fragment}</{tag}>"
        return self._commit(f"{self.value} {fragment}" if self.value else fragment)

    def insert_line_break(self) -> str:
        return self._commit(f"{self.value}<br><br>")

    def insert_list(self, items: Iterable[str]) -> str:
        entries = "".join(f"<li>{html.escape(item)}</li>" for item in items if item.strip())
        return self._commit(f"{self.value}<ul>{entries}</ul>" if entries else self.value)

    def clear_formatting(self) -> str:
        return self._commit(html.escape(html_to_text(self.value).replace("\n", " ")))

    @property
    def is_empty(self) -> bool:
        return not html_to_text(self.value)
