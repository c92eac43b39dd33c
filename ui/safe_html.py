"""
HTML sanitizing for rich-text fields (tool descriptions) before display.
"""

from html import unescape
import re

_SCRIPT_TAGS = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_ONCLICK = re.compile(r"""onclick=["'][^"']*["']""", re.IGNORECASE)
_ONERROR = re.compile(r"""onerror=["'][^"']*["']""", re.IGNORECASE)
_JAVASCRIPT_URL = re.compile(r"javascript:", re.IGNORECASE)
_TAGS = re.compile(r"<[^>]+>")
_BLOCK_ENDS = re.compile(r"</(p|div|li|h[1-6])>|<br\s*/?>", re.IGNORECASE)

def sanitize_html(html: str) -> str:
    """Strip script tags, onclick/onerror attributes and javascript: URLs."""
    if not html:
        return ""
    clean = _SCRIPT_TAGS.sub("", html)
    clean = _ONCLICK.sub("", clean)
    clean = _ONERROR.sub("", clean)
    return _JAVASCRIPT_URL.sub("", clean)

def html_to_text(html: str) -> str:
    """Plain-text rendering of sanitized HTML, one line per block."""
    text = _BLOCK_ENDS.sub("\n", sanitize_html(html))
    text = unescape(_TAGS.sub("", text)).replace("\xa0", " ")
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)

class SafeHtml:
    def __init__(self, html: str):
        self.html = sanitize_html(html or "")

    def text(self) -> str:
        return html_to_text(self.html)

    def __str__(self) -> str:
        return self.html
