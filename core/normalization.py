"""
Response-shape normalization.

The backend has wrapped list payloads differently over time; every list
query funnels through normalize_list so callers always receive a
ListResult with a complete PageMeta.
"""

import math
from typing import Any, Callable, Dict, Optional, Tuple

from config.constants import Messages, Pagination
from core.types import EnvelopeKind, ListResult, PageMeta

_ITEMS_BY_DEPTH = {
    0: EnvelopeKind.ITEMS,
    1: EnvelopeKind.NESTED,
    2: EnvelopeKind.DOUBLY_NESTED,
}
_MAX_DEPTH = 2

def _peel(body: Any) -> Tuple[EnvelopeKind, Any]:
    """Walk down `data` wrappers until items, an array, or a dead end."""
    current = body
    depth = 0
    while True:
        if isinstance(current, list):
            return EnvelopeKind.BARE_ARRAY, current
        if not isinstance(current, dict) or not current:
            return EnvelopeKind.EMPTY, None
        if "items" in current:
            return _ITEMS_BY_DEPTH[depth], current
        if "data" in current and depth < _MAX_DEPTH:
            if current["data"] is None:
                return EnvelopeKind.EMPTY, None
            current = current["data"]
            depth += 1
            continue
        return EnvelopeKind.OBJECT, current

def classify_envelope(body: Any) -> EnvelopeKind:
    return _peel(body)[0]

def _coalesce(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None

def build_meta(raw_meta: Optional[Dict[str, Any]], item_count: int,
               page: Optional[int] = None, limit: Optional[int] = None) -> PageMeta:
    """Fill whatever the backend left out of the pagination meta."""
    raw_meta = raw_meta or {}
    total = int(_coalesce(raw_meta.get("total"), item_count))
    page = int(_coalesce(raw_meta.get("page"), page, Pagination.DEFAULT_PAGE))
    limit = int(_coalesce(raw_meta.get("limit"), limit, Pagination.DEFAULT_LIMIT))
    total_pages = raw_meta.get("totalPages")
    if total_pages is None:
        total_pages = math.ceil(total / max(limit, 1))
    return PageMeta(total=total, page=page, limit=limit, total_pages=int(total_pages))

def empty_list(page: Optional[int] = None, limit: Optional[int] = None) -> ListResult:
    """Result used when a list query fails: an empty first page."""
    return ListResult(
        items=[],
        meta=PageMeta(
            total=0,
            page=page or Pagination.DEFAULT_PAGE,
            limit=limit or Pagination.DEFAULT_LIMIT,
            total_pages=1,
        ),
    )

def normalize_list(body: Any, page: Optional[int] = None, limit: Optional[int] = None,
                   mapper: Optional[Callable[[Dict[str, Any]], Any]] = None) -> ListResult:
    """
    Convert any observed list response into ListResult.

    Nested `items` win; a bare array is used as-is; anything else
    (single object, null) becomes an empty list.
    """
    kind, payload = _peel(body)
    raw_meta: Dict[str, Any] = {}

    if kind in (EnvelopeKind.ITEMS, EnvelopeKind.NESTED, EnvelopeKind.DOUBLY_NESTED):
        raw_items = payload.get("items")
        items = list(raw_items) if isinstance(raw_items, list) else []
        if isinstance(payload.get("meta"), dict):
            raw_meta = payload["meta"]
    elif kind is EnvelopeKind.BARE_ARRAY:
        items = list(payload)
    else:
        items = []

    meta = build_meta(raw_meta, len(items), page, limit)
    if mapper is not None:
        items = [mapper(item) for item in items if isinstance(item, dict)]
    return ListResult(items=items, meta=meta)

def unwrap_envelope(body: Any) -> Any:
    """Strip exactly one `{data: ...}` level, as the HTTP client does for every response."""
    if isinstance(body, dict) and body.get("data") not in (None, "", 0, False):
        return body["data"]
    return body

def unwrap_entity(body: Any) -> Optional[Dict[str, Any]]:
    """Find the single record in a create/update response."""
    current = body
    for _ in range(_MAX_DEPTH + 1):
        if not isinstance(current, dict):
            break
        if "id" in current:
            return current
        items = current.get("items")
        if isinstance(items, list) and items and isinstance(items[0], dict):
            return items[0]
        current = current.get("data")
    return None

def extract_error_message(error: BaseException, fallback: str = Messages.GENERIC_ERROR) -> str:
    """Best-effort human message: response message, then error, then the exception text."""
    payload = getattr(error, "response_data", None)
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, list) and value:
                return ", ".join(str(v) for v in value)
            if isinstance(value, str) and value:
                return value
    message = getattr(error, "message", None) or str(error)
    return message or fallback
