"""
Type definitions shared across the Shop Admin client.
"""

from typing import Any, Dict, Generic, List, TypeVar
from dataclasses import dataclass, field
from enum import Enum

EntityId = str
ApiPayload = Dict[str, Any]

T = TypeVar('T')

class EnvelopeKind(Enum):
    """Shapes a list response body has been observed to take."""
    ITEMS = "items"                  # {items, meta}
    NESTED = "nested"                # {data: {items, meta}}
    DOUBLY_NESTED = "doubly_nested"  # {data: {data: {items, meta}}}
    BARE_ARRAY = "bare_array"        # [...]
    OBJECT = "object"                # a single object without items
    EMPTY = "empty"                  # null / empty body

class EntityStatus(Enum):
    """Binary status of sellable products (tools, VPS, proxies)."""
    INACTIVE = 0
    ACTIVE = 1

class OrderType(Enum):
    VPS = "vps"
    TOOL = "tool"
    PROXY = "proxy"

class OrderStatus(Enum):
    SETUP = "setup"
    ACTIVE = "active"
    CANCELLED = "cancelled"

class TransactionAction(Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"

class BalanceOperation(Enum):
    ADD = 1
    SUBTRACT = -1

@dataclass
class PageMeta:
    """Pagination metadata, always fully populated."""
    total: int
    page: int
    limit: int
    total_pages: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }

@dataclass
class ListResult(Generic[T]):
    """Canonical result of every list query."""
    items: List[T] = field(default_factory=list)
    meta: PageMeta = field(default_factory=lambda: PageMeta(0, 1, 10, 1))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() if hasattr(item, "to_dict") else item for item in self.items],
            "meta": self.meta.to_dict(),
        }
