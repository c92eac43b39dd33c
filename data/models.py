from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from core.types import EntityId, OrderStatus, OrderType

def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default

def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)

@dataclass
class UserSummary:
    """User as embedded in orders and transactions."""
    id: EntityId
    fullname: str = ""
    email: str = ""
    code: str = ""

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> 'UserSummary':
        data = data or {}
        return cls(
            id=str(data.get("id", "")),
            fullname=data.get("fullname") or data.get("username") or "",
            email=data.get("email") or "",
            code=data.get("code") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fullname": self.fullname, "email": self.email, "code": self.code}

@dataclass
class User:
    id: EntityId
    fullname: str
    email: str
    phone: Optional[str] = None
    role: Any = "user"
    status: str = "active"
    is_locked: bool = False
    account_balance: float = 0
    code: str = ""
    created_at: Optional[str] = None

    @property
    def username(self) -> str:
        return self.fullname

    @property
    def is_admin(self) -> bool:
        # role is "admin"/"user" on some backends and 1/0 on others
        return self.role in ("admin", 1, "1")

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'User':
        is_locked = data.get("isLocked")
        if is_locked is None:
            is_locked = data.get("status") in ("inactive", "locked")
        return cls(
            id=str(data.get("id", "")),
            fullname=data.get("fullname") or data.get("username") or "",
            email=data.get("email") or "",
            phone=data.get("phone"),
            role=data.get("role", "user"),
            status=data.get("status") or ("locked" if is_locked else "active"),
            is_locked=_flag(is_locked),
            account_balance=_float(data.get("accountBalance")),
            code=data.get("code") or "",
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "fullname": self.fullname,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "status": self.status,
            "isLocked": int(self.is_locked),
            "accountBalance": self.account_balance,
            "code": self.code,
            "createdAt": self.created_at,
        }

@dataclass
class ToolPlan:
    name: str
    price: int = 0
    duration: int = 0  # days, -1 means permanent
    id: Optional[EntityId] = None

    @property
    def is_permanent(self) -> bool:
        return self.duration == -1

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ToolPlan':
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            price=_int(data.get("price")),
            duration=_int(data.get("duration")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "price": self.price, "duration": self.duration}

@dataclass
class ToolImage:
    id: EntityId
    file_url: str = ""

    @classmethod
    def from_api(cls, data: Any) -> 'ToolImage':
        if isinstance(data, dict):
            return cls(id=str(data.get("id", "")), file_url=data.get("fileUrl") or "")
        return cls(id=str(data))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "fileUrl": self.file_url}

@dataclass
class Tool:
    id: EntityId
    name: str
    code: str = ""
    description: Optional[str] = None
    demo: Optional[str] = None
    link_download: Optional[str] = None
    slug: str = ""
    sold_quantity: int = 0
    view_count: int = 0
    status: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    plans: List[ToolPlan] = field(default_factory=list)
    images: List[ToolImage] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Tool':
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            code=data.get("code") or "",
            description=data.get("description"),
            demo=data.get("demo"),
            link_download=data.get("linkDownload"),
            slug=data.get("slug") or "",
            sold_quantity=_int(data.get("soldQuantity")),
            view_count=_int(data.get("viewCount")),
            status=_int(data.get("status")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            plans=[ToolPlan.from_api(p) for p in data.get("plans") or []],
            images=[ToolImage.from_api(i) for i in data.get("images") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "demo": self.demo,
            "linkDownload": self.link_download,
            "slug": self.slug,
            "soldQuantity": self.sold_quantity,
            "viewCount": self.view_count,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "plans": [p.to_dict() for p in self.plans],
            "images": [i.to_dict() for i in self.images],
        }

@dataclass
class Vps:
    id: EntityId
    name: str
    description: Optional[str] = None
    ram: int = 0
    disk: int = 0
    cpu: int = 0
    bandwidth: int = 0
    location: Optional[str] = None
    os: Optional[str] = None
    price: float = 0
    tags: List[str] = field(default_factory=list)
    status: int = 0
    sold_quantity: int = 0
    view_count: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Vps':
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            description=data.get("description"),
            ram=_int(data.get("ram")),
            disk=_int(data.get("disk")),
            cpu=_int(data.get("cpu")),
            bandwidth=_int(data.get("bandwidth")),
            location=data.get("location"),
            os=data.get("os"),
            price=_float(data.get("price")),
            tags=list(data.get("tags") or []),
            status=_int(data.get("status")),
            sold_quantity=_int(data.get("soldQuantity")),
            view_count=_int(data.get("viewCount")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "ram": self.ram,
            "disk": self.disk,
            "cpu": self.cpu,
            "bandwidth": self.bandwidth,
            "location": self.location,
            "os": self.os,
            "price": self.price,
            "tags": list(self.tags),
            "status": self.status,
            "soldQuantity": self.sold_quantity,
            "viewCount": self.view_count,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

@dataclass
class Proxy:
    id: EntityId
    name: str
    description: str = ""
    price: float = 0
    inventory: int = 0
    sold_quantity: int = 0
    view_count: int = 0
    status: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Proxy':
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            description=data.get("description") or "",
            price=_float(data.get("price")),
            inventory=_int(data.get("inventory")),
            sold_quantity=_int(data.get("soldQuantity")),
            view_count=_int(data.get("viewCount")),
            status=_int(data.get("status")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "inventory": self.inventory,
            "soldQuantity": self.sold_quantity,
            "viewCount": self.view_count,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

@dataclass
class VpsOrder:
    ip: str = ""
    username: str = ""
    password: str = ""
    expired_at: Optional[str] = None

@dataclass
class ProxyOrder:
    proxies: str = ""
    expired_at: Optional[str] = None

@dataclass
class ToolOrder:
    api_key: Optional[str] = None
    expired_at: Optional[str] = None
    name: str = ""
    price: float = 0
    duration: int = 0

@dataclass
class Order:
    id: EntityId
    code: str
    user: UserSummary
    type: str
    total_price: float = 0
    status: str = OrderStatus.SETUP.value
    note: str = ""
    product_name: str = ""
    vps_order: Optional[VpsOrder] = None
    proxy_order: Optional[ProxyOrder] = None
    tool_order: Optional[ToolOrder] = None
    created_at: Optional[str] = None

    @property
    def expired_at(self) -> Optional[str]:
        sub_orders = {
            OrderType.TOOL.value: self.tool_order,
            OrderType.PROXY.value: self.proxy_order,
            OrderType.VPS.value: self.vps_order,
        }
        sub_order = sub_orders.get(self.type)
        return sub_order.expired_at if sub_order else None

    @property
    def needs_setup(self) -> bool:
        """VPS and proxy orders wait in "setup" until an admin provisions them."""
        return (self.type in (OrderType.VPS.value, OrderType.PROXY.value)
                and self.status == OrderStatus.SETUP.value)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Order':
        vps_order = data.get("vpsOrder")
        proxy_order = data.get("proxyOrder")
        tool_order = data.get("toolOrder")
        order_type = data.get("type") or ""
        product = data.get(order_type) if order_type else None
        return cls(
            id=str(data.get("id", "")),
            code=data.get("code") or "",
            user=UserSummary.from_api(data.get("user")),
            type=order_type,
            total_price=_float(data.get("totalPrice")),
            status=data.get("status") or OrderStatus.SETUP.value,
            note=data.get("note") or "",
            product_name=(product or {}).get("name", "") if isinstance(product, dict) else "",
            vps_order=VpsOrder(
                ip=vps_order.get("ip") or "",
                username=vps_order.get("username") or "",
                password=vps_order.get("password") or "",
                expired_at=vps_order.get("expiredAt"),
            ) if vps_order else None,
            proxy_order=ProxyOrder(
                proxies=proxy_order.get("proxies") or "",
                expired_at=proxy_order.get("expiredAt"),
            ) if proxy_order else None,
            tool_order=ToolOrder(
                api_key=tool_order.get("apiKey"),
                expired_at=tool_order.get("expiredAt"),
                name=tool_order.get("name") or "",
                price=_float(tool_order.get("price")),
                duration=_int(tool_order.get("duration")),
            ) if tool_order else None,
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "user": self.user.to_dict(),
            "type": self.type,
            "totalPrice": self.total_price,
            "status": self.status,
            "note": self.note,
            "expiredAt": self.expired_at,
            "createdAt": self.created_at,
        }

@dataclass
class Transaction:
    id: EntityId
    code: str
    amount: float
    balance_before: float = 0
    balance_after: float = 0
    action: str = ""
    note: str = ""
    user: UserSummary = field(default_factory=lambda: UserSummary(id=""))
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Transaction':
        return cls(
            id=str(data.get("id", "")),
            code=data.get("code") or "",
            amount=_float(data.get("amount")),
            balance_before=_float(data.get("balanceBefore")),
            balance_after=_float(data.get("balanceAfter")),
            action=data.get("action") or "",
            note=data.get("note") or "",
            user=UserSummary.from_api(data.get("user")),
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "code": self.code,
            "amount": self.amount,
            "balanceBefore": self.balance_before,
            "balanceAfter": self.balance_after,
            "action": self.action,
            "note": self.note,
            "user": self.user.to_dict(),
            "createdAt": self.created_at,
        }

@dataclass
class DashboardSummary:
    total_user: int = 0
    total_tool: int = 0
    total_vps: int = 0
    total_proxy: int = 0

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> 'DashboardSummary':
        data = data or {}
        return cls(
            total_user=_int(data.get("totalUser")),
            total_tool=_int(data.get("totalTool")),
            total_vps=_int(data.get("totalVps")),
            total_proxy=_int(data.get("totalProxy")),
        )

@dataclass
class Timeline:
    """Per-month totals for one year, always twelve points."""
    year: int
    points: List[int] = field(default_factory=lambda: [0] * 12)

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]], year: int) -> 'Timeline':
        data = data or {}
        points = [0] * 12
        for entry in data.get("timelines") or []:
            month = _int(entry.get("month"))
            if 1 <= month <= 12:
                points[month - 1] = entry.get("total") or 0
        return cls(year=_int(data.get("year"), year), points=points)

    def labels(self) -> List[str]:
        return [f"T{month}" for month in range(1, 13)]

@dataclass
class UploadedFile:
    id: EntityId
    file_url: str = ""
    file_name: str = ""
