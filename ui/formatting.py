from datetime import datetime
from typing import Any, Optional

def format_vnd(amount: Any) -> str:
    """1200000 -> '1.200.000 ₫' (vi-VN currency style)."""
    try:
        value = round(float(amount or 0))
    except (TypeError, ValueError):
        value = 0
    return f"{value:,}".replace(",", ".") + " ₫"

def parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None

def format_date(value: Optional[str], missing: str = "N/A") -> str:
    """ISO timestamp -> 'd/m/yyyy'."""
    parsed = parse_datetime(value)
    if parsed is None:
        return missing
    return f"{parsed.day}/{parsed.month}/{parsed.year}"

def to_number(value: Any) -> Any:
    """Form input to int when whole, float otherwise; unparsable input is 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number
