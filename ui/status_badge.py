from dataclasses import dataclass
from typing import Any

@dataclass(frozen=True)
class BadgeStyle:
    label: str
    color: str

STATUS_STYLES = {
    "online": BadgeStyle("Online", "green"),
    "offline": BadgeStyle("Offline", "red"),
    "active": BadgeStyle("Hoạt động", "green"),
    "inactive": BadgeStyle("Không hoạt động", "gray"),
    "pending": BadgeStyle("Chờ xử lý", "yellow"),
}

# numeric product status -> badge key
NUMERIC_STATUS = {0: "inactive", 1: "active"}

def status_key(status: Any) -> str:
    if isinstance(status, bool):
        return "active" if status else "inactive"
    if isinstance(status, int):
        return NUMERIC_STATUS.get(status, "offline")
    if isinstance(status, str) and status.strip().lstrip("-").isdigit():
        return NUMERIC_STATUS.get(int(status), "offline")
    return str(status)

class StatusBadge:
    """Label and color for a status; unknown statuses render as Offline."""

    def __init__(self, status: Any):
        self.status = status
        self.key = status_key(status)
        self.style = STATUS_STYLES.get(self.key, STATUS_STYLES["offline"])

    @property
    def label(self) -> str:
        return self.style.label

    @property
    def color(self) -> str:
        return self.style.color

    def __str__(self) -> str:
        return self.label
