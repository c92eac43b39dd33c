# Data module exports
from .models import (
    User, UserSummary, Tool, ToolPlan, ToolImage, Vps, Proxy,
    Order, VpsOrder, ProxyOrder, ToolOrder, Transaction,
    DashboardSummary, Timeline, UploadedFile
)
from .storage import MockStorage

__all__ = [
    'User',
    'UserSummary',
    'Tool',
    'ToolPlan',
    'ToolImage',
    'Vps',
    'Proxy',
    'Order',
    'VpsOrder',
    'ProxyOrder',
    'ToolOrder',
    'Transaction',
    'DashboardSummary',
    'Timeline',
    'UploadedFile',
    'MockStorage'
]
