"""
Orders services package.

- OrderService: order creation (the transaction coordinator)
- OrderStatusService: status transitions and completion side effects
- KitchenService: read projections for the kitchen monitor and dashboards
"""

from .order_service import OrderService, OrderResult
from .status_service import OrderStatusService, StatusChangeResult
from .kitchen_service import KitchenService

__all__ = [
    'OrderService',
    'OrderResult',
    'OrderStatusService',
    'StatusChangeResult',
    'KitchenService',
]
