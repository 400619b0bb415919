"""
Order views module.

All views are exported from this module to maintain backward compatibility.
"""
from .order_views import (
    OrderListCreateView, OrderDetailView, OrderItemsView, OrderStatusView, OrderCancelView
)

__all__ = [
    'OrderListCreateView',
    'OrderDetailView',
    'OrderItemsView',
    'OrderStatusView',
    'OrderCancelView',
]
