"""
Order serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .order_serializers import (
    OrderItemSerializer, OrderListSerializer, OrderSerializer,
    CheckoutSerializer, OrderStatusSerializer, OrderCancelSerializer,
)

__all__ = [
    'OrderItemSerializer',
    'OrderListSerializer',
    'OrderSerializer',
    'CheckoutSerializer',
    'OrderStatusSerializer',
    'OrderCancelSerializer',
]
