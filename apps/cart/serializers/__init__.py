"""
Cart serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .cart_serializers import (
    CartItemSerializer, CartAddSerializer, CartUpdateSerializer, CartMergeSerializer
)

__all__ = [
    'CartItemSerializer',
    'CartAddSerializer',
    'CartUpdateSerializer',
    'CartMergeSerializer',
]
