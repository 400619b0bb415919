"""
Cart views module.

All views are exported from this module to maintain backward compatibility.
"""
from .cart_views import CartView, CartItemView, CartClearView, CartMergeView

__all__ = [
    'CartView',
    'CartItemView',
    'CartClearView',
    'CartMergeView',
]
