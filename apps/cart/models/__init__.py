"""
Cart models module.

All models are exported from this module to maintain backward compatibility.
"""
from .cart_item import CartItem

__all__ = [
    'CartItem',
]
