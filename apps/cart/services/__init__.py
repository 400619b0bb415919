"""
Cart services module.

All services are exported from this module to maintain backward compatibility.
"""
from .cart_service import CartService, clamp_quantity

__all__ = [
    'CartService',
    'clamp_quantity',
]
