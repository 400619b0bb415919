"""
Product services module.

All services are exported from this module to maintain backward compatibility.
"""
from .product_service import ProductService
from .category_service import CategoryService

__all__ = [
    'ProductService',
    'CategoryService',
]
