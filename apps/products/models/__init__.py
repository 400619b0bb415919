"""
Product models module.

All models are exported from this module to maintain backward compatibility.
"""
from .category import Category
from .product import Product
from .variant import ProductVariant
from .product_image import ProductImage

__all__ = [
    'Category',
    'Product',
    'ProductVariant',
    'ProductImage',
]
