"""
Product serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .product_serializers import (
    CategorySerializer, ProductImageSerializer, ProductVariantSerializer,
    ProductListSerializer, ProductDetailSerializer, ProductWriteSerializer,
    InventoryUpdateSerializer, ProductRejectSerializer,
)

__all__ = [
    'CategorySerializer',
    'ProductImageSerializer',
    'ProductVariantSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductWriteSerializer',
    'InventoryUpdateSerializer',
    'ProductRejectSerializer',
]
