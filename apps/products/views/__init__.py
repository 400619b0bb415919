"""
Product views module.

All views are exported from this module to maintain backward compatibility.
"""
from .product_views import ProductListView, ProductDetailView
from .seller_product_views import (
    SellerProductListView, SellerProductDetailView, InventoryUpdateView, LowStockView
)
from .admin_product_views import PendingProductListView, ApproveProductView, RejectProductView
from .category_views import CategoryListView, CategoryDetailView

__all__ = [
    'ProductListView',
    'ProductDetailView',
    'SellerProductListView',
    'SellerProductDetailView',
    'InventoryUpdateView',
    'LowStockView',
    'PendingProductListView',
    'ApproveProductView',
    'RejectProductView',
    'CategoryListView',
    'CategoryDetailView',
]
