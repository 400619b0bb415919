from django.urls import path
from . import views

urlpatterns = [
    path('products', views.SellerProductListView.as_view(), name='seller-products'),
    path('products/<int:product_id>', views.SellerProductDetailView.as_view(), name='seller-product-detail'),
    path('products/<int:product_id>/inventory', views.InventoryUpdateView.as_view(), name='seller-product-inventory'),
    path('inventory/low-stock', views.LowStockView.as_view(), name='seller-low-stock'),
]
