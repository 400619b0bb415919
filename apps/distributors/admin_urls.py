from django.urls import path
from . import views

urlpatterns = [
    path('bulk-items/search-products', views.BulkProductSearchView.as_view(), name='admin-bulk-product-search'),
    path('bulk-items', views.BulkItemListView.as_view(), name='admin-bulk-items'),
    path('bulk-items/<int:item_id>', views.BulkItemDetailView.as_view(), name='admin-bulk-item-detail'),
    path('bulk-orders', views.AdminBulkOrderListView.as_view(), name='admin-bulk-orders'),
    path('bulk-orders/stats', views.BulkOrderStatsView.as_view(), name='admin-bulk-order-stats'),
    path('bulk-orders/<int:order_id>', views.AdminBulkOrderDetailView.as_view(), name='admin-bulk-order-detail'),
]
