from django.urls import path
from . import views

urlpatterns = [
    path('bulk-items', views.AvailableBulkItemsView.as_view(), name='bulk-items'),
    path('bulk-orders', views.DistributorBulkOrderListView.as_view(), name='bulk-orders'),
    path('bulk-orders/<int:order_id>', views.DistributorBulkOrderDetailView.as_view(), name='bulk-order-detail'),
]
