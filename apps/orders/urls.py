from django.urls import path
from . import views

app_name = 'orders'

urlpatterns = [
    path('orders', views.OrderListCreateView.as_view(), name='list'),
    path('orders/<int:order_id>', views.OrderDetailView.as_view(), name='detail'),
    path('orders/<int:order_id>/items', views.OrderItemsView.as_view(), name='items'),
    path('orders/<int:order_id>/status', views.OrderStatusView.as_view(), name='status'),
    path('orders/<int:order_id>/cancel', views.OrderCancelView.as_view(), name='cancel'),
]
