from django.urls import path
from . import views

urlpatterns = [
    path('products/pending', views.PendingProductListView.as_view(), name='admin-pending-products'),
    path('products/<int:product_id>/approve', views.ApproveProductView.as_view(), name='admin-approve-product'),
    path('products/<int:product_id>/reject', views.RejectProductView.as_view(), name='admin-reject-product'),
]
