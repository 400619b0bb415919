from django.urls import path
from . import views

urlpatterns = [
    path('footer-content', views.AdminFooterContentListView.as_view(), name='admin-footer-content'),
    path('footer-content/<int:content_id>', views.AdminFooterContentDetailView.as_view(), name='admin-footer-content-detail'),
    path('footer-content/<int:content_id>/toggle', views.FooterContentToggleView.as_view(), name='admin-footer-content-toggle'),
    path('footer-content/<int:content_id>/order', views.FooterContentOrderView.as_view(), name='admin-footer-content-order'),
]
