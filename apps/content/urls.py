from django.urls import path
from . import views

urlpatterns = [
    path('footer-content', views.FooterContentListView.as_view(), name='footer-content-list'),
    path('footer-content/<int:content_id>', views.FooterContentDetailView.as_view(), name='footer-content-detail'),
    path('upload', views.upload_file, name='upload'),
]
