from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('notifications', views.list_notifications, name='list'),
    path('notifications/unread-count', views.unread_count, name='unread_count'),
    path('notifications/read-all', views.mark_all_read, name='read_all'),
    path('notifications/<int:notification_id>/read', views.mark_read, name='read'),
    path('notifications/<int:notification_id>', views.delete_notification, name='delete'),
]
