"""
Notification views module.

All views are exported from this module to maintain backward compatibility.
"""
from .notification_views import (
    list_notifications, unread_count, mark_read, mark_all_read, delete_notification
)

__all__ = [
    'list_notifications',
    'unread_count',
    'mark_read',
    'mark_all_read',
    'delete_notification',
]
