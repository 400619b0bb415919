"""
Notification services module.

All services are exported from this module to maintain backward compatibility.
"""
from .notification_service import NotificationService

__all__ = [
    'NotificationService',
]
