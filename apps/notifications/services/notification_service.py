"""
Notification creation and inbox operations.
"""
import logging

from apps.common.exceptions import NotFound, ValidationFailed
from ..models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating and managing user notifications"""

    @staticmethod
    def notify(user, notification_type, title, message, link='', metadata=None):
        """Create a notification for ``user``"""
        valid_types = dict(Notification.TYPE_CHOICES)
        if notification_type not in valid_types:
            raise ValidationFailed(f"Unknown notification type: {notification_type}")

        notification = Notification.objects.create(
            user=user,
            notification_type=notification_type,
            title=title,
            message=message,
            link=link or '',
            metadata=metadata or {},
        )
        logger.debug(f"Notification {notification.pk} ({notification_type}) for user {user.pk}")
        return notification

    @staticmethod
    def get_user_notifications(user, filter_type='all'):
        notifications = Notification.objects.filter(user=user)
        if filter_type == 'unread':
            notifications = notifications.filter(read=False)
        elif filter_type == 'important':
            notifications = notifications.filter(notification_type__in=Notification.IMPORTANT_TYPES)
        return notifications.order_by('-created_at')

    @staticmethod
    def unread_count(user):
        return Notification.objects.filter(user=user, read=False).count()

    @staticmethod
    def get_owned(user, notification_id):
        """Another user's notification looks exactly like a missing one"""
        try:
            return Notification.objects.get(pk=notification_id, user=user)
        except Notification.DoesNotExist:
            raise NotFound('Notification not found')

    @staticmethod
    def mark_read(user, notification_id):
        notification = NotificationService.get_owned(user, notification_id)
        if not notification.read:
            notification.read = True
            notification.save(update_fields=['read'])
        return notification

    @staticmethod
    def mark_all_read(user):
        return Notification.objects.filter(user=user, read=False).update(read=True)

    @staticmethod
    def delete(user, notification_id):
        NotificationService.get_owned(user, notification_id).delete()
