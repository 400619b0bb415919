from django.db import models
from django.conf import settings


class Notification(models.Model):
    """In-app notification for a single user"""
    TYPE_CHOICES = [
        ('order_status', 'Order Status'),
        ('wallet', 'Wallet'),
        ('product_approval', 'Product Approval'),
        ('price_drop', 'Price Drop'),
        ('new_message', 'New Message'),
        ('system', 'System'),
    ]

    # Shown under the "important" filter
    IMPORTANT_TYPES = ['order_status', 'product_approval', 'wallet']

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    notification_type = models.CharField(max_length=30, choices=TYPE_CHOICES, default='system')
    title = models.CharField(max_length=200)
    message = models.TextField()
    link = models.CharField(max_length=500, blank=True)
    read = models.BooleanField(default=False)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'read']),
            models.Index(fields=['user', '-created_at']),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.title}"
