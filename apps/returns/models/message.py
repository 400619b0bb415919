from django.conf import settings
from django.db import models


class ReturnMessage(models.Model):
    """Conversation between buyer, seller and admins on a return"""
    return_request = models.ForeignKey('ReturnRequest', on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='+')
    message = models.TextField()
    media_urls = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'return_messages'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"Message on {self.return_request_id} by {self.sender_id}"
