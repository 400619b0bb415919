from django.conf import settings
from django.db import models


class ReturnStatusHistory(models.Model):
    """Append-only log of return status changes"""
    return_request = models.ForeignKey('ReturnRequest', on_delete=models.CASCADE, related_name='history')
    from_status = models.CharField(max_length=30, blank=True)
    to_status = models.CharField(max_length=30)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'return_status_history'
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.return_request_id}: {self.from_status or '-'} -> {self.to_status}"
