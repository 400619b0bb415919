from django.conf import settings
from django.db import models
from django.utils import timezone


class RefundRecord(models.Model):
    """Refund bookkeeping for a return in the refund stage or a cancelled prepaid order"""

    STATUS_CHOICES = [
        ('initiated', 'Initiated'),
        ('processed', 'Processed'),
    ]

    METHOD_CHOICES = [
        ('original_payment', 'Original Payment Method'),
        ('bank_transfer', 'Bank Transfer'),
        ('upi', 'UPI'),
        ('store_credit', 'Store Credit'),
    ]

    return_request = models.OneToOneField(
        'returns.ReturnRequest',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='refund_record',
    )
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='refund_records')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=20, choices=METHOD_CHOICES, default='original_payment')
    reference = models.CharField(max_length=100, blank=True, help_text="Gateway refund ID or bank reference")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='initiated')
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='processed_refunds',
    )
    notes = models.TextField(blank=True)
    initiated_at = models.DateTimeField(auto_now_add=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'refund_records'
        ordering = ['-initiated_at']

    def __str__(self):
        if self.return_request_id:
            return f"Refund {self.amount} for return {self.return_request_id} - {self.status}"
        return f"Refund {self.amount} for order {self.order_id} - {self.status}"

    def save(self, *args, **kwargs):
        if self.status == 'processed' and not self.processed_at:
            self.processed_at = timezone.now()
        super().save(*args, **kwargs)
