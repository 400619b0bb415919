from django.conf import settings
from django.db import models
from django.utils import timezone


class ReturnRequest(models.Model):
    """A buyer's return, refund or replacement request for one order item"""

    REQUEST_TYPE_CHOICES = [
        ('return', 'Return'),
        ('refund', 'Refund'),
        ('replacement', 'Replacement'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
        ('item_in_transit', 'Item In Transit'),
        ('item_received', 'Item Received'),
        ('refund_initiated', 'Refund Initiated'),
        ('refund_processed', 'Refund Processed'),
        ('replacement_dispatched', 'Replacement Dispatched'),
        ('completed', 'Completed'),
        ('cancelled', 'Cancelled'),
    ]

    ALLOWED_TRANSITIONS = {
        'pending': ['approved', 'rejected', 'cancelled'],
        'approved': ['item_in_transit', 'cancelled'],
        'item_in_transit': ['item_received'],
        'item_received': ['refund_initiated', 'replacement_dispatched', 'rejected'],
        'refund_initiated': ['refund_processed'],
        'refund_processed': ['completed'],
        'replacement_dispatched': ['completed'],
        'rejected': [],
        'cancelled': [],
        'completed': [],
    }

    # Statuses that no longer block a new request for the same item
    CLOSED_STATUSES = ['rejected', 'cancelled']

    REFUND_STATUS_CHOICES = [
        ('not_applicable', 'Not Applicable'),
        ('pending', 'Pending'),
        ('initiated', 'Initiated'),
        ('processed', 'Processed'),
    ]

    CONDITION_CHOICES = [
        ('resaleable', 'Resaleable'),
        ('damaged', 'Damaged'),
        ('defective', 'Defective'),
        ('missing_parts', 'Missing Parts'),
    ]

    return_number = models.CharField(max_length=40, unique=True)
    order = models.ForeignKey('orders.Order', on_delete=models.CASCADE, related_name='return_requests')
    order_item = models.ForeignKey('orders.OrderItem', on_delete=models.CASCADE, related_name='return_requests')
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='return_requests')
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='seller_returns'
    )

    request_type = models.CharField(max_length=20, choices=REQUEST_TYPE_CHOICES)
    reason = models.ForeignKey('ReturnReason', on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    reason_text = models.CharField(max_length=255, blank=True, help_text="Free text when no catalogue reason fits")
    description = models.TextField(blank=True)
    media_urls = models.JSONField(default=list, blank=True)
    quantity = models.PositiveIntegerField(default=1)

    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default='pending', db_index=True)
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    refund_status = models.CharField(max_length=20, choices=REFUND_STATUS_CHOICES, default='not_applicable')

    return_tracking = models.JSONField(default=dict, blank=True)
    replacement_tracking = models.JSONField(default=dict, blank=True)
    received_condition = models.CharField(max_length=20, choices=CONDITION_CHOICES, blank=True)
    seller_notes = models.TextField(blank=True)
    rejection_reason = models.TextField(blank=True)
    cancel_reason = models.TextField(blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    received_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'return_requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['buyer', 'status']),
            models.Index(fields=['seller', 'status']),
            models.Index(fields=['order_item', 'status']),
        ]

    def __str__(self):
        return f"Return {self.return_number} - {self.status}"

    def can_transition_to(self, new_status):
        if new_status not in self.ALLOWED_TRANSITIONS.get(self.status, []):
            return False
        if self.status == 'item_received':
            if new_status == 'refund_initiated':
                return self.request_type in ('return', 'refund')
            if new_status == 'replacement_dispatched':
                return self.request_type == 'replacement'
        return True

    @property
    def reason_display(self):
        return self.reason.text if self.reason_id else self.reason_text

    def save(self, *args, **kwargs):
        now = timezone.now()
        if self.status == 'approved' and not self.approved_at:
            self.approved_at = now
        elif self.status == 'item_received' and not self.received_at:
            self.received_at = now
        elif self.status == 'completed' and not self.completed_at:
            self.completed_at = now
        super().save(*args, **kwargs)
