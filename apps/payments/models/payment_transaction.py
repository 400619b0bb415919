from django.conf import settings
from django.db import models
from django.utils import timezone


class PaymentTransaction(models.Model):
    """One Razorpay gateway order and what became of it"""

    STATUS_CHOICES = [
        ('created', 'Created'),
        ('paid', 'Paid'),
        ('failed', 'Failed'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='payment_transactions')
    razorpay_order_id = models.CharField(max_length=100, unique=True, help_text="Gateway order ID")
    razorpay_payment_id = models.CharField(max_length=100, blank=True, db_index=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2, help_text="Amount in rupees")
    amount_paise = models.PositiveIntegerField(help_text="Amount in the smallest currency unit")
    currency = models.CharField(max_length=3, default='INR')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='created')
    receipt = models.CharField(max_length=100, blank=True)
    notes = models.JSONField(default=dict, blank=True)
    order = models.ForeignKey(
        'orders.Order', on_delete=models.SET_NULL, null=True, blank=True, related_name='payment_transactions'
    )
    error_message = models.TextField(blank=True, help_text="Why verification or order creation failed")
    paid_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return f"Payment {self.razorpay_order_id} - {self.status}"

    def save(self, *args, **kwargs):
        if self.status == 'paid' and not self.paid_at:
            self.paid_at = timezone.now()
        super().save(*args, **kwargs)
