from django.conf import settings
from django.db import models
from django.utils import timezone


class Order(models.Model):
    """Buyer order built from the cart at checkout"""

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('processing', 'Processing'),
        ('shipped', 'Shipped'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    ]

    # Allowed next states; delivered and cancelled are terminal
    ALLOWED_TRANSITIONS = {
        'pending': ['paid', 'processing', 'cancelled'],
        'paid': ['processing', 'cancelled'],
        'processing': ['shipped', 'cancelled'],
        'shipped': ['delivered'],
        'delivered': [],
        'cancelled': [],
    }

    # Buyers may cancel on their own only before fulfilment starts
    BUYER_CANCELLABLE = ['pending', 'paid']

    PAYMENT_METHOD_CHOICES = [
        ('cod', 'Cash on Delivery'),
        ('razorpay', 'Razorpay'),
    ]

    PAYMENT_STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('failed', 'Failed'),
        ('refunded', 'Refunded'),
    ]

    order_number = models.CharField(max_length=40, unique=True)
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='orders')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)

    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='cod')
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='pending')
    razorpay_order_id = models.CharField(max_length=100, blank=True, db_index=True)
    razorpay_payment_id = models.CharField(max_length=100, blank=True)

    address = models.ForeignKey('users.Address', on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    shipping_details = models.JSONField(default=dict, help_text="Address snapshot at checkout")
    tracking = models.JSONField(default=dict, blank=True, help_text="Courier and tracking number")
    notes = models.TextField(blank=True, default='')

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_charges = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2)

    cancel_reason = models.CharField(max_length=255, blank=True, default='')

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    shipped_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['buyer', 'status']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return f"Order {self.order_number}"

    def can_transition_to(self, new_status):
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, [])

    def save(self, *args, **kwargs):
        now = timezone.now()
        if self.status == 'paid' and not self.paid_at:
            self.paid_at = now
        elif self.status == 'shipped' and not self.shipped_at:
            self.shipped_at = now
        elif self.status == 'delivered' and not self.delivered_at:
            self.delivered_at = now
            # Cash is collected on delivery
            if self.payment_method == 'cod':
                self.payment_status = 'paid'
        elif self.status == 'cancelled' and not self.cancelled_at:
            self.cancelled_at = now

        super().save(*args, **kwargs)
