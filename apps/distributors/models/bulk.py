from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from ..pricing import split_gst_inclusive


class BulkItem(models.Model):
    """Bulk ordering configuration for a product"""
    product = models.OneToOneField('products.Product', on_delete=models.CASCADE, related_name='bulk_item')
    allow_pieces = models.BooleanField(default=True)
    allow_sets = models.BooleanField(default=False)
    pieces_per_set = models.PositiveIntegerField(null=True, blank=True)
    selling_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        help_text="Per piece price for distributors; product price when empty"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bulk_items'
        ordering = ['-updated_at']

    def __str__(self):
        return f"Bulk config for {self.product_id}"

    def clean(self):
        if not self.allow_pieces and not self.allow_sets:
            raise ValidationError('At least one of pieces or sets must be allowed.')
        if self.allow_sets and not self.pieces_per_set:
            raise ValidationError({'pieces_per_set': 'Pieces per set is required when sets are allowed.'})

    @property
    def unit_price(self):
        return self.selling_price if self.selling_price is not None else self.product.price


class BulkOrder(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    ALLOWED_TRANSITIONS = {
        'pending': ['approved', 'rejected'],
        'approved': ['rejected'],
        'rejected': [],
    }

    PAYMENT_TYPES = [
        ('prepaid', 'Prepaid'),
        ('cod', 'Cash on Delivery'),
    ]

    distributor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bulk_orders')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    notes = models.TextField(blank=True)
    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    discount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    delivery_charges = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0.00'), help_text="GST inclusive"
    )
    delivery_charges_gst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('18.00'))
    cash_handling_fees = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    payment_type = models.CharField(max_length=20, choices=PAYMENT_TYPES, default='prepaid')
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bulk_orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['distributor', 'status']),
        ]

    def __str__(self):
        return f"{self.order_number} - {self.status}"

    @property
    def order_number(self):
        return f"BO-{self.pk}"

    @property
    def delivery_charges_breakdown(self):
        base, gst = split_gst_inclusive(self.delivery_charges, self.delivery_charges_gst_rate)
        return {'base': base, 'gst': gst, 'rate': self.delivery_charges_gst_rate}

    def can_transition_to(self, new_status):
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, [])


class BulkOrderItem(models.Model):
    ORDER_TYPES = [
        ('pieces', 'Pieces'),
        ('sets', 'Sets'),
    ]

    bulk_order = models.ForeignKey('BulkOrder', on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('products.Product', on_delete=models.PROTECT, related_name='+')
    order_type = models.CharField(max_length=10, choices=ORDER_TYPES)
    quantity = models.PositiveIntegerField(help_text="Pieces or sets as ordered")
    pieces_per_set = models.PositiveIntegerField(null=True, blank=True, help_text="Ratio at order time")
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, help_text="Per piece")
    total_price = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        db_table = 'bulk_order_items'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} {self.order_type} of {self.product_id}"

    @property
    def total_pieces(self):
        if self.order_type == 'sets' and self.pieces_per_set:
            return self.quantity * self.pieces_per_set
        return self.quantity
