from decimal import Decimal

from django.conf import settings
from django.db import models


class Product(models.Model):
    """Product listed by a seller; visible to buyers once approved"""
    APPROVAL_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='products')
    category = models.ForeignKey('Category', on_delete=models.SET_NULL, null=True, blank=True, related_name='products')
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    sku = models.CharField(max_length=100, blank=True, db_index=True)
    hsn = models.CharField(max_length=20, blank=True, help_text="HSN code used on GST invoices")
    price = models.DecimalField(max_digits=10, decimal_places=2, help_text="Selling price")
    mrp = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True, help_text="Maximum retail price")
    stock = models.PositiveIntegerField(default=0)
    image_url = models.CharField(max_length=500, blank=True)

    approval_status = models.CharField(max_length=20, choices=APPROVAL_CHOICES, default='pending', db_index=True)
    rejection_reason = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['approval_status', 'is_active']),
            models.Index(fields=['seller', 'approval_status']),
            models.Index(fields=['price']),
        ]

    def __str__(self):
        return f"{self.name} (id: {self.id})"

    @property
    def is_visible(self):
        return self.approval_status == 'approved' and self.is_active

    @property
    def discount_percent(self):
        """Percentage off MRP, 0 when no MRP is set"""
        if not self.mrp or self.mrp <= 0 or self.mrp <= self.price:
            return 0
        return int(((self.mrp - self.price) * Decimal('100') / self.mrp).quantize(Decimal('1')))

    @property
    def total_stock(self):
        variants = list(self.variants.all())
        if variants:
            return sum(variant.stock for variant in variants)
        return self.stock
