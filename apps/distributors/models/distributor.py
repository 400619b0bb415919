from decimal import Decimal

from django.conf import settings
from django.db import models


class Distributor(models.Model):
    """
    Business profile of a distributor user.

    ``total_ordered``, ``total_paid`` and ``current_balance`` are maintained
    by ``LedgerService`` alongside every ledger entry;
    ``current_balance == total_ordered - total_paid`` at all times.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='distributor_profile')
    business_name = models.CharField(max_length=200)
    contact_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    pincode = models.CharField(max_length=10, blank=True)
    gstin = models.CharField(max_length=15, blank=True, help_text="GST identification number")
    credit_limit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    total_ordered = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    total_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    current_balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))

    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'distributors'
        ordering = ['business_name']
        indexes = [
            models.Index(fields=['is_active']),
        ]

    def __str__(self):
        return self.business_name

    @property
    def available_credit(self):
        return self.credit_limit - self.current_balance
