from django.conf import settings
from django.db import models


class DistributorLedgerEntry(models.Model):
    """
    Append-only distributor account movement.

    Orders carry a positive amount, payments a negative one;
    ``balance_after`` is the running balance including this entry.
    """
    ENTRY_TYPES = [
        ('order', 'Order'),
        ('payment', 'Payment'),
    ]

    ORDER_TYPES = [
        ('normal', 'Normal'),
        ('bulk', 'Bulk'),
    ]

    PAYMENT_METHODS = [
        ('cash', 'Cash'),
        ('bank_transfer', 'Bank Transfer'),
        ('upi', 'UPI'),
        ('cheque', 'Cheque'),
        ('other', 'Other'),
    ]

    distributor = models.ForeignKey('Distributor', on_delete=models.CASCADE, related_name='ledger_entries')
    entry_type = models.CharField(max_length=20, choices=ENTRY_TYPES)
    order_type = models.CharField(max_length=20, choices=ORDER_TYPES, blank=True)
    # Plain id: references either orders or bulk orders depending on order_type
    order_id = models.PositiveIntegerField(null=True, blank=True)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    balance_after = models.DecimalField(max_digits=14, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHODS, blank=True)
    reference = models.CharField(max_length=100, blank=True, help_text="Cheque number, UTR or transaction id")
    description = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'distributor_ledger'
        ordering = ['-id']
        indexes = [
            models.Index(fields=['distributor', 'id']),
            models.Index(fields=['order_type', 'order_id']),
        ]
        verbose_name_plural = 'Distributor ledger entries'

    def __str__(self):
        return f"{self.distributor_id} {self.entry_type} {self.amount} -> {self.balance_after}"
