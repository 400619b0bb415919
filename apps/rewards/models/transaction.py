from django.db import models


class RewardTransaction(models.Model):
    """
    Signed points movement. Earned rows track ``remaining_points`` so that
    redemptions consume the oldest points first and expiry only removes
    what is still unspent.
    """
    TRANSACTION_TYPES = [
        ('earn', 'Earned'),
        ('redeem', 'Redeemed'),
        ('adjust', 'Manual Adjustment'),
        ('expire', 'Expired'),
        ('bonus', 'Bonus'),
        ('review', 'Product Review'),
        ('referral', 'Referral'),
    ]

    STATUS_CHOICES = [
        ('active', 'Active'),
        ('used', 'Used'),
        ('expired', 'Expired'),
    ]

    account = models.ForeignKey('RewardAccount', on_delete=models.CASCADE, related_name='transactions')
    transaction_type = models.CharField(max_length=20, choices=TRANSACTION_TYPES)
    points = models.IntegerField(help_text="Positive for credits, negative for debits")
    balance_after = models.IntegerField()
    remaining_points = models.IntegerField(default=0, help_text="Unspent part of a credit")
    description = models.CharField(max_length=255, blank=True)
    order_id = models.CharField(max_length=50, blank=True, null=True, db_index=True)
    product_id = models.IntegerField(null=True, blank=True, db_index=True, help_text="Reviewed product")
    value = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, help_text="Rupee value of redeemed points"
    )
    expiry_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    created_by = models.ForeignKey(
        'users.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'reward_transactions'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['account', 'status', 'expiry_date']),
        ]

    def __str__(self):
        return f"{self.account.user.username} {self.points:+d} ({self.transaction_type})"

    @property
    def is_credit(self):
        return self.points > 0
