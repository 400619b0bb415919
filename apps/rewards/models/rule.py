from decimal import Decimal, ROUND_FLOOR

from django.db import models


class RewardRule(models.Model):
    """Rules for earning points"""
    RULE_TYPES = [
        ('purchase', 'Purchase'),
        ('signup', 'Signup'),
        ('review', 'Product Review'),
        ('referral', 'Referral'),
    ]

    name = models.CharField(max_length=100)
    rule_type = models.CharField(max_length=20, choices=RULE_TYPES, db_index=True)
    points_per_unit = models.DecimalField(
        max_digits=8, decimal_places=4, default=0,
        help_text="Points per rupee spent (purchase rules)"
    )
    fixed_points = models.IntegerField(default=0, help_text="Flat points (signup, review, referral)")
    min_order_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    max_points = models.IntegerField(null=True, blank=True, help_text="Cap per award")
    validity_days = models.IntegerField(null=True, blank=True, help_text="Days before earned points expire")
    is_active = models.BooleanField(default=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reward_rules'
        ordering = ['rule_type', '-created_at']

    def __str__(self):
        return f"{self.name} ({self.rule_type})"

    def calculate_points(self, base_amount=None):
        """floor(amount x rate) + fixed points, capped at ``max_points``"""
        points = self.fixed_points
        if base_amount is not None and self.points_per_unit:
            points += int((Decimal(str(base_amount)) * self.points_per_unit).to_integral_value(rounding=ROUND_FLOOR))
        if self.max_points:
            points = min(points, self.max_points)
        return max(points, 0)

    @classmethod
    def get_rule(cls, rule_type):
        """Most recent active rule of a type"""
        return cls.objects.filter(rule_type=rule_type, is_active=True).order_by('-created_at').first()
