from django.conf import settings
from django.db import models


class RewardAccount(models.Model):
    """Reward points balance for a user"""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reward_account')
    points = models.IntegerField(default=0, help_text="Points available for redemption")
    lifetime_earned = models.IntegerField(default=0)
    lifetime_redeemed = models.IntegerField(default=0)
    referral_code = models.CharField(max_length=20, unique=True, null=True, blank=True)
    referred_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='referrals'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reward_accounts'
        verbose_name = 'Reward Account'
        verbose_name_plural = 'Reward Accounts'

    def __str__(self):
        return f"{self.user.username} - {self.points} points"
