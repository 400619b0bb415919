from django.db.models.signals import post_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model

from .services import RewardService

User = get_user_model()


@receiver(post_save, sender=User)
def create_reward_account_for_new_user(sender, instance, created, **kwargs):
    """Create a reward account and award the signup bonus for new users"""
    if created:
        RewardService.get_or_create_account(instance)
        RewardService.award_signup_bonus(instance)
