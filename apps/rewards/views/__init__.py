"""
Reward views module.

All views are exported from this module to maintain backward compatibility.
"""
from .account_views import get_reward_summary, get_reward_transactions
from .redemption_views import redeem_points
from .referral_views import award_review_points, get_referral_code, apply_referral
from .admin_views import admin_add_points, reward_statistics, RewardRuleViewSet

__all__ = [
    'get_reward_summary',
    'get_reward_transactions',
    'redeem_points',
    'award_review_points',
    'get_referral_code',
    'apply_referral',
    'admin_add_points',
    'reward_statistics',
    'RewardRuleViewSet',
]
