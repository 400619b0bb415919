"""
Reward serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .account_serializers import RewardAccountSerializer, RewardSummarySerializer
from .transaction_serializers import RewardTransactionSerializer
from .action_serializers import (
    RedeemSerializer, AdminAddPointsSerializer, ReviewPointsSerializer, ReferralSerializer
)
from .rule_serializers import RewardRuleSerializer

__all__ = [
    'RewardAccountSerializer',
    'RewardSummarySerializer',
    'RewardTransactionSerializer',
    'RedeemSerializer',
    'AdminAddPointsSerializer',
    'ReviewPointsSerializer',
    'ReferralSerializer',
    'RewardRuleSerializer',
]
