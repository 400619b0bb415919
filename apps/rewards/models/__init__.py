"""
Reward models module.

All models are exported from this module to maintain backward compatibility.
"""
from .account import RewardAccount
from .transaction import RewardTransaction
from .rule import RewardRule

__all__ = [
    'RewardAccount',
    'RewardTransaction',
    'RewardRule',
]
