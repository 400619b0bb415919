"""
Reward services module.

All services are exported from this module to maintain backward compatibility.
"""
from .reward_service import RewardService

__all__ = [
    'RewardService',
]
