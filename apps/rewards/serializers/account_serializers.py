"""
Reward account serializers.
"""
from rest_framework import serializers

from ..models import RewardAccount
from .transaction_serializers import RewardTransactionSerializer


class RewardAccountSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(source='user.id', read_only=True)

    class Meta:
        model = RewardAccount
        fields = ['user_id', 'points', 'lifetime_earned', 'lifetime_redeemed', 'updated_at']
        read_only_fields = fields


class RewardSummarySerializer(serializers.Serializer):
    """Serializer for the dict returned by ``RewardService.summary``"""
    points = serializers.IntegerField()
    lifetime_earned = serializers.IntegerField()
    lifetime_redeemed = serializers.IntegerField()
    expiring_soon = serializers.IntegerField()
    min_redemption = serializers.IntegerField()
    recent_transactions = RewardTransactionSerializer(many=True)
