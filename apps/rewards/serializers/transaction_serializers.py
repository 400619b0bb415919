"""
Reward transaction serializers.
"""
from rest_framework import serializers

from ..models import RewardTransaction


class RewardTransactionSerializer(serializers.ModelSerializer):
    """
    Read-only view of a points movement.
    Used for: GET /api/rewards/transactions
    """
    transaction_type_display = serializers.CharField(source='get_transaction_type_display', read_only=True)

    class Meta:
        model = RewardTransaction
        fields = [
            'id', 'transaction_type', 'transaction_type_display', 'points',
            'balance_after', 'remaining_points', 'description', 'order_id', 'product_id',
            'value', 'expiry_date', 'status', 'created_at'
        ]
        read_only_fields = fields
