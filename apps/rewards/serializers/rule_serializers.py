"""
Reward rule serializers.
"""
from rest_framework import serializers

from ..models import RewardRule


class RewardRuleSerializer(serializers.ModelSerializer):
    rule_type_display = serializers.CharField(source='get_rule_type_display', read_only=True)

    class Meta:
        model = RewardRule
        fields = [
            'id', 'name', 'rule_type', 'rule_type_display', 'points_per_unit',
            'fixed_points', 'min_order_amount', 'max_points', 'validity_days',
            'is_active', 'description', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'rule_type_display', 'created_at', 'updated_at']

    def validate(self, attrs):
        rate = attrs.get('points_per_unit', getattr(self.instance, 'points_per_unit', 0)) or 0
        fixed = attrs.get('fixed_points', getattr(self.instance, 'fixed_points', 0)) or 0
        if rate < 0 or fixed < 0:
            raise serializers.ValidationError('Points values cannot be negative.')
        if not rate and not fixed:
            raise serializers.ValidationError('A rule needs points_per_unit or fixed_points.')
        validity = attrs.get('validity_days')
        if validity is not None and validity <= 0:
            raise serializers.ValidationError({'validity_days': 'Must be a positive number of days.'})
        return attrs
