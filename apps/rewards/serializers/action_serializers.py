"""
Input serializers for redemption, review and referral awards and admin adjustments.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class RedeemSerializer(serializers.Serializer):
    points = serializers.IntegerField(min_value=1)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    order_id = serializers.IntegerField(min_value=1, required=False)


class ReviewPointsSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)


class ReferralSerializer(serializers.Serializer):
    referral_code = serializers.CharField(max_length=20)


class AdminAddPointsSerializer(serializers.Serializer):
    """Positive points credit, negative points debit"""
    user_id = serializers.IntegerField()
    points = serializers.IntegerField()
    description = serializers.CharField(max_length=255)
    transaction_type = serializers.ChoiceField(choices=['adjust', 'bonus'], default='adjust')

    def validate_points(self, value):
        if value == 0:
            raise serializers.ValidationError('Points must not be zero.')
        return value

    def validate_user_id(self, value):
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError('User not found.')
        return value
