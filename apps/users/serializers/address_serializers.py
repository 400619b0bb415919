"""
Address serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_phone, validate_pincode
from ..models import Address


class AddressSerializer(serializers.ModelSerializer):

    class Meta:
        model = Address
        fields = [
            'id', 'name', 'phone', 'address_line1', 'address_line2', 'city',
            'state', 'pincode', 'address_type', 'is_default',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_phone(self, value):
        return validate_phone(value)

    def validate_pincode(self, value):
        return validate_pincode(value)

    def validate_name(self, value):
        if len(value.strip()) < 2:
            raise serializers.ValidationError('Name must be at least 2 characters')
        return value.strip()
