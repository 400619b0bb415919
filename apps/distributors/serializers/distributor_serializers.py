"""
Distributor profile and ledger serializers.
"""
from rest_framework import serializers

from apps.common.validators import validate_email_unique, validate_gstin, validate_phone, validate_pincode
from apps.users.models import User
from ..models import Distributor, DistributorLedgerEntry


class DistributorSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(source='user.id', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    username = serializers.CharField(source='user.username', read_only=True)
    available_credit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Distributor
        fields = [
            'id', 'user_id', 'email', 'username', 'business_name', 'contact_name', 'phone',
            'address', 'city', 'state', 'pincode', 'gstin', 'credit_limit', 'total_ordered',
            'total_paid', 'current_balance', 'available_credit', 'is_active', 'notes',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class _ProfileFieldsMixin(serializers.Serializer):
    business_name = serializers.CharField(max_length=200)
    contact_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    pincode = serializers.CharField(max_length=10, required=False, allow_blank=True)
    gstin = serializers.CharField(max_length=15, required=False, allow_blank=True)
    credit_limit = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_phone(self, value):
        return validate_phone(value) if value else value

    def validate_pincode(self, value):
        return validate_pincode(value) if value else value

    def validate_gstin(self, value):
        return validate_gstin(value) if value else value


class DistributorCreateSerializer(_ProfileFieldsMixin):
    """Either ``user_id`` of an existing user or username/email/password for a new one"""
    user_id = serializers.IntegerField(required=False)
    username = serializers.CharField(max_length=150, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(write_only=True, required=False, min_length=8)

    def validate(self, attrs):
        if attrs.get('user_id'):
            return attrs
        missing = [field for field in ('username', 'email', 'password') if not attrs.get(field)]
        if missing:
            raise serializers.ValidationError({field: 'This field is required.' for field in missing})
        attrs['email'] = validate_email_unique(attrs['email'])
        if User.objects.filter(username=attrs['username']).exists():
            raise serializers.ValidationError({'username': 'Username already taken.'})
        return attrs


class DistributorUpdateSerializer(_ProfileFieldsMixin):
    business_name = serializers.CharField(max_length=200, required=False)
    is_active = serializers.BooleanField(required=False)


class LedgerEntrySerializer(serializers.ModelSerializer):
    created_by_name = serializers.CharField(source='created_by.display_name', read_only=True, default=None)

    class Meta:
        model = DistributorLedgerEntry
        fields = [
            'id', 'entry_type', 'order_type', 'order_id', 'amount', 'balance_after',
            'payment_method', 'reference', 'description', 'notes', 'created_by',
            'created_by_name', 'created_at'
        ]
        read_only_fields = fields


class PaymentEntrySerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_method = serializers.ChoiceField(choices=[choice[0] for choice in DistributorLedgerEntry.PAYMENT_METHODS])
    reference = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be greater than zero.')
        return value
