"""
Payment serializers.
"""
from rest_framework import serializers

from ..models import PaymentTransaction, RefundRecord


class PaymentTransactionSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(source='order.order_number', read_only=True, default=None)

    class Meta:
        model = PaymentTransaction
        fields = [
            'id', 'razorpay_order_id', 'razorpay_payment_id', 'amount', 'amount_paise',
            'currency', 'status', 'receipt', 'order', 'order_number', 'error_message',
            'paid_at', 'created_at'
        ]
        read_only_fields = fields


class VerifyPaymentSerializer(serializers.Serializer):
    """Fields are optional here so the service reports missing ones with a single message"""
    razorpay_order_id = serializers.CharField(required=False, allow_blank=True, default='')
    razorpay_payment_id = serializers.CharField(required=False, allow_blank=True, default='')
    razorpay_signature = serializers.CharField(required=False, allow_blank=True, default='')
    address_id = serializers.IntegerField(required=False, allow_null=True)
    shipping_details = serializers.DictField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class RefundRecordSerializer(serializers.ModelSerializer):
    method_display = serializers.CharField(source='get_method_display', read_only=True)

    class Meta:
        model = RefundRecord
        fields = [
            'id', 'return_request', 'order', 'amount', 'method', 'method_display',
            'reference', 'status', 'notes', 'initiated_at', 'processed_at'
        ]
        read_only_fields = fields
