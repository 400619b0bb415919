"""
Order serializers for list, detail, checkout and status actions.
"""
from rest_framework import serializers

from ..models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = [
            'id', 'product', 'variant', 'seller', 'product_name', 'variant_label',
            'sku', 'image_url', 'quantity', 'unit_price', 'total_price'
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    buyer_name = serializers.CharField(source='buyer.display_name', read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'buyer', 'buyer_name', 'status', 'payment_method',
            'payment_status', 'total', 'item_count', 'created_at'
        ]
        read_only_fields = fields

    def get_item_count(self, obj):
        return len(obj.items.all())


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    buyer_name = serializers.CharField(source='buyer.display_name', read_only=True)
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'buyer', 'buyer_name', 'status', 'allowed_transitions',
            'payment_method', 'payment_status', 'razorpay_order_id', 'razorpay_payment_id',
            'shipping_details', 'tracking', 'notes', 'subtotal', 'shipping_charges', 'total',
            'cancel_reason', 'items', 'created_at', 'updated_at', 'paid_at', 'shipped_at',
            'delivered_at', 'cancelled_at'
        ]
        read_only_fields = fields

    def get_allowed_transitions(self, obj):
        return Order.ALLOWED_TRANSITIONS.get(obj.status, [])


class CheckoutSerializer(serializers.Serializer):
    address_id = serializers.IntegerField(required=False, allow_null=True)
    shipping_details = serializers.DictField(required=False)
    payment_method = serializers.ChoiceField(choices=['cod'], default='cod')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice[0] for choice in Order.STATUS_CHOICES])
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    tracking = serializers.DictField(required=False)


class OrderCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default='')
