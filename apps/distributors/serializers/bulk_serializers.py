"""
Bulk item and bulk order serializers.
"""
from rest_framework import serializers

from ..models import BulkItem, BulkOrder, BulkOrderItem


class BulkItemSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(source='product.id', read_only=True)
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_sku = serializers.CharField(source='product.sku', read_only=True)
    product_price = serializers.DecimalField(source='product.price', max_digits=10, decimal_places=2, read_only=True)
    image_url = serializers.CharField(source='product.image_url', read_only=True)
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = BulkItem
        fields = [
            'id', 'product_id', 'product_name', 'product_sku', 'product_price', 'image_url',
            'allow_pieces', 'allow_sets', 'pieces_per_set', 'selling_price', 'unit_price',
            'created_at', 'updated_at'
        ]


class BulkItemWriteSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(required=False)
    allow_pieces = serializers.BooleanField(required=False)
    allow_sets = serializers.BooleanField(required=False)
    pieces_per_set = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    selling_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0
    )


class BulkProductSearchSerializer(serializers.Serializer):
    """Product row for the admin configuration search"""
    id = serializers.IntegerField()
    name = serializers.CharField()
    sku = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image_url = serializers.CharField()
    bulk_item_id = serializers.SerializerMethodField()

    def get_bulk_item_id(self, obj):
        bulk_item = getattr(obj, 'bulk_item', None)
        return bulk_item.pk if bulk_item else None


class BulkOrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    total_pieces = serializers.IntegerField(read_only=True)

    class Meta:
        model = BulkOrderItem
        fields = [
            'id', 'product', 'product_name', 'order_type', 'quantity', 'pieces_per_set',
            'total_pieces', 'unit_price', 'total_price'
        ]


class BulkOrderListSerializer(serializers.ModelSerializer):
    order_number = serializers.CharField(read_only=True)
    distributor_name = serializers.CharField(source='distributor.display_name', read_only=True)
    item_count = serializers.IntegerField(read_only=True, default=None)

    class Meta:
        model = BulkOrder
        fields = [
            'id', 'order_number', 'distributor', 'distributor_name', 'status', 'payment_type',
            'subtotal', 'total_amount', 'item_count', 'created_at'
        ]


class BulkOrderSerializer(BulkOrderListSerializer):
    items = BulkOrderItemSerializer(many=True, read_only=True)
    delivery_charges_breakdown = serializers.SerializerMethodField()

    class Meta(BulkOrderListSerializer.Meta):
        fields = BulkOrderListSerializer.Meta.fields + [
            'notes', 'discount', 'delivery_charges', 'delivery_charges_gst_rate',
            'delivery_charges_breakdown', 'cash_handling_fees', 'reviewed_by', 'updated_at', 'items'
        ]

    def get_delivery_charges_breakdown(self, obj):
        breakdown = obj.delivery_charges_breakdown
        return {key: str(value) for key, value in breakdown.items()}


class BulkOrderLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    order_type = serializers.ChoiceField(choices=['pieces', 'sets'])
    quantity = serializers.IntegerField(min_value=1)


class BulkOrderCreateSerializer(serializers.Serializer):
    items = BulkOrderLineSerializer(many=True, allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    payment_type = serializers.ChoiceField(choices=[choice[0] for choice in BulkOrder.PAYMENT_TYPES], default='prepaid')


class BulkOrderUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice[0] for choice in BulkOrder.STATUS_CHOICES], required=False)
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    delivery_charges = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)
    delivery_charges_gst_rate = serializers.DecimalField(
        max_digits=5, decimal_places=2, required=False, min_value=0, max_value=100
    )
    cash_handling_fees = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0)
    payment_type = serializers.ChoiceField(choices=[choice[0] for choice in BulkOrder.PAYMENT_TYPES], required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
