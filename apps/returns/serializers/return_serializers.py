"""
Return request serializers for list, detail and the action endpoints.
"""
from rest_framework import serializers

from apps.payments.models import RefundRecord
from apps.payments.serializers import RefundRecordSerializer
from ..models import ReturnReason, ReturnRequest, ReturnStatusHistory


class ReturnReasonSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReturnReason
        fields = ['id', 'code', 'text', 'applicable_types', 'requires_media', 'display_order']


class ReturnStatusHistorySerializer(serializers.ModelSerializer):
    changed_by_name = serializers.CharField(source='changed_by.display_name', read_only=True, default=None)

    class Meta:
        model = ReturnStatusHistory
        fields = ['id', 'from_status', 'to_status', 'changed_by', 'changed_by_name', 'notes', 'created_at']


class ReturnListSerializer(serializers.ModelSerializer):
    """
    Minimal fields for list display.
    Used for: GET /api/returns
    """
    order_number = serializers.CharField(source='order.order_number', read_only=True)
    product_name = serializers.CharField(source='order_item.product_name', read_only=True)
    image_url = serializers.CharField(source='order_item.image_url', read_only=True)
    reason = serializers.CharField(source='reason_display', read_only=True)

    class Meta:
        model = ReturnRequest
        fields = [
            'id', 'return_number', 'order', 'order_number', 'order_item', 'product_name',
            'image_url', 'request_type', 'reason', 'status', 'refund_amount', 'refund_status',
            'buyer', 'seller', 'created_at', 'updated_at'
        ]


class ReturnRequestSerializer(ReturnListSerializer):
    """Full return detail with history and refund record"""
    reason_id = serializers.IntegerField(source='reason.id', read_only=True, default=None)
    history = ReturnStatusHistorySerializer(many=True, read_only=True)
    refund = serializers.SerializerMethodField()
    allowed_transitions = serializers.SerializerMethodField()

    class Meta(ReturnListSerializer.Meta):
        fields = ReturnListSerializer.Meta.fields + [
            'reason_id', 'description', 'media_urls', 'quantity', 'return_tracking',
            'replacement_tracking', 'received_condition', 'seller_notes', 'rejection_reason',
            'cancel_reason', 'approved_at', 'received_at', 'completed_at', 'history',
            'refund', 'allowed_transitions'
        ]

    def get_refund(self, obj):
        try:
            return RefundRecordSerializer(obj.refund_record).data
        except RefundRecord.DoesNotExist:
            return None

    def get_allowed_transitions(self, obj):
        return [status for status in obj.ALLOWED_TRANSITIONS.get(obj.status, []) if obj.can_transition_to(status)]


class ReturnCreateSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    order_item_id = serializers.IntegerField()
    request_type = serializers.ChoiceField(choices=[choice[0] for choice in ReturnRequest.REQUEST_TYPE_CHOICES])
    reason_id = serializers.IntegerField(required=False, allow_null=True)
    reason_text = serializers.CharField(required=False, allow_blank=True, max_length=255, default='')
    description = serializers.CharField(required=False, allow_blank=True, default='')
    media_urls = serializers.ListField(child=serializers.CharField(max_length=500), required=False, default=list)
    quantity = serializers.IntegerField(required=False, min_value=1)

    def validate(self, attrs):
        if not attrs.get('reason_id') and not attrs.get('reason_text'):
            raise serializers.ValidationError({'reason_id': 'A reason is required.'})
        return attrs


class ReturnStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[choice[0] for choice in ReturnRequest.STATUS_CHOICES])
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    refund_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    refund_method = serializers.CharField(required=False, allow_blank=True, default='original_payment')
    refund_reference = serializers.CharField(required=False, allow_blank=True, default='')


class ReturnNoteSerializer(serializers.Serializer):
    """Notes for approve/reject and reason for cancel"""
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    reason = serializers.CharField(required=False, allow_blank=True, default='')


class TrackingSerializer(serializers.Serializer):
    courier = serializers.CharField(required=False, allow_blank=True, max_length=100)
    tracking_number = serializers.CharField(max_length=100)
    tracking_url = serializers.URLField(required=False, allow_blank=True)


class MarkReceivedSerializer(serializers.Serializer):
    condition = serializers.ChoiceField(choices=[choice[0] for choice in ReturnRequest.CONDITION_CHOICES])
    notes = serializers.CharField(required=False, allow_blank=True, default='')
