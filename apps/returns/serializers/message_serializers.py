from rest_framework import serializers

from ..models import ReturnMessage


class ReturnMessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.CharField(source='sender.display_name', read_only=True)
    sender_role = serializers.CharField(source='sender.role', read_only=True)

    class Meta:
        model = ReturnMessage
        fields = ['id', 'sender', 'sender_name', 'sender_role', 'message', 'media_urls', 'created_at']
        read_only_fields = fields


class ReturnMessageCreateSerializer(serializers.Serializer):
    message = serializers.CharField()
    media_urls = serializers.ListField(child=serializers.CharField(max_length=500), required=False, default=list)
