from rest_framework import serializers

from ..models import FooterContent


class FooterContentSerializer(serializers.ModelSerializer):
    class Meta:
        model = FooterContent
        fields = ['id', 'section', 'title', 'content', 'order', 'is_active', 'created_at', 'updated_at']
        read_only_fields = fields


class FooterContentWriteSerializer(serializers.Serializer):
    section = serializers.CharField(max_length=100, required=False, allow_blank=True)
    title = serializers.CharField(max_length=200, required=False, allow_blank=True)
    content = serializers.CharField(required=False, allow_blank=True)
    order = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    def validate(self, attrs):
        # Create needs every text field; updates may send any subset
        if self.instance is None and not self.partial:
            missing = [field for field in ('section', 'title', 'content') if not attrs.get(field)]
            if missing:
                raise serializers.ValidationError('Section, title, and content are required')
        return attrs
