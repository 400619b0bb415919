"""
Product serializers for list, detail, create, and update operations.
"""
from rest_framework import serializers

from apps.common.validators import validate_price_range, validate_mrp_not_below_price
from ..models import Product, ProductImage, ProductVariant, Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'parent', 'description', 'image_url', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {'slug': {'required': False}}


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ['id', 'image_url', 'is_primary', 'order']


class ProductVariantSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(required=False)
    effective_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = ProductVariant
        fields = ['id', 'sku', 'color', 'size', 'price', 'mrp', 'stock', 'image_url', 'effective_price']


class ProductListSerializer(serializers.ModelSerializer):
    """Serializer for product list view - GET /api/products"""
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)
    seller_name = serializers.CharField(source='seller.display_name', read_only=True)
    discount_percent = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'price', 'mrp', 'discount_percent', 'image_url', 'stock',
            'category', 'category_name', 'seller', 'seller_name', 'approval_status',
            'is_active', 'created_at'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Serializer for product detail view - GET /api/products/{id}"""
    category_info = CategorySerializer(source='category', read_only=True)
    seller_name = serializers.CharField(source='seller.display_name', read_only=True)
    variants = ProductVariantSerializer(many=True, read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)
    discount_percent = serializers.IntegerField(read_only=True)
    total_stock = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'sku', 'hsn', 'price', 'mrp', 'discount_percent',
            'stock', 'total_stock', 'image_url', 'images', 'variants', 'category',
            'category_info', 'seller', 'seller_name', 'approval_status', 'rejection_reason',
            'is_active', 'created_at', 'updated_at'
        ]


class ProductWriteSerializer(serializers.ModelSerializer):
    """Seller/admin create and update payload"""
    variants = ProductVariantSerializer(many=True, required=False)
    images = serializers.ListField(child=serializers.CharField(max_length=500), required=False)

    class Meta:
        model = Product
        fields = [
            'name', 'description', 'sku', 'hsn', 'price', 'mrp', 'stock',
            'image_url', 'category', 'is_active', 'variants', 'images'
        ]

    def validate_price(self, value):
        return validate_price_range(value, min_value=0)

    def validate(self, attrs):
        price = attrs.get('price', getattr(self.instance, 'price', None))
        mrp = attrs.get('mrp', getattr(self.instance, 'mrp', None))
        validate_mrp_not_below_price(price, mrp)
        return attrs


class InventoryUpdateSerializer(serializers.Serializer):
    """Set absolute stock levels for a product and/or its variants"""
    stock = serializers.IntegerField(min_value=0, required=False)
    variants = serializers.ListField(child=serializers.DictField(), required=False)

    def validate_variants(self, value):
        for item in value:
            if 'id' not in item or 'stock' not in item:
                raise serializers.ValidationError('Each variant needs id and stock')
            try:
                stock = int(item['stock'])
            except (TypeError, ValueError):
                raise serializers.ValidationError('Variant stock must be an integer')
            if stock < 0:
                raise serializers.ValidationError('Variant stock cannot be negative')
            item['stock'] = stock
        return value

    def validate(self, attrs):
        if 'stock' not in attrs and not attrs.get('variants'):
            raise serializers.ValidationError('Provide stock or variants')
        return attrs


class ProductRejectSerializer(serializers.Serializer):
    reason = serializers.CharField()
