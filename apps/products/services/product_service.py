"""
Product catalog service: browsing filters, seller CRUD, inventory and approval.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction
from django.db.models import Case, DecimalField, ExpressionWrapper, F, Q, Value, When

from apps.common.exceptions import NotFound, PermissionDenied, ValidationFailed
from apps.common.permissions import is_admin_user
from apps.notifications.services import NotificationService
from ..models import Product, ProductImage, ProductVariant

logger = logging.getLogger(__name__)

ORDERING_OPTIONS = {
    'newest': '-created_at',
    'price_asc': 'price',
    'price_desc': '-price',
    'name': 'name',
    'discount': '-discount_pct',
}


def _to_decimal(value):
    if value in (None, ''):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationFailed(f"Invalid number: {value}")


class ProductService:
    """Service for product browsing, seller management and approval"""

    @staticmethod
    def with_discount(queryset):
        """Annotate ``discount_pct``: percentage off MRP, 0 without an MRP"""
        discount = ExpressionWrapper(
            (F('mrp') - F('price')) * Value(Decimal('100')) / F('mrp'),
            output_field=DecimalField(max_digits=7, decimal_places=2)
        )
        return queryset.annotate(
            discount_pct=Case(
                When(mrp__gt=F('price'), then=discount),
                default=Value(Decimal('0')),
                output_field=DecimalField(max_digits=7, decimal_places=2)
            )
        )

    @staticmethod
    def browse(filters):
        """
        Public catalog query.

        Supported filters: search, category, seller, min_price, max_price,
        min_discount, max_discount, in_stock, ordering.
        """
        products = Product.objects.filter(
            approval_status='approved', is_active=True
        ).select_related('category', 'seller')
        products = ProductService.with_discount(products)

        search = (filters.get('search') or '').strip()
        if search:
            products = products.filter(
                Q(name__icontains=search) |
                Q(description__icontains=search) |
                Q(sku__icontains=search)
            )

        category = filters.get('category')
        if category:
            if str(category).isdigit():
                products = products.filter(Q(category_id=category) | Q(category__parent_id=category))
            else:
                products = products.filter(Q(category__slug=category) | Q(category__parent__slug=category))

        seller = filters.get('seller')
        if seller:
            products = products.filter(seller_id=seller)

        min_price = _to_decimal(filters.get('min_price'))
        if min_price is not None:
            products = products.filter(price__gte=min_price)

        max_price = _to_decimal(filters.get('max_price'))
        if max_price is not None:
            products = products.filter(price__lte=max_price)

        min_discount = _to_decimal(filters.get('min_discount'))
        if min_discount is not None:
            products = products.filter(discount_pct__gte=min_discount)

        max_discount = _to_decimal(filters.get('max_discount'))
        if max_discount is not None:
            products = products.filter(discount_pct__lte=max_discount)

        if str(filters.get('in_stock', '')).lower() in ('1', 'true'):
            products = products.filter(Q(stock__gt=0) | Q(variants__stock__gt=0)).distinct()

        ordering = ORDERING_OPTIONS.get(filters.get('ordering'), '-created_at')
        return products.order_by(ordering, '-id')

    @staticmethod
    def get_product(product_id):
        try:
            return Product.objects.select_related('category', 'seller').get(pk=product_id)
        except Product.DoesNotExist:
            raise NotFound('Product not found')

    @staticmethod
    def get_visible_product(product_id, user):
        """Unapproved products are only visible to their seller and admins"""
        product = ProductService.get_product(product_id)
        if product.is_visible:
            return product
        if user and user.is_authenticated and (product.seller_id == user.pk or is_admin_user(user)):
            return product
        raise NotFound('Product not found')

    @staticmethod
    def get_owned_product(product_id, user):
        product = ProductService.get_product(product_id)
        if product.seller_id != user.pk and not is_admin_user(user):
            raise PermissionDenied('You can only manage your own products')
        return product

    @staticmethod
    def _save_variants(product, variants_data):
        keep_ids = []
        for variant_data in variants_data:
            variant_id = variant_data.pop('id', None)
            if variant_id:
                updated = ProductVariant.objects.filter(pk=variant_id, product=product).update(**variant_data)
                if not updated:
                    raise ValidationFailed(f"Variant {variant_id} does not belong to this product")
                keep_ids.append(variant_id)
            else:
                keep_ids.append(ProductVariant.objects.create(product=product, **variant_data).pk)
        product.variants.exclude(pk__in=keep_ids).delete()

    @staticmethod
    def _save_images(product, images):
        product.images.all().delete()
        for i, image_url in enumerate(images):
            ProductImage.objects.create(product=product, image_url=image_url, is_primary=(i == 0), order=i)
        if images and not product.image_url:
            product.image_url = images[0]
            product.save(update_fields=['image_url'])

    @staticmethod
    @transaction.atomic
    def create_product(seller, validated_data):
        """
        Create a product; admin-created products skip the approval queue.
        """
        variants_data = validated_data.pop('variants', [])
        images = validated_data.pop('images', [])

        product = Product.objects.create(
            seller=seller,
            approval_status='approved' if is_admin_user(seller) else 'pending',
            **validated_data
        )
        if variants_data:
            ProductService._save_variants(product, variants_data)
        if images:
            ProductService._save_images(product, images)

        logger.info(f"Product {product.pk} created by {seller.pk} ({product.approval_status})")
        return product

    @staticmethod
    @transaction.atomic
    def update_product(product, validated_data, user):
        """Seller edits send the product back to the approval queue"""
        variants_data = validated_data.pop('variants', None)
        images = validated_data.pop('images', None)

        for attr, value in validated_data.items():
            setattr(product, attr, value)
        if not is_admin_user(user):
            product.approval_status = 'pending'
            product.rejection_reason = ''
        product.save()

        if variants_data is not None:
            ProductService._save_variants(product, variants_data)
        if images is not None:
            ProductService._save_images(product, images)
        return product

    @staticmethod
    def delete_product(product, user):
        logger.info(f"Product {product.pk} deleted by {user.pk}")
        product.delete()

    @staticmethod
    @transaction.atomic
    def update_inventory(product, stock=None, variants=None):
        if stock is not None:
            product.stock = stock
            product.save(update_fields=['stock', 'updated_at'])
        for item in variants or []:
            updated = ProductVariant.objects.filter(pk=item['id'], product=product).update(stock=item['stock'])
            if not updated:
                raise ValidationFailed(f"Variant {item['id']} does not belong to this product")
        return product

    @staticmethod
    def low_stock(seller=None, threshold=None):
        """Products (or products with a variant) at or below the threshold"""
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        products = Product.objects.filter(
            Q(stock__lte=threshold, variants__isnull=True) | Q(variants__stock__lte=threshold)
        )
        if seller is not None:
            products = products.filter(seller=seller)
        return products.distinct().order_by('stock', 'name')

    @staticmethod
    def pending_products():
        return Product.objects.filter(approval_status='pending').select_related('seller', 'category').order_by('created_at')

    @staticmethod
    def approve_product(product, acting_user):
        product.approval_status = 'approved'
        product.rejection_reason = ''
        product.save(update_fields=['approval_status', 'rejection_reason', 'updated_at'])
        NotificationService.notify(
            product.seller, 'product_approval', 'Product approved',
            f'"{product.name}" is now live on the store.',
            link=f'/seller/products/{product.pk}'
        )
        logger.info(f"Product {product.pk} approved by {acting_user.pk}")
        return product

    @staticmethod
    def reject_product(product, reason, acting_user):
        if not reason or not reason.strip():
            raise ValidationFailed('Rejection reason is required')
        product.approval_status = 'rejected'
        product.rejection_reason = reason
        product.save(update_fields=['approval_status', 'rejection_reason', 'updated_at'])
        NotificationService.notify(
            product.seller, 'product_approval', 'Product rejected',
            f'"{product.name}" was rejected: {reason}',
            link=f'/seller/products/{product.pk}'
        )
        logger.info(f"Product {product.pk} rejected by {acting_user.pk}")
        return product

    @staticmethod
    def lock_stock_rows(product_ids, variant_ids):
        """Lock product and variant rows for the current transaction"""
        products = {p.pk: p for p in Product.objects.select_for_update().filter(pk__in=product_ids)}
        variants = {v.pk: v for v in ProductVariant.objects.select_for_update().filter(pk__in=variant_ids)}
        return products, variants

    @staticmethod
    def restock(product_id, variant_id, quantity):
        """Return ``quantity`` units to stock"""
        if variant_id:
            ProductVariant.objects.filter(pk=variant_id).update(stock=F('stock') + quantity)
        else:
            Product.objects.filter(pk=product_id).update(stock=F('stock') + quantity)
