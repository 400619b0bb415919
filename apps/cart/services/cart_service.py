"""
Cart service. Quantities are always clamped to the stock that is
available for the chosen variant (or the product when it has none).
"""
import logging
from decimal import Decimal

from django.db import transaction

from apps.common.exceptions import NotFound, PermissionDenied, ValidationFailed
from apps.products.models import Product, ProductVariant
from ..models import CartItem

logger = logging.getLogger(__name__)


def clamp_quantity(requested, available):
    """Bound ``requested`` to ``[0, available]``"""
    return max(0, min(requested, available))


class CartService:
    """Service for cart operations"""

    @staticmethod
    def get_items(user):
        return CartItem.objects.filter(user=user).select_related('product', 'variant', 'product__seller')

    @staticmethod
    def summary(items):
        items = list(items)
        subtotal = sum((item.line_total for item in items), Decimal('0.00'))
        return {
            'subtotal': subtotal,
            'itemCount': len(items),
            'totalQuantity': sum(item.quantity for item in items),
        }

    @staticmethod
    def _resolve(product_id, variant_id):
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise NotFound('Product not found')
        if not product.is_visible:
            raise ValidationFailed('Product is not available')

        variant = None
        if variant_id:
            try:
                variant = ProductVariant.objects.get(pk=variant_id, product=product)
            except ProductVariant.DoesNotExist:
                raise NotFound('Variant not found')
        elif product.variants.exists():
            raise ValidationFailed('Please select a variant')
        return product, variant

    @staticmethod
    @transaction.atomic
    def add_item(user, product_id, quantity=1, variant_id=None):
        """
        Add to cart, merging with an existing line.

        Returns ``(item, clamped)`` where ``clamped`` tells the caller the
        requested quantity was reduced to the available stock.
        """
        if quantity < 1:
            raise ValidationFailed('Quantity must be at least 1')

        product, variant = CartService._resolve(product_id, variant_id)
        available = variant.stock if variant else product.stock
        if available <= 0:
            raise ValidationFailed('Product is out of stock')

        item, created = CartItem.objects.select_for_update().get_or_create(
            user=user, product=product, variant=variant,
            defaults={'quantity': 0}
        )
        requested = item.quantity + quantity
        item.quantity = clamp_quantity(requested, available)
        item.save()
        return item, item.quantity < requested

    @staticmethod
    def get_owned_item(user, item_id):
        try:
            item = CartItem.objects.select_related('product', 'variant').get(pk=item_id)
        except CartItem.DoesNotExist:
            raise NotFound('Cart item not found')
        if item.user_id != user.pk:
            raise PermissionDenied('You can only modify your own cart')
        return item

    @staticmethod
    def update_item(user, item_id, quantity):
        """
        Set a line's quantity. Zero or less removes the line.

        Returns ``(item_or_None, clamped)``.
        """
        item = CartService.get_owned_item(user, item_id)
        if quantity <= 0:
            item.delete()
            return None, False

        item.quantity = clamp_quantity(quantity, item.available_stock)
        if item.quantity == 0:
            item.delete()
            return None, True
        item.save(update_fields=['quantity', 'updated_at'])
        return item, item.quantity < quantity

    @staticmethod
    def remove_item(user, item_id):
        CartService.get_owned_item(user, item_id).delete()

    @staticmethod
    def clear(user):
        deleted, _ = CartItem.objects.filter(user=user).delete()
        return deleted

    @staticmethod
    @transaction.atomic
    def merge(user, lines):
        """
        Merge a locally stored cart into the server cart after login.
        Lines that no longer resolve are skipped and reported.
        """
        skipped = []
        for line in lines:
            try:
                CartService.add_item(
                    user,
                    line['product_id'],
                    quantity=int(line.get('quantity', 1)),
                    variant_id=line.get('variant_id'),
                )
            except (NotFound, ValidationFailed) as e:
                skipped.append({'product_id': line.get('product_id'), 'reason': e.message})
        if skipped:
            logger.info(f"Cart merge for user {user.pk} skipped {len(skipped)} line(s)")
        return skipped
