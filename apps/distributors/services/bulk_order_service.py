"""
Bulk item configuration and distributor bulk orders.
"""
import logging
from decimal import Decimal
from typing import Dict, List

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count, Q, Sum

from apps.common.exceptions import InvalidTransition, NotFound, PermissionDenied, ValidationFailed
from apps.common.permissions import has_co_admin_permission
from apps.notifications.services import NotificationService
from apps.products.models import Product
from ..models import BulkItem, BulkOrder, BulkOrderItem
from ..pricing import line_total, money, order_total
from .distributor_service import DistributorService
from .ledger_service import LedgerService

logger = logging.getLogger(__name__)


class BulkOrderService:
    """Service class for bulk ordering"""

    # Bulk items

    @staticmethod
    def list_bulk_items(search=''):
        items = BulkItem.objects.select_related('product', 'product__category')
        search = (search or '').strip()
        if search:
            items = items.filter(Q(product__name__icontains=search) | Q(product__sku__icontains=search))
        return items

    @staticmethod
    def available_items():
        """Configured items a distributor can order right now"""
        return BulkItem.objects.select_related('product').filter(
            product__approval_status='approved', product__is_active=True
        )

    @staticmethod
    def get_bulk_item(item_id) -> BulkItem:
        try:
            return BulkItem.objects.select_related('product').get(pk=item_id)
        except BulkItem.DoesNotExist:
            raise NotFound('Bulk item not found')

    @staticmethod
    def search_products(search=''):
        products = Product.objects.filter(approval_status='approved', is_active=True).select_related('bulk_item')
        search = (search or '').strip()
        if search:
            products = products.filter(Q(name__icontains=search) | Q(sku__icontains=search))
        return products.order_by('name')

    @staticmethod
    def _validate_config(bulk_item: BulkItem):
        try:
            bulk_item.clean()
        except DjangoValidationError as e:
            details = e.message_dict if hasattr(e, 'error_dict') else {'non_field_errors': e.messages}
            raise ValidationFailed(e.messages[0], details=details)

    @staticmethod
    @transaction.atomic
    def upsert_bulk_item(product_id, data: Dict) -> BulkItem:
        """Create or update the configuration for a product"""
        try:
            product = Product.objects.get(pk=product_id)
        except Product.DoesNotExist:
            raise NotFound('Product not found')

        bulk_item = BulkItem.objects.filter(product=product).first() or BulkItem(product=product)
        for field in ('allow_pieces', 'allow_sets', 'pieces_per_set', 'selling_price'):
            if field in data:
                setattr(bulk_item, field, data[field])
        BulkOrderService._validate_config(bulk_item)
        bulk_item.save()
        return bulk_item

    @staticmethod
    def update_bulk_item(bulk_item: BulkItem, data: Dict) -> BulkItem:
        return BulkOrderService.upsert_bulk_item(bulk_item.product_id, data)

    @staticmethod
    def delete_bulk_item(bulk_item: BulkItem):
        bulk_item.delete()

    # Orders

    @staticmethod
    def price_lines(lines: List[Dict]):
        """Validate requested lines and price them; returns ``(priced_lines, subtotal)``"""
        if not lines:
            raise ValidationFailed('At least one item is required')

        product_ids = [line['product_id'] for line in lines]
        configs = {
            item.product_id: item
            for item in BulkItem.objects.select_related('product').filter(product_id__in=product_ids)
        }

        priced = []
        subtotal = Decimal('0.00')
        for line in lines:
            product_id = line['product_id']
            order_type = line['order_type']
            quantity = line['quantity']

            config = configs.get(product_id)
            if config is None:
                raise ValidationFailed(f'Product {product_id} is not available for bulk ordering')
            if order_type == 'pieces' and not config.allow_pieces:
                raise ValidationFailed(f'Product {product_id} does not allow ordering by pieces')
            if order_type == 'sets' and not config.allow_sets:
                raise ValidationFailed(f'Product {product_id} does not allow ordering by sets')
            if not config.product.is_visible:
                raise ValidationFailed(f'Product {product_id} is not approved')

            unit_price = money(config.unit_price)
            total_price = line_total(quantity, order_type, unit_price, config.pieces_per_set)
            priced.append({
                'product': config.product,
                'order_type': order_type,
                'quantity': quantity,
                'pieces_per_set': config.pieces_per_set if order_type == 'sets' else None,
                'unit_price': unit_price,
                'total_price': total_price,
            })
            subtotal += total_price
        return priced, subtotal

    @staticmethod
    @transaction.atomic
    def create_order(user, lines: List[Dict], notes='', payment_type='prepaid') -> BulkOrder:
        """Order, items and the ledger charge are written in one transaction"""
        if user.role != 'distributor':
            raise PermissionDenied('Only distributors can place bulk orders')
        distributor = DistributorService.ensure_profile(user)

        priced, subtotal = BulkOrderService.price_lines(lines)
        total = order_total(subtotal)

        order = BulkOrder.objects.create(
            distributor=user,
            notes=notes or '',
            subtotal=subtotal,
            delivery_charges_gst_rate=settings.DELIVERY_CHARGES_GST_RATE,
            payment_type=payment_type,
            total_amount=total,
        )
        BulkOrderItem.objects.bulk_create([
            BulkOrderItem(bulk_order=order, **line) for line in priced
        ])

        if total > 0:
            LedgerService.add_entry(
                distributor, 'order', total,
                order_type='bulk',
                order_id=order.pk,
                description=f"Bulk Order {order.order_number} - {len(priced)} item(s)",
                notes=order.notes,
                created_by=user,
            )

        logger.info(f"Bulk order {order.order_number} created by {user.pk} total={total}")
        return order

    @staticmethod
    def list_orders(filters: Dict, distributor_user=None):
        orders = BulkOrder.objects.select_related('distributor').annotate(item_count=Count('items'))
        if distributor_user is not None:
            orders = orders.filter(distributor=distributor_user)

        status = filters.get('status')
        if status and status != 'all':
            orders = orders.filter(status=status)
        search = (filters.get('search') or '').strip()
        if search:
            query = (
                Q(distributor__name__icontains=search) |
                Q(distributor__email__icontains=search) |
                Q(distributor__distributor_profile__business_name__icontains=search)
            )
            digits = search.upper().removeprefix('BO-')
            if digits.isdigit():
                query |= Q(pk=int(digits))
            orders = orders.filter(query)
        return orders.order_by('-created_at')

    @staticmethod
    def get_order_for(user, order_id) -> BulkOrder:
        try:
            order = BulkOrder.objects.select_related('distributor').prefetch_related('items__product').get(pk=order_id)
        except BulkOrder.DoesNotExist:
            raise NotFound('Bulk order not found')
        if order.distributor_id != user.pk and not has_co_admin_permission(user, 'canManageDistributors'):
            raise PermissionDenied('Forbidden')
        return order

    @staticmethod
    @transaction.atomic
    def update_order(order: BulkOrder, data: Dict, acting_user) -> BulkOrder:
        """
        Admin update: status and the charges that feed the total.

        Repricing moves the ledger entry; rejection removes it.
        """
        order = BulkOrder.objects.select_for_update().get(pk=order.pk)
        distributor = DistributorService.ensure_profile(order.distributor)
        previous_status = order.status

        new_status = data.get('status')
        if new_status and new_status != order.status:
            if not order.can_transition_to(new_status):
                raise InvalidTransition(order.status, new_status)
            order.status = new_status
            order.reviewed_by = acting_user

        for field in ('discount', 'delivery_charges', 'delivery_charges_gst_rate', 'cash_handling_fees'):
            if field in data and data[field] is not None:
                setattr(order, field, money(data[field]))
        for field in ('payment_type', 'notes'):
            if field in data and data[field] is not None:
                setattr(order, field, data[field])

        order.total_amount = order_total(
            order.subtotal, order.delivery_charges, order.cash_handling_fees, order.discount
        )
        order.save()

        if order.status == 'rejected':
            if previous_status != 'rejected':
                LedgerService.remove_order_entry(distributor, 'bulk', order.pk)
        elif order.total_amount > 0:
            changed = LedgerService.update_order_amount(distributor, 'bulk', order.pk, order.total_amount)
            if not changed and not distributor.ledger_entries.filter(order_type='bulk', order_id=order.pk).exists():
                LedgerService.add_entry(
                    distributor, 'order', order.total_amount, order_type='bulk', order_id=order.pk,
                    description=f"Bulk Order {order.order_number}", created_by=acting_user,
                )
        else:
            LedgerService.remove_order_entry(distributor, 'bulk', order.pk)

        if order.status != previous_status:
            NotificationService.notify(
                order.distributor, 'order_status', f'Bulk order {order.status}',
                f'Your bulk order {order.order_number} is now {order.status}.',
                link=f'/distributor/bulk-orders/{order.pk}'
            )
        logger.info(f"Bulk order {order.order_number} updated by {acting_user.pk}: status={order.status}")
        return order

    @staticmethod
    @transaction.atomic
    def delete_order(order: BulkOrder, acting_user):
        """Delete the order and its ledger entry, rebalancing later entries"""
        distributor = DistributorService.ensure_profile(order.distributor)
        removed = LedgerService.remove_order_entry(distributor, 'bulk', order.pk)
        order_id = order.pk
        order.delete()
        logger.info(f"Bulk order BO-{order_id} deleted by {acting_user.pk}; ledger entries removed={removed}")
        return order_id

    @staticmethod
    def stats():
        by_status = [
            {'status': row['status'], 'count': row['count'], 'totalAmount': row['total'] or Decimal('0.00')}
            for row in BulkOrder.objects.values('status').annotate(
                count=Count('id'), total=Sum('total_amount')
            ).order_by('status')
        ]
        return {
            'byStatus': by_status,
            'total': sum(row['count'] for row in by_status),
        }
