"""
Core order service for checkout, queries and status changes.
"""
import logging
import uuid
from decimal import Decimal
from typing import Dict, Optional

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.cart.models import CartItem
from apps.common.exceptions import InvalidTransition, NotFound, PermissionDenied, ValidationFailed
from apps.common.permissions import has_co_admin_permission, is_admin_user
from apps.notifications.services import NotificationService
from apps.products.services import ProductService
from apps.rewards.services import RewardService
from apps.users.models import Address, User
from ..models import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderService:
    """Service class for core order business logic"""

    @staticmethod
    def generate_order_number() -> str:
        return f"ORD-{timezone.now():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"

    @staticmethod
    def resolve_shipping(user: User, address_id=None, shipping_details: Optional[Dict] = None):
        """Return ``(address, snapshot)`` from a saved address or an inline one"""
        if address_id:
            try:
                address = Address.objects.get(pk=address_id, user=user)
            except Address.DoesNotExist:
                raise NotFound('Address not found')
            return address, address.as_shipping_details()
        if shipping_details:
            missing = [key for key in ('name', 'phone', 'address', 'city', 'pincode') if not shipping_details.get(key)]
            if missing:
                raise ValidationFailed('Incomplete shipping details', details={'missing': missing})
            return None, shipping_details
        default = Address.objects.filter(user=user, is_default=True).first()
        if default:
            return default, default.as_shipping_details()
        raise ValidationFailed('Shipping address is required')

    @staticmethod
    def cart_total(user: User) -> Decimal:
        items = CartItem.objects.filter(user=user).select_related('product', 'variant')
        return sum((item.line_total for item in items), Decimal('0.00'))

    @staticmethod
    @transaction.atomic
    def checkout(user: User, address_id=None, shipping_details=None, payment_method='cod',
                 notes='', razorpay_order_id='', razorpay_payment_id='') -> Order:
        """
        Turn the user's cart into an order.

        Cart, product and variant rows are locked for the whole transaction so
        two concurrent checkouts cannot oversell or place the same cart twice.
        The cart is cleared on success.
        """
        cart_items = list(CartItem.objects.select_for_update().filter(user=user).order_by('pk'))
        if not cart_items:
            raise ValidationFailed('Cart is empty')

        address, snapshot = OrderService.resolve_shipping(user, address_id, shipping_details)

        products, variants = ProductService.lock_stock_rows(
            {item.product_id for item in cart_items},
            {item.variant_id for item in cart_items if item.variant_id}
        )

        shortages = []
        for item in cart_items:
            product = products[item.product_id]
            if not product.is_visible:
                shortages.append({'product_id': product.pk, 'name': product.name, 'available': 0})
                continue
            source = variants[item.variant_id] if item.variant_id else product
            if source.stock < item.quantity:
                shortages.append({'product_id': product.pk, 'name': product.name, 'available': source.stock})
        if shortages:
            raise ValidationFailed('Insufficient stock', details={'items': shortages})

        paid = payment_method == 'razorpay' and bool(razorpay_payment_id)
        order = Order.objects.create(
            order_number=OrderService.generate_order_number(),
            buyer=user,
            status='paid' if paid else 'pending',
            payment_method=payment_method,
            payment_status='paid' if paid else 'pending',
            razorpay_order_id=razorpay_order_id or '',
            razorpay_payment_id=razorpay_payment_id or '',
            address=address,
            shipping_details=snapshot,
            notes=notes or '',
            subtotal=Decimal('0.00'),
            total=Decimal('0.00'),
        )

        subtotal = Decimal('0.00')
        sellers = {}
        for item in cart_items:
            product = products[item.product_id]
            variant = variants.get(item.variant_id) if item.variant_id else None
            unit_price = variant.effective_price if variant else product.price
            line_total = unit_price * item.quantity

            OrderItem.objects.create(
                order=order,
                product=product,
                variant=variant,
                seller=product.seller,
                product_name=product.name,
                variant_label=' / '.join(p for p in [variant.color, variant.size] if p) if variant else '',
                sku=(variant.sku if variant and variant.sku else product.sku),
                image_url=(variant.image_url if variant and variant.image_url else product.image_url),
                quantity=item.quantity,
                unit_price=unit_price,
                total_price=line_total,
            )

            if variant:
                variant.stock -= item.quantity
                variant.save(update_fields=['stock'])
            else:
                product.stock -= item.quantity
                product.save(update_fields=['stock'])

            subtotal += line_total
            sellers[product.seller_id] = product.seller

        order.subtotal = subtotal
        order.total = subtotal + order.shipping_charges
        order.save(update_fields=['subtotal', 'total'])

        CartItem.objects.filter(user=user).delete()

        NotificationService.notify(
            user, 'order_status', 'Order placed',
            f'Your order {order.order_number} has been placed.',
            link=f'/orders/{order.pk}'
        )
        for seller in sellers.values():
            NotificationService.notify(
                seller, 'order_status', 'New order received',
                f'Order {order.order_number} contains your products.',
                link=f'/seller/orders/{order.pk}'
            )

        logger.info(f"Order {order.order_number} created for user {user.pk} total={order.total}")
        return order

    @staticmethod
    def scoped_orders(user: User):
        """Buyers see their own orders, sellers orders with their products, admins all"""
        orders = Order.objects.select_related('buyer').prefetch_related('items')
        if is_admin_user(user):
            return orders
        if user.role == 'seller':
            return orders.filter(items__seller=user).distinct()
        return orders.filter(buyer=user)

    @staticmethod
    def list_orders(user: User, filters: Dict):
        orders = OrderService.scoped_orders(user)

        status = filters.get('status')
        if status and status != 'all':
            orders = orders.filter(status=status)

        search = (filters.get('search') or '').strip()
        if search:
            orders = orders.filter(
                Q(order_number__icontains=search) |
                Q(buyer__name__icontains=search) |
                Q(buyer__email__icontains=search) |
                Q(items__product_name__icontains=search)
            ).distinct()

        date_from = parse_date(filters.get('date_from') or '')
        if date_from:
            orders = orders.filter(created_at__date__gte=date_from)
        date_to = parse_date(filters.get('date_to') or '')
        if date_to:
            orders = orders.filter(created_at__date__lte=date_to)

        return orders.order_by('-created_at')

    @staticmethod
    def get_order_for(user: User, order_id) -> Order:
        try:
            return OrderService.scoped_orders(user).get(pk=order_id)
        except Order.DoesNotExist:
            raise NotFound('Order not found')

    @staticmethod
    def can_manage(order: Order, user: User) -> bool:
        if is_admin_user(user):
            return has_co_admin_permission(user, 'canManageOrders')
        return user.role == 'seller' and order.items.filter(seller=user).exists()

    @staticmethod
    def _restock(order: Order):
        for item in order.items.all():
            if item.product_id:
                ProductService.restock(item.product_id, item.variant_id, item.quantity)

    @staticmethod
    @transaction.atomic
    def transition(order: Order, new_status: str, actor: Optional[User] = None,
                   reason: str = '', tracking: Optional[Dict] = None) -> Order:
        """
        Apply a status change after checking the transition table.

        Cancellation restores stock and records a refund when the order was
        prepaid. Delivery awards reward points. Every change notifies the buyer.
        """
        order = Order.objects.select_for_update().get(pk=order.pk)
        if new_status not in dict(Order.STATUS_CHOICES):
            raise ValidationFailed(f"Unknown order status: {new_status}")
        if not order.can_transition_to(new_status):
            raise InvalidTransition(order.status, new_status)

        previous = order.status
        order.status = new_status
        refund_due = new_status == 'cancelled' and order.payment_status == 'paid'
        if new_status == 'cancelled':
            order.cancel_reason = reason or 'Cancelled'
        if refund_due:
            order.payment_status = 'refunded'
        if tracking:
            order.tracking = {**order.tracking, **tracking}
        order.save()

        if new_status == 'cancelled':
            OrderService._restock(order)
            if refund_due:
                from apps.payments.services import PaymentService
                PaymentService.record_cancellation_refund(order, actor)
        elif new_status == 'delivered':
            RewardService.award_purchase_points(order)

        NotificationService.notify(
            order.buyer, 'order_status', f'Order {new_status}',
            f'Your order {order.order_number} is now {new_status}.',
            link=f'/orders/{order.pk}',
            metadata={'order_id': order.pk, 'from': previous, 'to': new_status}
        )
        logger.info(
            f"Order {order.order_number} {previous} -> {new_status} by {actor.pk if actor else 'system'}"
        )
        return order

    @staticmethod
    def update_status(order: Order, new_status: str, user: User, reason='', tracking=None) -> Order:
        if not OrderService.can_manage(order, user):
            raise PermissionDenied('You cannot update this order')
        if new_status == 'paid' and not is_admin_user(user):
            raise PermissionDenied('Only payments or admins can mark an order paid')
        return OrderService.transition(order, new_status, user, reason=reason, tracking=tracking)

    @staticmethod
    def cancel_by_buyer(order: Order, user: User, reason='') -> Order:
        if order.buyer_id != user.pk:
            raise PermissionDenied('You can only cancel your own orders')
        if order.status not in Order.BUYER_CANCELLABLE:
            raise InvalidTransition(
                order.status, 'cancelled',
                message=f"Orders that are {order.status} can no longer be cancelled"
            )
        return OrderService.transition(order, 'cancelled', user, reason=reason or 'Cancelled by buyer')
