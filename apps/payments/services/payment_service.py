"""
Razorpay checkout flow and refund bookkeeping.
"""
import logging
import time
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from apps.cart.models import CartItem
from apps.common.exceptions import NotFound, PaymentVerificationError, ServiceError, ValidationFailed
from apps.orders.services import OrderService
from ..models import PaymentTransaction, RefundRecord
from .razorpay_client import RazorpayClient, to_paise, verify_payment_signature

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


class PaymentService:
    """Service for gateway orders, payment verification and refunds"""

    @staticmethod
    def get_key_id():
        return settings.RAZORPAY_KEY_ID

    @staticmethod
    def create_gateway_order(user, client=None):
        """
        Open a Razorpay order for the current cart total.

        Returns the stored ``PaymentTransaction``.
        """
        cart_items = list(CartItem.objects.filter(user=user).select_related('product', 'variant'))
        if not cart_items:
            raise ValidationFailed('Cart is empty')

        total = sum((item.line_total for item in cart_items), Decimal('0.00'))
        amount_paise = to_paise(total)
        receipt = f"receipt_{int(time.time() * 1000)}_{user.pk}"
        notes = {
            'userId': str(user.pk),
            'email': user.email,
            'itemCount': str(len(cart_items)),
        }

        client = client or RazorpayClient()
        gateway_order = client.create_order(amount_paise, receipt, notes)

        payment = PaymentTransaction.objects.create(
            user=user,
            razorpay_order_id=gateway_order['id'],
            amount=total,
            amount_paise=gateway_order.get('amount', amount_paise),
            currency=gateway_order.get('currency', settings.PAYMENT_CURRENCY),
            receipt=gateway_order.get('receipt', receipt),
            notes=notes,
        )
        audit_logger.info(
            f"PAYMENT_ORDER_CREATED user={user.pk} razorpay_order={payment.razorpay_order_id} amount={total}"
        )
        return payment

    @staticmethod
    def _mark_failed(payment, message):
        payment.status = 'failed'
        payment.error_message = message
        payment.save(update_fields=['status', 'error_message', 'updated_at'])

    @staticmethod
    def _check_payment(payment, razorpay_payment_id, razorpay_signature, client):
        """Return the reason a completed checkout cannot be accepted, or None"""
        if not verify_payment_signature(payment.razorpay_order_id, razorpay_payment_id, razorpay_signature):
            audit_logger.warning(
                f"PAYMENT_SIGNATURE_INVALID user={payment.user_id} razorpay_order={payment.razorpay_order_id}"
            )
            return 'Invalid payment signature', 'Payment verification failed'

        gateway_payment = client.fetch_payment(razorpay_payment_id)
        gateway_status = gateway_payment.get('status')
        if gateway_status != 'captured':
            audit_logger.warning(
                f"PAYMENT_NOT_CAPTURED user={payment.user_id} razorpay_payment={razorpay_payment_id} "
                f"status={gateway_status}"
            )
            return f'Payment not captured. Status: {gateway_status}', 'Payment has not been captured'

        if OrderService.cart_total(payment.user) != payment.amount:
            return 'Cart changed after payment was initiated', 'Cart total does not match the payment amount'
        return None

    @staticmethod
    def verify_and_place_order(user, razorpay_order_id, razorpay_payment_id, razorpay_signature,
                               address_id=None, shipping_details=None, notes='', client=None):
        """
        Verify a completed checkout and turn the cart into a paid order.

        The payment row stays locked until the order exists, so a repeated
        verify for the same gateway order returns the first order. A bad
        signature or an uncaptured payment marks the transaction failed and
        raises 400.
        """
        if not (razorpay_order_id and razorpay_payment_id and razorpay_signature):
            raise ValidationFailed('Missing payment verification details')

        client = client or RazorpayClient()
        error = None
        with transaction.atomic():
            try:
                payment = PaymentTransaction.objects.select_for_update().select_related('user').get(
                    razorpay_order_id=razorpay_order_id, user=user
                )
            except PaymentTransaction.DoesNotExist:
                raise NotFound('Payment order not found')

            if payment.status == 'paid' and payment.order_id:
                return payment.order

            failure = PaymentService._check_payment(payment, razorpay_payment_id, razorpay_signature, client)
            if failure:
                reason, message = failure
                PaymentService._mark_failed(payment, reason)
                error = PaymentVerificationError(message)
            else:
                try:
                    with transaction.atomic():
                        order = OrderService.checkout(
                            user,
                            address_id=address_id,
                            shipping_details=shipping_details,
                            payment_method='razorpay',
                            notes=notes,
                            razorpay_order_id=razorpay_order_id,
                            razorpay_payment_id=razorpay_payment_id,
                        )
                except ServiceError as e:
                    payment.razorpay_payment_id = razorpay_payment_id
                    payment.error_message = f"Order creation failed: {e.message}"
                    payment.save(update_fields=['razorpay_payment_id', 'error_message', 'updated_at'])
                    logger.error(f"Captured payment {razorpay_payment_id} has no order: {e.message}")
                    error = e
                else:
                    payment.razorpay_payment_id = razorpay_payment_id
                    payment.status = 'paid'
                    payment.order = order
                    payment.error_message = ''
                    payment.save()

        if error is not None:
            raise error

        audit_logger.info(
            f"PAYMENT_CAPTURED user={user.pk} order={order.order_number} "
            f"razorpay_payment={razorpay_payment_id} amount={payment.amount}"
        )
        return order

    @staticmethod
    @transaction.atomic
    def record_refund(return_request, amount, actor=None, method='original_payment', reference='', notes=''):
        """Create or update the refund record when a return enters the refund stage"""
        record, created = RefundRecord.objects.get_or_create(
            return_request=return_request,
            defaults={
                'order': return_request.order,
                'amount': amount,
                'method': method,
                'reference': reference,
                'notes': notes,
                'processed_by': actor,
            }
        )
        if not created:
            record.amount = amount
            record.method = method or record.method
            record.reference = reference or record.reference
            record.notes = notes or record.notes
            record.save()
        audit_logger.info(
            f"REFUND_INITIATED return={return_request.pk} order={return_request.order_id} "
            f"amount={amount} by={actor.pk if actor else 'system'}"
        )
        return record

    @staticmethod
    @transaction.atomic
    def mark_refund_processed(return_request, actor=None, reference=''):
        try:
            record = RefundRecord.objects.select_for_update().get(return_request=return_request)
        except RefundRecord.DoesNotExist:
            record = RefundRecord(
                return_request=return_request,
                order=return_request.order,
                amount=return_request.refund_amount or Decimal('0.00'),
            )
        record.status = 'processed'
        record.processed_by = actor
        if reference:
            record.reference = reference
        record.save()
        audit_logger.info(
            f"REFUND_PROCESSED return={return_request.pk} amount={record.amount} "
            f"reference={record.reference} by={actor.pk if actor else 'system'}"
        )
        return record

    @staticmethod
    @transaction.atomic
    def record_cancellation_refund(order, actor=None):
        """Refund bookkeeping for a prepaid order cancelled before delivery"""
        record, created = RefundRecord.objects.get_or_create(
            order=order,
            return_request=None,
            defaults={
                'amount': order.total,
                'method': 'original_payment',
                'reference': order.razorpay_payment_id,
                'notes': order.cancel_reason,
                'processed_by': actor,
            }
        )
        if created:
            audit_logger.info(
                f"REFUND_INITIATED order={order.order_number} amount={order.total} "
                f"reason=cancellation by={actor.pk if actor else 'system'}"
            )
        return record
