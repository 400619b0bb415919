"""
Return request service: eligibility, the status guard and side effects.
"""
import logging
import uuid
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional, Tuple

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.common.exceptions import InvalidTransition, NotFound, PermissionDenied, ValidationFailed
from apps.common.models import SiteSetting
from apps.common.permissions import has_co_admin_permission, is_admin_user
from apps.notifications.services import NotificationService
from apps.orders.models import Order, OrderItem
from apps.payments.services import PaymentService
from apps.products.services import ProductService
from apps.users.models import User
from ..models import ReturnMessage, ReturnReason, ReturnRequest, ReturnStatusHistory

logger = logging.getLogger(__name__)


class ReturnService:
    """Service class for return, refund and replacement requests"""

    @staticmethod
    def generate_return_number() -> str:
        return f"RET-{timezone.now():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"

    @staticmethod
    def return_window_days() -> int:
        return SiteSetting.get_value('return_window_days', cast=int)

    @staticmethod
    def get_order_item(user: User, order_id, item_id) -> Tuple[Order, OrderItem]:
        """The buyer's order (404 otherwise) and an item belonging to it (400 otherwise)"""
        try:
            order = Order.objects.get(pk=order_id, buyer=user)
        except Order.DoesNotExist:
            raise NotFound('Order not found')
        try:
            item = order.items.get(pk=item_id)
        except OrderItem.DoesNotExist:
            raise ValidationFailed('Item does not belong to this order')
        return order, item

    @staticmethod
    def check_eligibility(order: Order, item: OrderItem, request_type: Optional[str] = None) -> Dict:
        if request_type and request_type not in dict(ReturnRequest.REQUEST_TYPE_CHOICES):
            return {'eligible': False, 'reason': f'Unknown request type: {request_type}'}
        if order.status != 'delivered':
            return {'eligible': False, 'reason': 'Order has not been delivered'}

        window = ReturnService.return_window_days()
        delivered_at = order.delivered_at or order.updated_at
        deadline = delivered_at + timedelta(days=window)
        if timezone.now() > deadline:
            return {'eligible': False, 'reason': f'Return window of {window} days has expired'}

        open_request = item.return_requests.exclude(status__in=ReturnRequest.CLOSED_STATUSES).exists()
        if open_request:
            return {'eligible': False, 'reason': 'A return request already exists for this item'}

        return {'eligible': True, 'reason': None, 'deadline': deadline}

    @staticmethod
    @transaction.atomic
    def create_request(user: User, order_id, item_id, request_type: str, reason_id=None,
                       reason_text='', description='', media_urls=None, quantity=None) -> ReturnRequest:
        order, item = ReturnService.get_order_item(user, order_id, item_id)

        eligibility = ReturnService.check_eligibility(order, item, request_type)
        if not eligibility['eligible']:
            raise ValidationFailed(eligibility['reason'])

        reason = None
        if reason_id:
            try:
                reason = ReturnReason.objects.get(pk=reason_id, is_active=True)
            except ReturnReason.DoesNotExist:
                raise ValidationFailed('Unknown return reason')
            if not reason.applies_to(request_type):
                raise ValidationFailed('Reason does not apply to this request type')
            if reason.requires_media and not media_urls:
                raise ValidationFailed('Photos are required for this reason')
        elif not reason_text:
            raise ValidationFailed('A reason is required')

        quantity = quantity or item.quantity
        if quantity > item.quantity:
            raise ValidationFailed('Cannot return more items than were ordered')

        refund_amount = None
        refund_status = 'not_applicable'
        if request_type in ('return', 'refund'):
            refund_amount = item.unit_price * quantity
            refund_status = 'pending'

        return_request = ReturnRequest.objects.create(
            return_number=ReturnService.generate_return_number(),
            order=order,
            order_item=item,
            buyer=user,
            seller=item.seller,
            request_type=request_type,
            reason=reason,
            reason_text=reason_text or '',
            description=description or '',
            media_urls=media_urls or [],
            quantity=quantity,
            refund_amount=refund_amount,
            refund_status=refund_status,
        )
        ReturnStatusHistory.objects.create(
            return_request=return_request, to_status='pending', changed_by=user, notes='Request created'
        )

        if item.seller:
            NotificationService.notify(
                item.seller, 'order_status', 'New return request',
                f'Return {return_request.return_number} was requested for {item.product_name}.',
                link=f'/seller/returns/{return_request.pk}'
            )
        logger.info(f"Return {return_request.return_number} created for order {order.pk} item {item.pk}")
        return return_request

    @staticmethod
    def scoped_returns(user: User):
        returns = ReturnRequest.objects.select_related('order', 'order_item', 'buyer', 'seller', 'reason')
        if is_admin_user(user):
            return returns
        if user.role == 'seller':
            return returns.filter(seller=user)
        return returns.filter(buyer=user)

    @staticmethod
    def list_returns(user: User, filters: Dict):
        returns = ReturnService.scoped_returns(user)

        status = filters.get('status')
        if status and status != 'all':
            returns = returns.filter(status=status)
        request_type = filters.get('request_type')
        if request_type:
            returns = returns.filter(request_type=request_type)
        if is_admin_user(user):
            if filters.get('seller_id'):
                returns = returns.filter(seller_id=filters['seller_id'])
            if filters.get('buyer_id'):
                returns = returns.filter(buyer_id=filters['buyer_id'])
        search = (filters.get('search') or '').strip()
        if search:
            returns = returns.filter(
                Q(return_number__icontains=search) |
                Q(order__order_number__icontains=search) |
                Q(order_item__product_name__icontains=search)
            )
        return returns.order_by('-created_at')

    @staticmethod
    def get_return_for(user: User, return_id) -> ReturnRequest:
        try:
            return ReturnService.scoped_returns(user).get(pk=return_id)
        except ReturnRequest.DoesNotExist:
            raise NotFound('Return request not found')

    @staticmethod
    def can_manage(return_request: ReturnRequest, user: User) -> bool:
        if has_co_admin_permission(user, 'canManageReturns'):
            return True
        return user.role == 'seller' and return_request.seller_id == user.pk

    @staticmethod
    def _require_manager(return_request: ReturnRequest, user: User):
        if not ReturnService.can_manage(return_request, user):
            raise PermissionDenied('You cannot manage this return request')

    @staticmethod
    @transaction.atomic
    def transition(return_request: ReturnRequest, new_status: str, actor: Optional[User] = None,
                   notes: str = '', **changes) -> ReturnRequest:
        """
        Apply a guarded status change, append history and notify the buyer.

        ``changes`` are model fields updated in the same save.
        """
        return_request = ReturnRequest.objects.select_for_update().get(pk=return_request.pk)
        if new_status not in dict(ReturnRequest.STATUS_CHOICES):
            raise ValidationFailed(f"Unknown return status: {new_status}")
        if not return_request.can_transition_to(new_status):
            raise InvalidTransition(return_request.status, new_status)

        previous = return_request.status
        return_request.status = new_status
        for field, value in changes.items():
            setattr(return_request, field, value)
        return_request.save()

        ReturnStatusHistory.objects.create(
            return_request=return_request,
            from_status=previous,
            to_status=new_status,
            changed_by=actor,
            notes=notes or '',
        )

        NotificationService.notify(
            return_request.buyer, 'order_status', 'Return update',
            f"Your return {return_request.return_number} is now "
            f"{return_request.get_status_display().lower()}.",
            link=f'/returns/{return_request.pk}',
            metadata={'return_id': return_request.pk, 'from': previous, 'to': new_status}
        )
        logger.info(
            f"Return {return_request.return_number} {previous} -> {new_status} "
            f"by {actor.pk if actor else 'system'}"
        )
        return return_request

    @staticmethod
    def update_status(return_request: ReturnRequest, new_status: str, user: User, notes='',
                      refund_amount=None, refund_method='original_payment', refund_reference='') -> ReturnRequest:
        """Generic status endpoint for sellers and admins"""
        ReturnService._require_manager(return_request, user)

        if new_status == 'approved':
            return ReturnService.approve(return_request, user, notes)
        if new_status == 'rejected':
            return ReturnService.reject(return_request, user, notes)
        if new_status == 'refund_initiated':
            return ReturnService.initiate_refund(return_request, user, refund_amount, refund_method, notes)
        if new_status == 'refund_processed':
            return ReturnService.process_refund(return_request, user, refund_reference, notes)
        if new_status == 'completed':
            return ReturnService.complete(return_request, user, notes)
        if new_status == 'cancelled':
            raise PermissionDenied('Only the buyer can cancel a return request')
        return ReturnService.transition(return_request, new_status, user, notes)

    @staticmethod
    def approve(return_request: ReturnRequest, user: User, notes='') -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        return ReturnService.transition(
            return_request, 'approved', user, notes, seller_notes=notes or return_request.seller_notes
        )

    @staticmethod
    def reject(return_request: ReturnRequest, user: User, notes: str) -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        if not (notes or '').strip():
            raise ValidationFailed('A rejection note is required')
        refund_status = 'not_applicable' if return_request.refund_status == 'pending' else return_request.refund_status
        return ReturnService.transition(
            return_request, 'rejected', user, notes, rejection_reason=notes, refund_status=refund_status
        )

    @staticmethod
    def cancel(return_request: ReturnRequest, user: User, reason: str) -> ReturnRequest:
        if return_request.buyer_id != user.pk:
            raise PermissionDenied('Only the buyer can cancel a return request')
        if not (reason or '').strip():
            raise ValidationFailed('A cancellation reason is required')
        refund_status = 'not_applicable' if return_request.refund_status == 'pending' else return_request.refund_status
        return ReturnService.transition(
            return_request, 'cancelled', user, reason, cancel_reason=reason, refund_status=refund_status
        )

    @staticmethod
    def add_return_tracking(return_request: ReturnRequest, user: User, tracking: Dict) -> ReturnRequest:
        """Record the courier for the item going back; moves approved returns in transit"""
        if return_request.buyer_id != user.pk:
            ReturnService._require_manager(return_request, user)
        if not tracking or not tracking.get('tracking_number'):
            raise ValidationFailed('tracking_number is required')

        merged = {**return_request.return_tracking, **tracking}
        if return_request.status == 'approved':
            return ReturnService.transition(
                return_request, 'item_in_transit', user, 'Return shipment booked', return_tracking=merged
            )
        if return_request.status != 'item_in_transit':
            raise InvalidTransition(
                return_request.status, 'item_in_transit',
                message='Return tracking can only be added once the request is approved'
            )
        return_request.return_tracking = merged
        return_request.save(update_fields=['return_tracking', 'updated_at'])
        return return_request

    @staticmethod
    def mark_received(return_request: ReturnRequest, user: User, condition: str, notes='') -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        if condition not in dict(ReturnRequest.CONDITION_CHOICES):
            raise ValidationFailed('A valid item condition is required')
        return ReturnService.transition(
            return_request, 'item_received', user, notes, received_condition=condition
        )

    @staticmethod
    def add_replacement_tracking(return_request: ReturnRequest, user: User, tracking: Dict) -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        if not tracking or not tracking.get('tracking_number'):
            raise ValidationFailed('tracking_number is required')

        merged = {**return_request.replacement_tracking, **tracking}
        if return_request.status == 'replacement_dispatched':
            return_request.replacement_tracking = merged
            return_request.save(update_fields=['replacement_tracking', 'updated_at'])
            return return_request
        return ReturnService.transition(
            return_request, 'replacement_dispatched', user, 'Replacement shipped', replacement_tracking=merged
        )

    @staticmethod
    def initiate_refund(return_request: ReturnRequest, user: User, amount=None,
                        method='original_payment', notes='') -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        if not return_request.can_transition_to('refund_initiated'):
            raise InvalidTransition(return_request.status, 'refund_initiated')
        try:
            amount = Decimal(str(amount)) if amount is not None else return_request.refund_amount
        except InvalidOperation:
            raise ValidationFailed(f'Invalid refund amount: {amount}')
        max_amount = return_request.order_item.unit_price * return_request.quantity
        if amount is None or amount <= 0:
            raise ValidationFailed('Refund amount must be positive')
        if amount > max_amount:
            raise ValidationFailed(f'Refund amount cannot exceed {max_amount}')

        with transaction.atomic():
            updated = ReturnService.transition(
                return_request, 'refund_initiated', user, notes,
                refund_amount=amount, refund_status='initiated'
            )
            PaymentService.record_refund(updated, amount, actor=user, method=method or 'original_payment', notes=notes)
        return updated

    @staticmethod
    def process_refund(return_request: ReturnRequest, user: User, reference='', notes='') -> ReturnRequest:
        """Mark the refund paid out and restock resaleable items"""
        ReturnService._require_manager(return_request, user)
        with transaction.atomic():
            updated = ReturnService.transition(
                return_request, 'refund_processed', user, notes, refund_status='processed'
            )
            PaymentService.mark_refund_processed(updated, actor=user, reference=reference)
            if updated.received_condition == 'resaleable':
                item = updated.order_item
                if item.product_id:
                    ProductService.restock(item.product_id, item.variant_id, updated.quantity)
                    logger.info(f"Restocked {updated.quantity} x product {item.product_id} from return {updated.pk}")
        NotificationService.notify(
            updated.buyer, 'wallet', 'Refund processed',
            f'Your refund of {updated.refund_amount} for return {updated.return_number} has been processed.',
            link=f'/returns/{updated.pk}'
        )
        return updated

    @staticmethod
    def complete(return_request: ReturnRequest, user: User, notes='') -> ReturnRequest:
        ReturnService._require_manager(return_request, user)
        return ReturnService.transition(return_request, 'completed', user, notes)

    @staticmethod
    def _require_participant(return_request: ReturnRequest, user: User):
        if return_request.buyer_id == user.pk or return_request.seller_id == user.pk:
            return
        if is_admin_user(user):
            return
        raise PermissionDenied('You are not part of this return request')

    @staticmethod
    def list_messages(return_request: ReturnRequest, user: User):
        ReturnService._require_participant(return_request, user)
        return return_request.messages.select_related('sender')

    @staticmethod
    def add_message(return_request: ReturnRequest, user: User, message: str, media_urls=None) -> ReturnMessage:
        ReturnService._require_participant(return_request, user)
        if not (message or '').strip():
            raise ValidationFailed('Message cannot be empty')
        msg = ReturnMessage.objects.create(
            return_request=return_request, sender=user, message=message, media_urls=media_urls or []
        )

        recipient = return_request.seller if user.pk == return_request.buyer_id else return_request.buyer
        if recipient:
            NotificationService.notify(
                recipient, 'new_message', 'New message on return',
                f'New message on return {return_request.return_number}.',
                link=f'/returns/{return_request.pk}'
            )
        return msg

    @staticmethod
    def active_reasons(request_type: Optional[str] = None):
        reasons = ReturnReason.objects.filter(is_active=True)
        if request_type:
            return [reason for reason in reasons if reason.applies_to(request_type)]
        return list(reasons)
