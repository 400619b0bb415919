"""
Distributor account management.
"""
import logging

from django.db import transaction
from django.db.models import Count, Q, Sum

from apps.common.exceptions import NotFound, PermissionDenied, ValidationFailed
from apps.common.permissions import has_co_admin_permission
from apps.users.models import User
from ..models import BulkOrder, Distributor

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


class DistributorService:
    """Service for distributor profiles"""

    @staticmethod
    def ensure_profile(user: User) -> Distributor:
        """Profile for a distributor user, created with defaults when missing"""
        distributor, created = Distributor.objects.get_or_create(
            user=user,
            defaults={
                'business_name': user.name or user.username,
                'contact_name': user.name or '',
                'phone': user.phone or '',
            }
        )
        if created:
            logger.info(f"Created distributor profile {distributor.pk} for user {user.pk}")
        return distributor

    @staticmethod
    def search(search='', include_inactive=False):
        distributors = Distributor.objects.select_related('user')
        if not include_inactive:
            distributors = distributors.filter(is_active=True)
        search = (search or '').strip()
        if search:
            distributors = distributors.filter(
                Q(business_name__icontains=search) |
                Q(contact_name__icontains=search) |
                Q(user__email__icontains=search) |
                Q(user__username__icontains=search) |
                Q(phone__icontains=search) |
                Q(gstin__icontains=search)
            )
        return distributors.order_by('business_name')

    @staticmethod
    def get(distributor_id) -> Distributor:
        try:
            return Distributor.objects.select_related('user').get(pk=distributor_id)
        except Distributor.DoesNotExist:
            raise NotFound('Distributor not found')

    @staticmethod
    def get_for_user(user_id) -> Distributor:
        try:
            return Distributor.objects.select_related('user').get(user_id=user_id)
        except Distributor.DoesNotExist:
            raise NotFound('Distributor not found')

    @staticmethod
    def check_access(distributor: Distributor, user: User):
        """Distributors can read their own account; admins need canManageDistributors"""
        if distributor.user_id == user.pk:
            return
        if not has_co_admin_permission(user, 'canManageDistributors'):
            raise PermissionDenied('You cannot access this distributor account')

    @staticmethod
    @transaction.atomic
    def create_distributor(data, acting_user) -> Distributor:
        """
        Create the login and the profile together.

        ``data`` may carry ``user_id`` to promote an existing user instead.
        """
        profile_fields = {
            key: data[key] for key in (
                'business_name', 'contact_name', 'phone', 'address', 'city',
                'state', 'pincode', 'gstin', 'credit_limit', 'notes'
            ) if key in data
        }

        if data.get('user_id'):
            try:
                user = User.objects.get(pk=data['user_id'])
            except User.DoesNotExist:
                raise NotFound('User not found')
            if hasattr(user, 'distributor_profile'):
                raise ValidationFailed('User already has a distributor account')
            if user.role in ('admin', 'seller'):
                raise ValidationFailed(f'A {user.role} account cannot become a distributor')
            user.role = 'distributor'
            user.save()
        else:
            user = User(
                username=data['username'],
                email=data['email'],
                name=data.get('contact_name') or data.get('name', ''),
                phone=data.get('phone', ''),
                role='distributor',
            )
            user.set_password(data['password'])
            user.save()

        distributor = Distributor.objects.create(user=user, **profile_fields)
        audit_logger.info(f"DISTRIBUTOR_CREATE distributor={distributor.pk} user={user.pk} by={acting_user.pk}")
        return distributor

    @staticmethod
    def update_distributor(distributor: Distributor, data, acting_user) -> Distributor:
        for field, value in data.items():
            setattr(distributor, field, value)
        distributor.save()
        audit_logger.info(
            f"DISTRIBUTOR_UPDATE distributor={distributor.pk} fields={sorted(data)} by={acting_user.pk}"
        )
        return distributor

    @staticmethod
    def deactivate(distributor: Distributor, acting_user) -> Distributor:
        """Distributors are deactivated rather than deleted so the ledger survives"""
        distributor.is_active = False
        distributor.save(update_fields=['is_active', 'updated_at'])
        audit_logger.info(f"DISTRIBUTOR_DEACTIVATE distributor={distributor.pk} by={acting_user.pk}")
        return distributor

    @staticmethod
    def stats(distributor: Distributor):
        orders = BulkOrder.objects.filter(distributor_id=distributor.user_id)
        by_status = {
            row['status']: row['count']
            for row in orders.values('status').annotate(count=Count('id'))
        }
        return {
            'totalOrdered': distributor.total_ordered,
            'totalPaid': distributor.total_paid,
            'currentBalance': distributor.current_balance,
            'availableCredit': distributor.available_credit,
            'bulkOrders': sum(by_status.values()),
            'bulkOrdersByStatus': by_status,
            'bulkOrderValue': orders.exclude(status='rejected').aggregate(
                total=Sum('total_amount')
            )['total'] or 0,
        }
