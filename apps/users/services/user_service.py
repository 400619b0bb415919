"""
Account, role and seller approval operations.
"""
import logging

from django.db import transaction
from django.db.models import Q
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.exceptions import NotFound, PermissionDenied, ValidationFailed
from apps.notifications.services import NotificationService
from ..models import User

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


class UserService:
    """Service for user accounts and admin user management"""

    @staticmethod
    def get_user(user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound('User not found')

    @staticmethod
    def authenticate(identifier, password):
        """Log in with username or email; inactive accounts are refused"""
        user = User.objects.filter(Q(username=identifier) | Q(email__iexact=identifier)).first()
        if not user or not user.check_password(password):
            logger.info(f"Failed login for {identifier}")
            raise AuthenticationFailed('Invalid credentials')
        if not user.is_active:
            raise AuthenticationFailed('Account is disabled')
        return user

    @staticmethod
    def issue_tokens(user):
        refresh = RefreshToken.for_user(user)
        refresh['role'] = user.role
        return {
            'access': str(refresh.access_token),
            'refresh': str(refresh),
        }

    @staticmethod
    def search_users(search='', role=None):
        users = User.objects.all().order_by('-created_at')
        if search:
            users = users.filter(
                Q(username__icontains=search) |
                Q(email__icontains=search) |
                Q(name__icontains=search) |
                Q(phone__icontains=search)
            )
        if role:
            users = users.filter(role=role)
        return users

    @staticmethod
    @transaction.atomic
    def change_role(user, role, acting_user):
        if user.pk == acting_user.pk:
            raise PermissionDenied('You cannot change your own role')

        previous = user.role
        user.role = role
        if role == 'seller' and previous != 'seller':
            user.seller_status = 'pending'
        elif role != 'seller':
            user.seller_status = None
        if role != 'admin':
            user.permissions = []
        user.save()

        if role == 'distributor':
            from apps.distributors.services import DistributorService
            DistributorService.ensure_profile(user)

        audit_logger.info(f"ROLE_CHANGE user={user.pk} {previous}->{role} by={acting_user.pk}")
        return user

    @staticmethod
    def delete_user(user, acting_user):
        if user.pk == acting_user.pk:
            raise PermissionDenied('You cannot delete your own account')
        if user.is_superuser:
            raise PermissionDenied('Superusers cannot be deleted through the API')
        audit_logger.info(f"USER_DELETE user={user.pk} by={acting_user.pk}")
        user.delete()

    @staticmethod
    def create_co_admin(data, acting_user):
        user = User(
            username=data['username'],
            email=data['email'],
            name=data.get('name', ''),
            role='admin',
            is_co_admin=True,
            permissions=list(data.get('permissions', [])),
        )
        user.set_password(data['password'])
        user.save()
        audit_logger.info(f"CO_ADMIN_CREATE user={user.pk} by={acting_user.pk} permissions={user.permissions}")
        return user

    @staticmethod
    def list_co_admins():
        return User.objects.filter(role='admin', is_co_admin=True).order_by('username')

    @staticmethod
    def update_co_admin_permissions(user, permissions, acting_user):
        if not user.is_co_admin:
            raise ValidationFailed('User is not a co-admin')
        user.permissions = sorted(set(permissions))
        user.save(update_fields=['permissions', 'updated_at'])
        audit_logger.info(f"CO_ADMIN_PERMISSIONS user={user.pk} by={acting_user.pk} permissions={user.permissions}")
        return user

    @staticmethod
    def approve_seller(user, acting_user):
        if user.role != 'seller':
            raise ValidationFailed('User is not a seller')
        user.seller_status = 'approved'
        user.rejection_reason = ''
        user.save(update_fields=['seller_status', 'rejection_reason', 'updated_at'])
        NotificationService.notify(
            user, 'system', 'Seller account approved',
            'Your seller account has been approved. You can now list products.',
            link='/seller/dashboard'
        )
        logger.info(f"Seller {user.pk} approved by {acting_user.pk}")
        return user

    @staticmethod
    def reject_seller(user, reason, acting_user):
        if user.role != 'seller':
            raise ValidationFailed('User is not a seller')
        user.seller_status = 'rejected'
        user.rejection_reason = reason
        user.save(update_fields=['seller_status', 'rejection_reason', 'updated_at'])
        NotificationService.notify(
            user, 'system', 'Seller account rejected',
            f'Your seller application was rejected: {reason}',
            link='/seller/status'
        )
        logger.info(f"Seller {user.pk} rejected by {acting_user.pk}")
        return user
