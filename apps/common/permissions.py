"""
Role based permission classes shared by every app.

Co-admins are users with role ``admin`` and ``is_co_admin`` set; they pass
``IsAdmin`` but need an explicit key for ``HasCoAdminPermission`` checks
and never pass ``IsFullAdmin``.
"""
from rest_framework.permissions import BasePermission

CO_ADMIN_PERMISSIONS = [
    'canCreateProducts',
    'canEditProducts',
    'canDeleteProducts',
    'canApproveProducts',
    'canCreateCategories',
    'canEditCategories',
    'canDeleteCategories',
    'canManageSellers',
    'canApproveSellers',
    'canManageOrders',
    'canManageReturns',
    'canManageDistributors',
    'canManageRewards',
    'canManageFooter',
    'canViewReports',
]


def is_admin_user(user):
    """Admins and co-admins both count as admin for access checks"""
    if not user or not user.is_authenticated:
        return False
    return user.role == 'admin' or user.is_superuser


def is_full_admin(user):
    if not user or not user.is_authenticated:
        return False
    return user.is_superuser or (user.role == 'admin' and not user.is_co_admin)


def has_co_admin_permission(user, key):
    if is_full_admin(user):
        return True
    return is_admin_user(user) and user.is_co_admin and key in (user.permissions or [])


class IsAdmin(BasePermission):
    message = 'Admin access required'

    def has_permission(self, request, view):
        return is_admin_user(request.user)


class IsFullAdmin(BasePermission):
    message = 'Only a full admin may perform this action'

    def has_permission(self, request, view):
        return is_full_admin(request.user)


class IsSeller(BasePermission):
    message = 'Seller access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == 'seller')


class IsApprovedSeller(BasePermission):
    message = 'Seller account is not approved'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and user.is_authenticated
            and user.role == 'seller'
            and user.seller_status == 'approved'
        )


class IsDistributor(BasePermission):
    message = 'Distributor access required'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.role == 'distributor')


class IsAdminOrSeller(BasePermission):
    message = 'Admin or seller access required'

    def has_permission(self, request, view):
        user = request.user
        return is_admin_user(user) or bool(user and user.is_authenticated and user.role == 'seller')


def HasCoAdminPermission(key):
    """
    Build a permission class requiring ``key`` in a co-admin's permission list.

    Full admins always pass.
    """

    class _HasCoAdminPermission(BasePermission):
        message = f"Missing permission: {key}"

        def has_permission(self, request, view):
            return has_co_admin_permission(request.user, key)

    _HasCoAdminPermission.__name__ = f"HasCoAdminPermission_{key}"
    return _HasCoAdminPermission
