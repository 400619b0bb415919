"""
User views module.

All views are exported from this module to maintain backward compatibility.
"""
from .auth_views import RegisterView, LoginView
from .profile_views import MeView
from .address_views import AddressViewSet
from .admin_views import (
    AdminUserListView, AdminUserDetailView, AdminUserRoleView,
    CoAdminListView, CoAdminPermissionsView,
    SellerListView, SellerApproveView, SellerRejectView,
)

__all__ = [
    'RegisterView',
    'LoginView',
    'MeView',
    'AddressViewSet',
    'AdminUserListView',
    'AdminUserDetailView',
    'AdminUserRoleView',
    'CoAdminListView',
    'CoAdminPermissionsView',
    'SellerListView',
    'SellerApproveView',
    'SellerRejectView',
]
