"""
User serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .user_serializers import (
    UserListSerializer, UserDetailSerializer, UserRegistrationSerializer,
    LoginSerializer, AdminUserCreateSerializer, RoleUpdateSerializer,
    CoAdminPermissionsSerializer, CoAdminCreateSerializer, SellerRejectSerializer,
)
from .address_serializers import AddressSerializer

__all__ = [
    'UserListSerializer',
    'UserDetailSerializer',
    'UserRegistrationSerializer',
    'LoginSerializer',
    'AdminUserCreateSerializer',
    'RoleUpdateSerializer',
    'CoAdminPermissionsSerializer',
    'CoAdminCreateSerializer',
    'SellerRejectSerializer',
    'AddressSerializer',
]
