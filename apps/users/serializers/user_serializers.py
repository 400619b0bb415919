"""
User serializers for detail, registration, profile update and admin operations.
"""
from django.contrib.auth import password_validation
from rest_framework import serializers

from apps.common.permissions import CO_ADMIN_PERMISSIONS
from apps.common.validators import validate_phone, validate_email_unique
from ..models import User


class UserListSerializer(serializers.ModelSerializer):
    """
    Serializer for admin user lists - minimal fields.
    """

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'name', 'role', 'is_co_admin',
            'seller_status', 'is_active', 'created_at'
        ]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """
    Serializer for the current user's profile.
    Does not include sensitive fields like the password hash.
    """

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'name', 'phone', 'avatar', 'role',
            'is_co_admin', 'permissions', 'seller_status', 'rejection_reason',
            'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'username', 'email', 'role', 'is_co_admin', 'permissions',
            'seller_status', 'rejection_reason', 'created_at', 'updated_at'
        ]

    def validate_phone(self, value):
        return validate_phone(value)


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Self-service registration; only buyer and seller accounts"""
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=['buyer', 'seller'], default='buyer')

    class Meta:
        model = User
        fields = ['username', 'email', 'password', 'name', 'phone', 'role']

    def validate_email(self, value):
        return validate_email_unique(value)

    def validate_phone(self, value):
        return validate_phone(value)

    def validate(self, attrs):
        candidate = User(username=attrs.get('username'), email=attrs.get('email'))
        password_validation.validate_password(attrs['password'], candidate)
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(help_text="Username or email")
    password = serializers.CharField(write_only=True)


class AdminUserCreateSerializer(UserRegistrationSerializer):
    """Admin can create users of any non-admin role"""
    role = serializers.ChoiceField(choices=['buyer', 'seller', 'distributor'], default='buyer')


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[choice[0] for choice in User.ROLE_CHOICES])


class CoAdminPermissionsSerializer(serializers.Serializer):
    permissions = serializers.ListField(child=serializers.ChoiceField(choices=CO_ADMIN_PERMISSIONS), allow_empty=True)


class CoAdminCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)
    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    permissions = serializers.ListField(
        child=serializers.ChoiceField(choices=CO_ADMIN_PERMISSIONS), allow_empty=True, default=list
    )

    def validate_email(self, value):
        return validate_email_unique(value)

    def validate_username(self, value):
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("Username already taken.")
        return value


class SellerRejectSerializer(serializers.Serializer):
    reason = serializers.CharField()
