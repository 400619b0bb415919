"""
User-related validators for phone, pincode, GSTIN and email.
"""
import re
from rest_framework import serializers
from django.contrib.auth import get_user_model

PHONE_PATTERN = re.compile(r'^(\+91[\-\s]?)?[6-9]\d{9}$')
PINCODE_PATTERN = re.compile(r'^[1-9]\d{5}$')
GSTIN_PATTERN = re.compile(r'^\d{2}[A-Z]{5}\d{4}[A-Z][1-9A-Z]Z[0-9A-Z]$')


def validate_phone(value):
    """
    Validate an Indian mobile number.

    Accepts ten digits starting with 6-9, optionally prefixed with +91.
    """
    if not value:
        return value

    if not PHONE_PATTERN.match(value):
        raise serializers.ValidationError("Invalid phone number format. Expected: 10 digits starting with 6-9.")

    return value


def validate_pincode(value):
    if not PINCODE_PATTERN.match(value or ''):
        raise serializers.ValidationError("Invalid pincode. Expected: 6 digits.")
    return value


def validate_gstin(value):
    """
    Validate GSTIN format (15 characters). Empty values are allowed.
    """
    if not value:
        return value
    value = value.upper()
    if not GSTIN_PATTERN.match(value):
        raise serializers.ValidationError("Invalid GSTIN format.")
    return value


def validate_email_unique(value, exclude_user=None):
    """
    Validate email uniqueness (case-insensitive).

    Args:
        value: Email string
        exclude_user: User instance to exclude from uniqueness check (for updates)
    """
    if not value:
        return value

    queryset = get_user_model().objects.filter(email__iexact=value)
    if exclude_user:
        queryset = queryset.exclude(pk=exclude_user.pk)

    if queryset.exists():
        raise serializers.ValidationError("Email already registered.")

    return value.lower()
