"""
Price and quantity validators.
"""
from rest_framework import serializers


def validate_price_range(value, min_value=0, max_value=None):
    """
    Validate price is within acceptable range.

    Args:
        value: Price decimal
        min_value: Minimum allowed price (default: 0)
        max_value: Maximum allowed price (optional)

    Raises:
        serializers.ValidationError: If price is outside valid range

    Returns:
        decimal.Decimal: Validated price
    """
    if value < min_value:
        raise serializers.ValidationError(f"Price must be at least {min_value}.")

    if max_value is not None and value > max_value:
        raise serializers.ValidationError(f"Price must not exceed {max_value}.")

    return value


def validate_mrp_not_below_price(price, mrp):
    if mrp is not None and price is not None and mrp < price:
        raise serializers.ValidationError({'mrp': 'MRP cannot be lower than the selling price.'})
