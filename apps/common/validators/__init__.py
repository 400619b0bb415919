"""
Common validators module.

All validators are exported from this module to maintain backward compatibility.
"""
from .user_validators import (
    validate_phone, validate_pincode, validate_gstin, validate_email_unique
)
from .price_validators import (
    validate_price_range, validate_mrp_not_below_price
)

__all__ = [
    'validate_phone',
    'validate_pincode',
    'validate_gstin',
    'validate_email_unique',
    'validate_price_range',
    'validate_mrp_not_below_price',
]
