"""
Payment views module.

All views are exported from this module to maintain backward compatibility.
"""
from .razorpay_views import get_razorpay_key, create_razorpay_order, verify_razorpay_payment, list_my_payments

__all__ = [
    'get_razorpay_key',
    'create_razorpay_order',
    'verify_razorpay_payment',
    'list_my_payments',
]
