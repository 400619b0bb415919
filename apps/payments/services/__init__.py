"""
Payment services module.

All services are exported from this module to maintain backward compatibility.
"""
from .razorpay_client import RazorpayClient, verify_payment_signature
from .payment_service import PaymentService

__all__ = [
    'RazorpayClient',
    'verify_payment_signature',
    'PaymentService',
]
