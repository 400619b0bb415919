"""
Payment serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .payment_serializers import PaymentTransactionSerializer, VerifyPaymentSerializer, RefundRecordSerializer

__all__ = [
    'PaymentTransactionSerializer',
    'VerifyPaymentSerializer',
    'RefundRecordSerializer',
]
