"""
Payment models module.

All models are exported from this module to maintain backward compatibility.
"""
from .payment_transaction import PaymentTransaction
from .refund_record import RefundRecord

__all__ = [
    'PaymentTransaction',
    'RefundRecord',
]
