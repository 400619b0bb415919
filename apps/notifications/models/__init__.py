"""
Notification models module.

All models are exported from this module to maintain backward compatibility.
"""
from .notification import Notification

__all__ = [
    'Notification',
]
