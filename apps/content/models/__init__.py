"""
Content models module.

All models are exported from this module to maintain backward compatibility.
"""
from .footer import FooterContent

__all__ = [
    'FooterContent',
]
