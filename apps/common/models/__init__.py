"""
Common models module.

All models are exported from this module to maintain backward compatibility.
"""
from .config import SiteSetting

__all__ = [
    'SiteSetting',
]
