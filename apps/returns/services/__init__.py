"""
Return services module.

All services are exported from this module to maintain backward compatibility.
"""
from .return_service import ReturnService

__all__ = [
    'ReturnService',
]
