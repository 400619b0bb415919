"""
User services module.

All services are exported from this module to maintain backward compatibility.
"""
from .user_service import UserService

__all__ = [
    'UserService',
]
