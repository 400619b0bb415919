"""
Common views module.

All views are exported from this module to maintain backward compatibility.
"""
from .health_views import BasicHealthCheckView

__all__ = [
    'BasicHealthCheckView',
]
