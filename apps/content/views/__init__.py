"""
Content views module.

All views are exported from this module to maintain backward compatibility.
"""
from .footer_views import (
    FooterContentListView, FooterContentDetailView,
    AdminFooterContentListView, AdminFooterContentDetailView,
    FooterContentToggleView, FooterContentOrderView,
)
from .upload_views import upload_file

__all__ = [
    'FooterContentListView',
    'FooterContentDetailView',
    'AdminFooterContentListView',
    'AdminFooterContentDetailView',
    'FooterContentToggleView',
    'FooterContentOrderView',
    'upload_file',
]
