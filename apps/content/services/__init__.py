"""
Content services module.

All services are exported from this module to maintain backward compatibility.
"""
from .footer_service import FooterContentService
from .upload_service import UploadService

__all__ = [
    'FooterContentService',
    'UploadService',
]
