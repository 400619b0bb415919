"""
File uploads onto the configured storage backend.
"""
import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

from apps.common.exceptions import ValidationFailed

logger = logging.getLogger(__name__)


class UploadService:

    @staticmethod
    def build_key(filename, folder='uploads'):
        """``<folder>/<uuid>-<sanitized name>``"""
        name = get_valid_filename(os.path.basename(filename or 'file')) or 'file'
        return f"{folder}/{uuid.uuid4().hex}-{name}"

    @staticmethod
    def store(uploaded_file, user, folder='uploads'):
        if uploaded_file is None:
            raise ValidationFailed('No file uploaded')

        max_size = settings.MAX_UPLOAD_SIZE
        if uploaded_file.size > max_size:
            raise ValidationFailed(
                f'File too large. Maximum file size is {max_size // (1024 * 1024)}MB.',
                details={'size': uploaded_file.size, 'maxSize': max_size},
            )

        key = default_storage.save(UploadService.build_key(uploaded_file.name, folder), uploaded_file)
        url = default_storage.url(key)
        logger.info(f"Stored upload {key} ({uploaded_file.size} bytes) for user {user.pk}")
        return {
            'url': url,
            'key': key,
            'name': uploaded_file.name,
            'size': uploaded_file.size,
            'contentType': getattr(uploaded_file, 'content_type', '') or '',
        }
