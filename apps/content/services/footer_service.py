"""
Footer content management.
"""
import logging
from typing import Dict, Optional

from ..models import FooterContent
from apps.common.exceptions import NotFound, ValidationFailed

logger = logging.getLogger(__name__)


class FooterContentService:

    @staticmethod
    def list_contents(section: Optional[str] = None, is_active: Optional[bool] = None):
        contents = FooterContent.objects.all()
        if section:
            contents = contents.filter(section=section)
        if is_active is not None:
            contents = contents.filter(is_active=is_active)
        return contents.order_by('section', 'order', 'id')

    @staticmethod
    def get(content_id) -> FooterContent:
        try:
            return FooterContent.objects.get(pk=content_id)
        except FooterContent.DoesNotExist:
            raise NotFound('Footer content not found')

    @staticmethod
    def create(data: Dict, acting_user) -> FooterContent:
        content = FooterContent.objects.create(
            section=data['section'],
            title=data['title'],
            content=data['content'],
            order=data.get('order') or 0,
            is_active=True,
        )
        logger.info(f"Footer content {content.pk} created in '{content.section}' by {acting_user.pk}")
        return content

    @staticmethod
    def update(content: FooterContent, data: Dict, acting_user) -> FooterContent:
        """Blank section and title keep their current values"""
        for field in ('section', 'title'):
            if data.get(field):
                setattr(content, field, data[field])
        if 'content' in data:
            content.content = data['content']
        if data.get('order') is not None:
            content.order = data['order']
        content.save()
        logger.info(f"Footer content {content.pk} updated by {acting_user.pk}")
        return content

    @staticmethod
    def delete(content: FooterContent, acting_user):
        content_id = content.pk
        content.delete()
        logger.info(f"Footer content {content_id} deleted by {acting_user.pk}")

    @staticmethod
    def toggle(content: FooterContent) -> FooterContent:
        content.is_active = not content.is_active
        content.save(update_fields=['is_active', 'updated_at'])
        return content

    @staticmethod
    def set_order(content: FooterContent, order) -> FooterContent:
        # Booleans are ints in Python; reject them along with strings and floats
        if isinstance(order, bool) or not isinstance(order, int) or order < 0:
            raise ValidationFailed('Order must be a non-negative number')
        content.order = order
        content.save(update_fields=['order', 'updated_at'])
        return content
