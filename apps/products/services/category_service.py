"""
Category service.
"""
from django.db.models import Count, Q

from apps.common.exceptions import NotFound, ValidationFailed
from ..models import Category


class CategoryService:

    @staticmethod
    def list_categories(include_inactive=False):
        categories = Category.objects.annotate(
            product_count=Count('products', filter=Q(products__approval_status='approved', products__is_active=True))
        )
        if not include_inactive:
            categories = categories.filter(is_active=True)
        return categories.order_by('name')

    @staticmethod
    def get_category(category_id):
        try:
            return Category.objects.get(pk=category_id)
        except Category.DoesNotExist:
            raise NotFound('Category not found')

    @staticmethod
    def delete_category(category):
        if category.products.exists():
            raise ValidationFailed('Category still has products')
        category.delete()
