"""
Category views.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from apps.common.permissions import HasCoAdminPermission, is_admin_user
from apps.common.utils import success_response, parse_bool
from ..serializers import CategorySerializer
from ..services import CategoryService


class CategoryListView(APIView):

    def get_permissions(self):
        if self.request.method == 'POST':
            return [HasCoAdminPermission('canCreateCategories')()]
        return [AllowAny()]

    def get(self, request):
        include_inactive = parse_bool(request.query_params.get('all')) and is_admin_user(request.user)
        categories = list(CategoryService.list_categories(include_inactive=bool(include_inactive)))
        data = CategorySerializer(categories, many=True).data
        for row, category in zip(data, categories):
            row['product_count'] = category.product_count
        return success_response(data)

    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(serializer.data, status.HTTP_201_CREATED)


class CategoryDetailView(APIView):

    def get_permissions(self):
        if self.request.method == 'PUT':
            return [HasCoAdminPermission('canEditCategories')()]
        if self.request.method == 'DELETE':
            return [HasCoAdminPermission('canDeleteCategories')()]
        return [AllowAny()]

    def get(self, request, category_id):
        return success_response(CategorySerializer(CategoryService.get_category(category_id)).data)

    def put(self, request, category_id):
        category = CategoryService.get_category(category_id)
        serializer = CategorySerializer(category, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return success_response(serializer.data)

    def delete(self, request, category_id):
        CategoryService.delete_category(CategoryService.get_category(category_id))
        return success_response({'success': True})
