"""
Public product list and detail views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny

from apps.common.utils import success_response, get_page_params, paginate_queryset, pagination_meta
from ..serializers import ProductListSerializer, ProductDetailSerializer
from ..services import ProductService


class ProductListView(APIView):
    """Product list endpoint - GET /api/products"""
    permission_classes = [AllowAny]

    def get(self, request):
        products = ProductService.browse(request.query_params)

        page, limit = get_page_params(request, default_limit=20)
        items, total, total_pages = paginate_queryset(products, page, limit)

        return success_response({
            'products': ProductListSerializer(items, many=True).data,
            'pagination': pagination_meta(total, page, limit, total_pages),
        })


class ProductDetailView(APIView):
    """Product detail endpoint - GET /api/products/{id}"""
    permission_classes = [AllowAny]

    def get(self, request, product_id):
        product = ProductService.get_visible_product(product_id, request.user)
        return success_response(ProductDetailSerializer(product).data)
