"""
Admin product approval views.
"""
from rest_framework.views import APIView

from apps.common.permissions import HasCoAdminPermission
from apps.common.utils import success_response, paginated_response
from ..serializers import ProductListSerializer, ProductDetailSerializer, ProductRejectSerializer
from ..services import ProductService


class PendingProductListView(APIView):
    permission_classes = [HasCoAdminPermission('canApproveProducts')]

    def get(self, request):
        return paginated_response(ProductService.pending_products(), ProductListSerializer, request, key='products')


class ApproveProductView(APIView):
    permission_classes = [HasCoAdminPermission('canApproveProducts')]

    def post(self, request, product_id):
        product = ProductService.approve_product(ProductService.get_product(product_id), request.user)
        return success_response(ProductDetailSerializer(product).data)


class RejectProductView(APIView):
    permission_classes = [HasCoAdminPermission('canApproveProducts')]

    def post(self, request, product_id):
        serializer = ProductRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.reject_product(
            ProductService.get_product(product_id), serializer.validated_data['reason'], request.user
        )
        return success_response(ProductDetailSerializer(product).data)
