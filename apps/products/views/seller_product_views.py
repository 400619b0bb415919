"""
Seller product management and inventory views.
"""
from rest_framework import status
from rest_framework.views import APIView

from apps.common.permissions import IsApprovedSeller, IsAdminOrSeller, HasCoAdminPermission
from apps.common.utils import success_response, paginated_response, parse_int
from ..models import Product
from ..serializers import (
    ProductListSerializer, ProductDetailSerializer, ProductWriteSerializer, InventoryUpdateSerializer
)
from ..services import ProductService


class SellerProductListView(APIView):
    """List own products or create a new one"""

    def get_permissions(self):
        if self.request.method == 'POST':
            return [(IsApprovedSeller | HasCoAdminPermission('canCreateProducts'))()]
        return [IsAdminOrSeller()]

    def get(self, request):
        products = Product.objects.filter(seller=request.user).select_related('category', 'seller')
        approval_status = request.query_params.get('status')
        if approval_status:
            products = products.filter(approval_status=approval_status)
        search = request.query_params.get('search')
        if search:
            products = products.filter(name__icontains=search)
        return paginated_response(products.order_by('-created_at'), ProductListSerializer, request, key='products')

    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.create_product(request.user, serializer.validated_data)
        return success_response(ProductDetailSerializer(product).data, status.HTTP_201_CREATED)


class SellerProductDetailView(APIView):

    def get_permissions(self):
        if self.request.method == 'DELETE':
            return [(IsApprovedSeller | HasCoAdminPermission('canDeleteProducts'))()]
        if self.request.method == 'PUT':
            return [(IsApprovedSeller | HasCoAdminPermission('canEditProducts'))()]
        return [IsAdminOrSeller()]

    def get(self, request, product_id):
        product = ProductService.get_owned_product(product_id, request.user)
        return success_response(ProductDetailSerializer(product).data)

    def put(self, request, product_id):
        product = ProductService.get_owned_product(product_id, request.user)
        serializer = ProductWriteSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = ProductService.update_product(product, serializer.validated_data, request.user)
        return success_response(ProductDetailSerializer(product).data)

    def delete(self, request, product_id):
        product = ProductService.get_owned_product(product_id, request.user)
        ProductService.delete_product(product, request.user)
        return success_response({'success': True})


class InventoryUpdateView(APIView):
    """PUT /api/seller/products/{id}/inventory"""
    permission_classes = [IsAdminOrSeller]

    def put(self, request, product_id):
        product = ProductService.get_owned_product(product_id, request.user)
        serializer = InventoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = ProductService.update_inventory(
            product,
            stock=serializer.validated_data.get('stock'),
            variants=serializer.validated_data.get('variants')
        )
        return success_response(ProductDetailSerializer(product).data)


class LowStockView(APIView):
    permission_classes = [IsAdminOrSeller]

    def get(self, request):
        threshold = parse_int(request.query_params.get('threshold'), None, minimum=0)
        products = ProductService.low_stock(seller=request.user, threshold=threshold)
        return success_response({'products': ProductDetailSerializer(products, many=True).data})
