"""
Admin bulk item configuration and bulk order management.
"""
from rest_framework import status
from rest_framework.views import APIView

from apps.common.exceptions import ValidationFailed
from apps.common.permissions import HasCoAdminPermission
from apps.common.utils import success_response, paginated_response
from ..serializers import (
    BulkItemSerializer, BulkItemWriteSerializer, BulkOrderListSerializer, BulkOrderSerializer,
    BulkOrderUpdateSerializer, BulkProductSearchSerializer,
)
from ..services import BulkOrderService

CanManageDistributors = HasCoAdminPermission('canManageDistributors')


class BulkProductSearchView(APIView):
    """GET /api/admin/bulk-items/search-products"""
    permission_classes = [CanManageDistributors]

    def get(self, request):
        products = BulkOrderService.search_products(request.query_params.get('search', ''))
        return paginated_response(products, BulkProductSearchSerializer, request, key='products')


class BulkItemListView(APIView):
    permission_classes = [CanManageDistributors]

    def get(self, request):
        items = BulkOrderService.list_bulk_items(request.query_params.get('search', ''))
        return paginated_response(items, BulkItemSerializer, request, key='items', default_limit=50)

    def post(self, request):
        """Create or update the configuration for ``product_id``"""
        serializer = BulkItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        product_id = data.pop('product_id', None)
        if not product_id:
            raise ValidationFailed('product_id is required')
        bulk_item = BulkOrderService.upsert_bulk_item(product_id, data)
        return success_response(BulkItemSerializer(bulk_item).data, status.HTTP_201_CREATED)


class BulkItemDetailView(APIView):
    permission_classes = [CanManageDistributors]

    def get(self, request, item_id):
        return success_response(BulkItemSerializer(BulkOrderService.get_bulk_item(item_id)).data)

    def put(self, request, item_id):
        bulk_item = BulkOrderService.get_bulk_item(item_id)
        serializer = BulkItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop('product_id', None)
        bulk_item = BulkOrderService.update_bulk_item(bulk_item, data)
        return success_response(BulkItemSerializer(bulk_item).data)

    def delete(self, request, item_id):
        BulkOrderService.delete_bulk_item(BulkOrderService.get_bulk_item(item_id))
        return success_response({'success': True})


class AdminBulkOrderListView(APIView):
    permission_classes = [CanManageDistributors]

    def get(self, request):
        orders = BulkOrderService.list_orders(request.query_params)
        return paginated_response(orders, BulkOrderListSerializer, request, key='orders')


class BulkOrderStatsView(APIView):
    permission_classes = [CanManageDistributors]

    def get(self, request):
        return success_response(BulkOrderService.stats())


class AdminBulkOrderDetailView(APIView):
    permission_classes = [CanManageDistributors]

    def get(self, request, order_id):
        return success_response(BulkOrderSerializer(BulkOrderService.get_order_for(request.user, order_id)).data)

    def patch(self, request, order_id):
        order = BulkOrderService.get_order_for(request.user, order_id)
        serializer = BulkOrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = BulkOrderService.update_order(order, serializer.validated_data, request.user)
        return success_response(BulkOrderSerializer(order).data)

    def delete(self, request, order_id):
        order = BulkOrderService.get_order_for(request.user, order_id)
        deleted_id = BulkOrderService.delete_order(order, request.user)
        return success_response({
            'message': 'Bulk order and associated ledger entries deleted successfully',
            'orderId': deleted_id,
        })
