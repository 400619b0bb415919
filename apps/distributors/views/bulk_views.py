"""
Distributor facing bulk ordering views.
"""
from rest_framework import status
from rest_framework.views import APIView

from apps.common.permissions import IsDistributor
from apps.common.utils import success_response, paginated_response
from ..serializers import (
    BulkItemSerializer, BulkOrderCreateSerializer, BulkOrderListSerializer, BulkOrderSerializer,
)
from ..services import BulkOrderService


class AvailableBulkItemsView(APIView):
    """GET /api/bulk-items"""
    permission_classes = [IsDistributor]

    def get(self, request):
        return success_response(BulkItemSerializer(BulkOrderService.available_items(), many=True).data)


class DistributorBulkOrderListView(APIView):
    """GET/POST /api/bulk-orders"""
    permission_classes = [IsDistributor]

    def get(self, request):
        orders = BulkOrderService.list_orders(request.query_params, distributor_user=request.user)
        return paginated_response(orders, BulkOrderListSerializer, request, key='orders')

    def post(self, request):
        serializer = BulkOrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        order = BulkOrderService.create_order(
            request.user, data['items'], notes=data.get('notes', ''), payment_type=data['payment_type']
        )
        return success_response(BulkOrderSerializer(order).data, status.HTTP_201_CREATED)


class DistributorBulkOrderDetailView(APIView):
    permission_classes = [IsDistributor]

    def get(self, request, order_id):
        order = BulkOrderService.get_order_for(request.user, order_id)
        return success_response(BulkOrderSerializer(order).data)
