"""
Order checkout, query and status views.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, get_page_params, paginate_queryset, pagination_meta
from ..serializers import (
    OrderSerializer, OrderListSerializer, OrderItemSerializer,
    CheckoutSerializer, OrderStatusSerializer, OrderCancelSerializer,
)
from ..services import OrderService


class OrderListCreateView(APIView):
    """GET role-scoped orders, POST to check out the cart"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        orders = OrderService.list_orders(request.user, request.query_params)
        page, limit = get_page_params(request)
        items, total, total_pages = paginate_queryset(orders, page, limit)
        return success_response({
            'orders': OrderListSerializer(items, many=True).data,
            'pagination': pagination_meta(total, page, limit, total_pages),
        })

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.checkout(request.user, **serializer.validated_data)
        return success_response(OrderSerializer(order).data, status.HTTP_201_CREATED)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        order = OrderService.get_order_for(request.user, order_id)
        return success_response(OrderSerializer(order).data)


class OrderItemsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id):
        order = OrderService.get_order_for(request.user, order_id)
        items = order.items.all()
        if request.user.role == 'seller' and order.buyer_id != request.user.pk:
            items = items.filter(seller=request.user)
        return success_response(OrderItemSerializer(items, many=True).data)


class OrderStatusView(APIView):
    """PUT /api/orders/{id}/status - admin or a seller in the order"""
    permission_classes = [IsAuthenticated]

    def put(self, request, order_id):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.get_order_for(request.user, order_id)
        order = OrderService.update_status(
            order,
            serializer.validated_data['status'],
            request.user,
            reason=serializer.validated_data.get('reason', ''),
            tracking=serializer.validated_data.get('tracking'),
        )
        return success_response(OrderSerializer(order).data)

    patch = put


class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, order_id):
        serializer = OrderCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.get_order_for(request.user, order_id)
        order = OrderService.cancel_by_buyer(order, request.user, serializer.validated_data.get('reason', ''))
        return success_response(OrderSerializer(order).data)
