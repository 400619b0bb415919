"""
Return request query and creation views.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import parse_int, success_response
from ..serializers import (
    ReturnCreateSerializer, ReturnListSerializer, ReturnReasonSerializer, ReturnRequestSerializer,
)
from ..services import ReturnService


class ReturnListView(APIView):
    """
    GET /api/returns

    Buyers see their requests, sellers requests on their items, admins all
    (filters status, seller_id, buyer_id). Paged with limit/offset.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = request.query_params
        filters = {
            'status': params.get('status'),
            'request_type': params.get('request_type'),
            'seller_id': params.get('seller_id') or params.get('sellerId'),
            'buyer_id': params.get('buyer_id') or params.get('buyerId'),
            'search': params.get('search'),
        }
        returns = ReturnService.list_returns(request.user, filters)

        limit = parse_int(params.get('limit'), 10, minimum=1, maximum=100)
        offset = parse_int(params.get('offset'), 0, minimum=0)
        total = returns.count()

        return success_response({
            'returns': ReturnListSerializer(returns[offset:offset + limit], many=True).data,
            'total': total,
            'limit': limit,
            'offset': offset,
        })


class ReturnCreateView(APIView):
    """POST /api/returns/request"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ReturnCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        return_request = ReturnService.create_request(
            request.user,
            data['order_id'],
            data['order_item_id'],
            data['request_type'],
            reason_id=data.get('reason_id'),
            reason_text=data.get('reason_text', ''),
            description=data.get('description', ''),
            media_urls=data.get('media_urls'),
            quantity=data.get('quantity'),
        )
        return success_response(ReturnRequestSerializer(return_request).data, status.HTTP_201_CREATED)


class ReturnDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, return_id):
        return_request = ReturnService.get_return_for(request.user, return_id)
        return success_response(ReturnRequestSerializer(return_request).data)


class ReturnEligibilityView(APIView):
    """GET /api/returns/check-eligibility/{order_id}/{item_id}"""
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id, item_id):
        order, item = ReturnService.get_order_item(request.user, order_id, item_id)
        result = ReturnService.check_eligibility(order, item, request.query_params.get('request_type'))
        return success_response({
            'eligible': result['eligible'],
            'reason': result['reason'],
            'deadline': result.get('deadline'),
        })


class ReturnReasonListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        reasons = ReturnService.active_reasons(request.query_params.get('request_type'))
        return success_response(ReturnReasonSerializer(reasons, many=True).data)
