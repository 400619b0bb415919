"""
Cart views.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response
from ..serializers import CartItemSerializer, CartAddSerializer, CartUpdateSerializer, CartMergeSerializer
from ..services import CartService


def _cart_payload(user):
    items = list(CartService.get_items(user))
    return {
        'items': CartItemSerializer(items, many=True).data,
        'summary': CartService.summary(items),
    }


class CartView(APIView):
    """GET the cart or POST a product into it"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response(_cart_payload(request.user))

    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item, clamped = CartService.add_item(
            request.user,
            serializer.validated_data['product_id'],
            quantity=serializer.validated_data['quantity'],
            variant_id=serializer.validated_data.get('variant_id'),
        )
        return success_response({
            'item': CartItemSerializer(item).data,
            'clamped': clamped,
        }, status.HTTP_201_CREATED)


class CartItemView(APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, item_id):
        serializer = CartUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item, clamped = CartService.update_item(request.user, item_id, serializer.validated_data['quantity'])
        return success_response({
            'item': CartItemSerializer(item).data if item else None,
            'removed': item is None,
            'clamped': clamped,
        })

    def delete(self, request, item_id):
        CartService.remove_item(request.user, item_id)
        return success_response({'success': True})


class CartClearView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        CartService.clear(request.user)
        return success_response(_cart_payload(request.user))

    delete = post


class CartMergeView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CartMergeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        skipped = CartService.merge(request.user, serializer.validated_data['items'])
        payload = _cart_payload(request.user)
        payload['skipped'] = skipped
        return success_response(payload)
