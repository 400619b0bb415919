"""
Razorpay checkout endpoints.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from apps.common.utils import success_response, paginated_response
from apps.orders.serializers import OrderSerializer
from ..serializers import PaymentTransactionSerializer, VerifyPaymentSerializer
from ..services import PaymentService


@api_view(['GET'])
@permission_classes([AllowAny])
def get_razorpay_key(request):
    """Public key id for the checkout widget"""
    return success_response({'keyId': PaymentService.get_key_id()})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_razorpay_order(request):
    payment = PaymentService.create_gateway_order(request.user)
    return success_response({
        'orderId': payment.razorpay_order_id,
        'amount': payment.amount_paise,
        'currency': payment.currency,
        'receipt': payment.receipt,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def verify_razorpay_payment(request):
    """Verify the checkout signature and create a paid order from the cart"""
    serializer = VerifyPaymentSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    order = PaymentService.verify_and_place_order(
        request.user,
        data['razorpay_order_id'],
        data['razorpay_payment_id'],
        data['razorpay_signature'],
        address_id=data.get('address_id'),
        shipping_details=data.get('shipping_details'),
        notes=data.get('notes', ''),
    )
    return success_response({'success': True, 'order': OrderSerializer(order).data}, status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_my_payments(request):
    payments = request.user.payment_transactions.select_related('order')
    return paginated_response(payments, PaymentTransactionSerializer, request, key='payments')
