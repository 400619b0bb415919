"""
Points redemption views.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..serializers import RedeemSerializer, RewardTransactionSerializer
from ..services import RewardService


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def redeem_points(request):
    serializer = RedeemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    txn = RewardService.redeem(
        request.user,
        serializer.validated_data['points'],
        serializer.validated_data.get('description', ''),
        order_id=serializer.validated_data.get('order_id'),
    )
    return success_response({
        'transaction': RewardTransactionSerializer(txn).data,
        'points': txn.balance_after,
        'value': txn.value,
    }, status.HTTP_201_CREATED)
