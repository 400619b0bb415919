"""
Review and referral point awards.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..serializers import ReferralSerializer, ReviewPointsSerializer, RewardTransactionSerializer
from ..services import RewardService


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def award_review_points(request):
    serializer = ReviewPointsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    txn = RewardService.award_review_points(request.user, serializer.validated_data['product_id'])
    return success_response({
        'pointsAwarded': txn.points,
        'transaction': RewardTransactionSerializer(txn).data,
        'points': txn.balance_after,
    }, status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_referral_code(request):
    return success_response({'referralCode': RewardService.get_referral_code(request.user)})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def apply_referral(request):
    serializer = ReferralSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    referrer, points = RewardService.apply_referral(request.user, serializer.validated_data['referral_code'])
    return success_response({
        'referringUser': referrer.username,
        'pointsAwarded': points,
    })
