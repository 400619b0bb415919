"""
Reward account query views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.exceptions import PermissionDenied
from apps.common.permissions import has_co_admin_permission
from apps.common.utils import success_response, paginated_response
from apps.users.services import UserService
from ..serializers import RewardSummarySerializer, RewardTransactionSerializer
from ..services import RewardService


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_reward_summary(request):
    """Balance, lifetime totals and the latest transactions"""
    summary = RewardService.summary(request.user)
    return success_response(RewardSummarySerializer(summary).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_reward_transactions(request):
    """
    Paginated transaction history.

    Admins with ``canManageRewards`` may pass ``user_id`` to read another
    user's history.
    """
    user = request.user
    user_id = request.query_params.get('user_id')
    if user_id and str(user_id) != str(user.pk):
        if not has_co_admin_permission(user, 'canManageRewards'):
            raise PermissionDenied('You cannot view other users\' rewards')
        user = UserService.get_user(user_id)

    account = RewardService.get_or_create_account(user)
    transactions = account.transactions.all()

    transaction_type = request.query_params.get('type')
    if transaction_type:
        transactions = transactions.filter(transaction_type=transaction_type)

    return paginated_response(transactions, RewardTransactionSerializer, request, key='transactions')
