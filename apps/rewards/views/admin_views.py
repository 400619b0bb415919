"""
Admin reward management: manual adjustments, rules and statistics.
"""
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes

from apps.common.permissions import HasCoAdminPermission
from apps.common.utils import success_response
from apps.users.services import UserService
from ..models import RewardRule
from ..serializers import AdminAddPointsSerializer, RewardRuleSerializer, RewardTransactionSerializer
from ..services import RewardService


@api_view(['POST'])
@permission_classes([HasCoAdminPermission('canManageRewards')])
def admin_add_points(request):
    """Credit or debit a user's points - POST /api/rewards/admin/add"""
    serializer = AdminAddPointsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    user = UserService.get_user(data['user_id'])
    txn = RewardService.admin_adjust(
        user, data['points'], data['description'], request.user,
        transaction_type=data['transaction_type']
    )
    return success_response(RewardTransactionSerializer(txn).data, status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([HasCoAdminPermission('canManageRewards')])
def reward_statistics(request):
    return success_response(RewardService.statistics())


class RewardRuleViewSet(viewsets.ModelViewSet):
    """Admin CRUD for reward rules"""
    serializer_class = RewardRuleSerializer
    permission_classes = [HasCoAdminPermission('canManageRewards')]
    queryset = RewardRule.objects.all()

    def get_queryset(self):
        rules = super().get_queryset()
        rule_type = self.request.query_params.get('rule_type')
        if rule_type:
            rules = rules.filter(rule_type=rule_type)
        return rules
