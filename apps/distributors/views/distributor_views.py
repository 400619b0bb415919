"""
Distributor account and ledger views.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.permissions import HasCoAdminPermission, IsDistributor
from apps.common.utils import parse_bool, parse_int, success_response, paginated_response
from ..serializers import (
    DistributorCreateSerializer, DistributorSerializer, DistributorUpdateSerializer,
    LedgerEntrySerializer, PaymentEntrySerializer,
)
from ..services import DistributorService, LedgerService


class DistributorListView(APIView):
    """GET/POST /api/distributors"""
    permission_classes = [HasCoAdminPermission('canManageDistributors')]

    def get(self, request):
        distributors = DistributorService.search(
            request.query_params.get('search', ''),
            include_inactive=bool(parse_bool(request.query_params.get('include_inactive'))),
        )
        return paginated_response(distributors, DistributorSerializer, request, key='distributors')

    def post(self, request):
        serializer = DistributorCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        distributor = DistributorService.create_distributor(serializer.validated_data, request.user)
        return success_response(DistributorSerializer(distributor).data, status.HTTP_201_CREATED)


class DistributorDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        DistributorService.check_access(distributor, request.user)
        return success_response(DistributorSerializer(distributor).data)

    def put(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        self.check_admin(request)
        serializer = DistributorUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        distributor = DistributorService.update_distributor(distributor, serializer.validated_data, request.user)
        return success_response(DistributorSerializer(distributor).data)

    def delete(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        self.check_admin(request)
        DistributorService.deactivate(distributor, request.user)
        return success_response({'success': True})

    def check_admin(self, request):
        permission = HasCoAdminPermission('canManageDistributors')()
        if not permission.has_permission(request, self):
            self.permission_denied(request, message=permission.message)


class DistributorByUserView(APIView):
    """GET /api/distributors/user/{user_id}"""
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id):
        distributor = DistributorService.get_for_user(user_id)
        DistributorService.check_access(distributor, request.user)
        return success_response(DistributorSerializer(distributor).data)


class MyDistributorView(APIView):
    permission_classes = [IsDistributor]

    def get(self, request):
        distributor = DistributorService.ensure_profile(request.user)
        data = DistributorSerializer(distributor).data
        data['stats'] = DistributorService.stats(distributor)
        return success_response(data)


class DistributorLedgerView(APIView):
    """GET /api/distributors/{id}/ledger?page&pageSize"""
    permission_classes = [IsAuthenticated]

    def get(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        DistributorService.check_access(distributor, request.user)

        page = parse_int(request.query_params.get('page'), 1, minimum=1)
        page_size = parse_int(request.query_params.get('pageSize'), 10, minimum=1, maximum=100)
        result = LedgerService.ledger_page(distributor, page, page_size)
        result['entries'] = LedgerEntrySerializer(result['entries'], many=True).data
        return success_response(result)


class DistributorPaymentView(APIView):
    """POST /api/distributors/{id}/payments"""
    permission_classes = [HasCoAdminPermission('canManageDistributors')]

    def post(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        serializer = PaymentEntrySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        entry = LedgerService.record_payment(
            distributor, data['amount'], data['payment_method'],
            reference=data.get('reference', ''),
            notes=data.get('notes', ''),
            created_by=request.user,
        )
        distributor.refresh_from_db()
        return success_response({
            'entry': LedgerEntrySerializer(entry).data,
            'distributor': DistributorSerializer(distributor).data,
        }, status.HTTP_201_CREATED)


class DistributorStatsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, distributor_id):
        distributor = DistributorService.get(distributor_id)
        DistributorService.check_access(distributor, request.user)
        return success_response(DistributorService.stats(distributor))
