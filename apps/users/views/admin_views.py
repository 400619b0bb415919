"""
Admin user management views.
"""
from rest_framework import status
from rest_framework.views import APIView

from apps.common.permissions import IsAdmin, IsFullAdmin, HasCoAdminPermission
from apps.common.utils import success_response, paginated_response
from ..serializers import (
    UserListSerializer, UserDetailSerializer, AdminUserCreateSerializer,
    RoleUpdateSerializer, CoAdminCreateSerializer, CoAdminPermissionsSerializer,
    SellerRejectSerializer,
)
from ..services import UserService


class AdminUserListView(APIView):
    """List users with search/role filters, or create a user"""
    permission_classes = [IsAdmin]

    def get(self, request):
        users = UserService.search_users(
            search=request.query_params.get('search', ''),
            role=request.query_params.get('role')
        )
        return paginated_response(users, UserListSerializer, request, key='users')

    def post(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        if user.role == 'distributor':
            from apps.distributors.services import DistributorService
            DistributorService.ensure_profile(user)
        return success_response(UserDetailSerializer(user).data, status.HTTP_201_CREATED)


class AdminUserDetailView(APIView):
    permission_classes = [IsFullAdmin]

    def delete(self, request, user_id):
        user = UserService.get_user(user_id)
        UserService.delete_user(user, request.user)
        return success_response({'success': True})


class AdminUserRoleView(APIView):
    permission_classes = [IsFullAdmin]

    def put(self, request, user_id):
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.change_role(
            UserService.get_user(user_id), serializer.validated_data['role'], request.user
        )
        return success_response(UserDetailSerializer(user).data)


class CoAdminListView(APIView):
    permission_classes = [IsFullAdmin]

    def get(self, request):
        serializer = UserDetailSerializer(UserService.list_co_admins(), many=True)
        return success_response(serializer.data)

    def post(self, request):
        serializer = CoAdminCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.create_co_admin(serializer.validated_data, request.user)
        return success_response(UserDetailSerializer(user).data, status.HTTP_201_CREATED)


class CoAdminPermissionsView(APIView):
    permission_classes = [IsFullAdmin]

    def put(self, request, user_id):
        serializer = CoAdminPermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.update_co_admin_permissions(
            UserService.get_user(user_id), serializer.validated_data['permissions'], request.user
        )
        return success_response(UserDetailSerializer(user).data)


class SellerListView(APIView):
    """Sellers filtered by approval status (defaults to pending)"""
    permission_classes = [HasCoAdminPermission('canManageSellers')]

    def get(self, request):
        sellers = UserService.search_users(
            search=request.query_params.get('search', ''), role='seller'
        )
        seller_status = request.query_params.get('status', 'pending')
        if seller_status != 'all':
            sellers = sellers.filter(seller_status=seller_status)
        return paginated_response(sellers, UserListSerializer, request, key='sellers')


class SellerApproveView(APIView):
    permission_classes = [HasCoAdminPermission('canApproveSellers')]

    def post(self, request, user_id):
        user = UserService.approve_seller(UserService.get_user(user_id), request.user)
        return success_response(UserDetailSerializer(user).data)


class SellerRejectView(APIView):
    permission_classes = [HasCoAdminPermission('canApproveSellers')]

    def post(self, request, user_id):
        serializer = SellerRejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.reject_seller(
            UserService.get_user(user_id), serializer.validated_data['reason'], request.user
        )
        return success_response(UserDetailSerializer(user).data)
