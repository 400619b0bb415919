"""
User authentication views.
"""
import logging

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny

from apps.common.utils import success_response
from ..serializers import UserDetailSerializer, UserRegistrationSerializer, LoginSerializer
from ..services import UserService

logger = logging.getLogger(__name__)


class RegisterView(APIView):
    """User registration endpoint"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"Registered user {user.pk} as {user.role}")

        return success_response({
            **UserService.issue_tokens(user),
            'user': UserDetailSerializer(user).data
        }, status.HTTP_201_CREATED)


class LoginView(APIView):
    """Username/email + password login returning a JWT pair"""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserService.authenticate(
            serializer.validated_data['username'],
            serializer.validated_data['password']
        )
        return success_response({
            **UserService.issue_tokens(user),
            'user': UserDetailSerializer(user).data
        })
