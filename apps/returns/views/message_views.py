from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response
from ..serializers import ReturnMessageCreateSerializer, ReturnMessageSerializer
from ..services import ReturnService


class ReturnMessagesView(APIView):
    """GET/POST /api/returns/{id}/messages"""
    permission_classes = [IsAuthenticated]

    def get(self, request, return_id):
        return_request = ReturnService.get_return_for(request.user, return_id)
        messages = ReturnService.list_messages(return_request, request.user)
        return success_response(ReturnMessageSerializer(messages, many=True).data)

    def post(self, request, return_id):
        serializer = ReturnMessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return_request = ReturnService.get_return_for(request.user, return_id)
        message = ReturnService.add_message(
            return_request, request.user,
            serializer.validated_data['message'],
            serializer.validated_data.get('media_urls'),
        )
        return success_response(ReturnMessageSerializer(message).data, status.HTTP_201_CREATED)
