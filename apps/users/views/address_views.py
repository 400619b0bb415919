"""
User address management views.
"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..models import Address
from ..serializers import AddressSerializer


class AddressViewSet(viewsets.ModelViewSet):
    """
    CRUD over the current user's shipping addresses.

    Endpoints:
    - GET /users/addresses - List all addresses
    - POST /users/addresses - Create new address
    - GET/PUT/PATCH/DELETE /users/addresses/{id}
    - POST /users/addresses/{id}/set-default
    """
    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Address.objects.filter(user=self.request.user).order_by('-is_default', '-created_at')

    def perform_create(self, serializer):
        # First address becomes the default
        has_addresses = Address.objects.filter(user=self.request.user).exists()
        if not has_addresses:
            serializer.save(user=self.request.user, is_default=True)
        else:
            serializer.save(user=self.request.user)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        was_default = instance.is_default
        self.perform_destroy(instance)
        if was_default:
            replacement = self.get_queryset().first()
            if replacement:
                replacement.is_default = True
                replacement.save()
        return success_response(status_code=status.HTTP_200_OK)

    @action(detail=True, methods=['post'], url_path='set-default')
    def set_default(self, request, pk=None):
        address = self.get_object()
        address.is_default = True
        address.save()
        return success_response(self.get_serializer(address).data)
