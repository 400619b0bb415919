"""
Public footer reads and admin footer management.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.permissions import HasCoAdminPermission
from apps.common.utils import parse_bool, success_response
from ..serializers import FooterContentSerializer, FooterContentWriteSerializer
from ..services import FooterContentService

CanManageFooter = HasCoAdminPermission('canManageFooter')


class FooterContentListView(APIView):
    """GET /api/footer-content?section=&isActive="""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        contents = FooterContentService.list_contents(
            section=request.query_params.get('section') or None,
            is_active=parse_bool(request.query_params.get('isActive')),
        )
        return success_response(FooterContentSerializer(contents, many=True).data)


class FooterContentDetailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, content_id):
        return success_response(FooterContentSerializer(FooterContentService.get(content_id)).data)


class AdminFooterContentListView(APIView):
    permission_classes = [CanManageFooter]

    def get(self, request):
        contents = FooterContentService.list_contents(section=request.query_params.get('section') or None)
        return success_response(FooterContentSerializer(contents, many=True).data)

    def post(self, request):
        serializer = FooterContentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        content = FooterContentService.create(serializer.validated_data, request.user)
        return success_response(FooterContentSerializer(content).data, status.HTTP_201_CREATED)


class AdminFooterContentDetailView(APIView):
    permission_classes = [CanManageFooter]

    def put(self, request, content_id):
        content = FooterContentService.get(content_id)
        serializer = FooterContentWriteSerializer(content, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        content = FooterContentService.update(content, serializer.validated_data, request.user)
        return success_response(FooterContentSerializer(content).data)

    def delete(self, request, content_id):
        FooterContentService.delete(FooterContentService.get(content_id), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FooterContentToggleView(APIView):
    permission_classes = [CanManageFooter]

    def put(self, request, content_id):
        content = FooterContentService.toggle(FooterContentService.get(content_id))
        return success_response(FooterContentSerializer(content).data)


class FooterContentOrderView(APIView):
    """PUT /api/admin/footer-content/{id}/order with ``{"order": <int >= 0>}``"""
    permission_classes = [CanManageFooter]

    def put(self, request, content_id):
        content = FooterContentService.get(content_id)
        content = FooterContentService.set_order(content, request.data.get('order'))
        return success_response(FooterContentSerializer(content).data)
