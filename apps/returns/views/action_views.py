"""
Return workflow actions. Every action goes through the status guard in
``ReturnService.transition``.
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response
from ..serializers import (
    MarkReceivedSerializer, ReturnNoteSerializer, ReturnRequestSerializer, ReturnStatusSerializer,
    TrackingSerializer,
)
from ..services import ReturnService


class _ReturnActionView(APIView):
    permission_classes = [IsAuthenticated]

    def get_return(self, request, return_id):
        return ReturnService.get_return_for(request.user, return_id)

    def respond(self, return_request):
        return success_response(ReturnRequestSerializer(return_request).data)


class ReturnCancelView(_ReturnActionView):
    """Buyer cancels; a reason is required"""

    def post(self, request, return_id):
        serializer = ReturnNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return_request = self.get_return(request, return_id)
        return self.respond(ReturnService.cancel(return_request, request.user, serializer.validated_data['reason']))


class ReturnStatusView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = ReturnStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return_request = self.get_return(request, return_id)
        return self.respond(ReturnService.update_status(
            return_request, data['status'], request.user,
            notes=data.get('notes', ''),
            refund_amount=data.get('refund_amount'),
            refund_method=data.get('refund_method'),
            refund_reference=data.get('refund_reference', ''),
        ))


class ReturnApproveView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = ReturnNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return_request = self.get_return(request, return_id)
        return self.respond(ReturnService.approve(return_request, request.user, serializer.validated_data['notes']))


class ReturnRejectView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = ReturnNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notes = serializer.validated_data['notes'] or serializer.validated_data['reason']
        return_request = self.get_return(request, return_id)
        return self.respond(ReturnService.reject(return_request, request.user, notes))


class ReturnTrackingView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = TrackingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return_request = self.get_return(request, return_id)
        return self.respond(
            ReturnService.add_return_tracking(return_request, request.user, dict(serializer.validated_data))
        )


class ReplacementTrackingView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = TrackingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return_request = self.get_return(request, return_id)
        return self.respond(
            ReturnService.add_replacement_tracking(return_request, request.user, dict(serializer.validated_data))
        )


class ReturnMarkReceivedView(_ReturnActionView):
    def post(self, request, return_id):
        serializer = MarkReceivedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        return_request = self.get_return(request, return_id)
        return self.respond(
            ReturnService.mark_received(return_request, request.user, data['condition'], data.get('notes', ''))
        )


class ReturnCompleteView(_ReturnActionView):
    def post(self, request, return_id):
        return_request = self.get_return(request, return_id)
        return self.respond(ReturnService.complete(return_request, request.user, request.data.get('notes', '')))
