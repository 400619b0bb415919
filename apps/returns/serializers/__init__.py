"""
Return serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .return_serializers import (
    ReturnReasonSerializer, ReturnStatusHistorySerializer, ReturnListSerializer,
    ReturnRequestSerializer, ReturnCreateSerializer, ReturnStatusSerializer,
    ReturnNoteSerializer, TrackingSerializer, MarkReceivedSerializer,
)
from .message_serializers import ReturnMessageSerializer, ReturnMessageCreateSerializer

__all__ = [
    'ReturnReasonSerializer',
    'ReturnStatusHistorySerializer',
    'ReturnListSerializer',
    'ReturnRequestSerializer',
    'ReturnCreateSerializer',
    'ReturnStatusSerializer',
    'ReturnNoteSerializer',
    'TrackingSerializer',
    'MarkReceivedSerializer',
    'ReturnMessageSerializer',
    'ReturnMessageCreateSerializer',
]
