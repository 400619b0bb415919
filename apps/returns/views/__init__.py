"""
Return views module.

All views are exported from this module to maintain backward compatibility.
"""
from .return_views import (
    ReturnListView, ReturnCreateView, ReturnDetailView, ReturnEligibilityView, ReturnReasonListView,
)
from .action_views import (
    ReturnCancelView, ReturnStatusView, ReturnApproveView, ReturnRejectView,
    ReturnTrackingView, ReplacementTrackingView, ReturnMarkReceivedView, ReturnCompleteView,
)
from .message_views import ReturnMessagesView

__all__ = [
    'ReturnListView',
    'ReturnCreateView',
    'ReturnDetailView',
    'ReturnEligibilityView',
    'ReturnReasonListView',
    'ReturnCancelView',
    'ReturnStatusView',
    'ReturnApproveView',
    'ReturnRejectView',
    'ReturnTrackingView',
    'ReplacementTrackingView',
    'ReturnMarkReceivedView',
    'ReturnCompleteView',
    'ReturnMessagesView',
]
