from django.urls import path
from . import views

urlpatterns = [
    path('returns', views.ReturnListView.as_view(), name='return-list'),
    path('returns/request', views.ReturnCreateView.as_view(), name='return-create'),
    path('returns/reasons', views.ReturnReasonListView.as_view(), name='return-reasons'),
    path(
        'returns/check-eligibility/<int:order_id>/<int:item_id>',
        views.ReturnEligibilityView.as_view(),
        name='return-eligibility'
    ),
    path('returns/<int:return_id>', views.ReturnDetailView.as_view(), name='return-detail'),
    path('returns/<int:return_id>/cancel', views.ReturnCancelView.as_view(), name='return-cancel'),
    path('returns/<int:return_id>/status', views.ReturnStatusView.as_view(), name='return-status'),
    path('returns/<int:return_id>/approve', views.ReturnApproveView.as_view(), name='return-approve'),
    path('returns/<int:return_id>/reject', views.ReturnRejectView.as_view(), name='return-reject'),
    path('returns/<int:return_id>/return-tracking', views.ReturnTrackingView.as_view(), name='return-tracking'),
    path(
        'returns/<int:return_id>/replacement-tracking',
        views.ReplacementTrackingView.as_view(),
        name='return-replacement-tracking'
    ),
    path('returns/<int:return_id>/mark-received', views.ReturnMarkReceivedView.as_view(), name='return-mark-received'),
    path('returns/<int:return_id>/complete', views.ReturnCompleteView.as_view(), name='return-complete'),
    path('returns/<int:return_id>/messages', views.ReturnMessagesView.as_view(), name='return-messages'),
]
