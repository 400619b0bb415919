"""
Notification inbox views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response, get_page_params, paginate_queryset, pagination_meta
from ..serializers import NotificationSerializer
from ..services import NotificationService


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_notifications(request):
    """List notifications with filter all/unread/important and the unread count"""
    filter_type = request.query_params.get('filter', 'all')
    notifications = NotificationService.get_user_notifications(request.user, filter_type)

    page, limit = get_page_params(request)
    items, total, total_pages = paginate_queryset(notifications, page, limit)

    return success_response({
        'notifications': NotificationSerializer(items, many=True).data,
        'unreadCount': NotificationService.unread_count(request.user),
        'pagination': pagination_meta(total, page, limit, total_pages),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def unread_count(request):
    return success_response({'count': NotificationService.unread_count(request.user)})


@api_view(['PUT', 'POST'])
@permission_classes([IsAuthenticated])
def mark_read(request, notification_id):
    notification = NotificationService.mark_read(request.user, notification_id)
    return success_response(NotificationSerializer(notification).data)


@api_view(['PUT', 'POST'])
@permission_classes([IsAuthenticated])
def mark_all_read(request):
    updated = NotificationService.mark_all_read(request.user)
    return success_response({'updated': updated})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_notification(request, notification_id):
    NotificationService.delete(request.user, notification_id)
    return success_response({'success': True})
