"""
Notification inbox ownership and read state.
"""
import pytest

from apps.notifications.models import Notification
from tests.factories import NotificationFactory


@pytest.mark.django_db
class TestNotifications:

    def test_list_with_unread_count(self, buyer_client, buyer):
        NotificationFactory(user=buyer)
        NotificationFactory(user=buyer, read=True)
        NotificationFactory()

        response = buyer_client.get('/api/notifications')

        assert response.status_code == 200
        assert response.data['pagination']['total'] == 2
        assert response.data['unreadCount'] == 1

    def test_unread_filter(self, buyer_client, buyer):
        NotificationFactory(user=buyer)
        NotificationFactory(user=buyer, read=True)
        response = buyer_client.get('/api/notifications?filter=unread')
        assert response.data['pagination']['total'] == 1

    def test_mark_all_read(self, buyer_client, buyer):
        NotificationFactory.create_batch(3, user=buyer)
        response = buyer_client.put('/api/notifications/read-all')
        assert response.data == {'updated': 3}
        assert not Notification.objects.filter(user=buyer, read=False).exists()

    def test_cannot_read_or_delete_others(self, buyer_client):
        other = NotificationFactory()

        assert buyer_client.put(f'/api/notifications/{other.pk}/read').status_code == 404
        response = buyer_client.delete(f'/api/notifications/{other.pk}')
        assert response.status_code == 404
        assert response.data == {'error': 'Notification not found'}
        assert Notification.objects.filter(pk=other.pk).exists()

    def test_owner_can_delete(self, buyer_client, buyer):
        mine = NotificationFactory(user=buyer)
        assert buyer_client.delete(f'/api/notifications/{mine.pk}').status_code == 200
        assert not Notification.objects.filter(pk=mine.pk).exists()
