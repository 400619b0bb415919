"""
Return request lifecycle.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.common.exceptions import InvalidTransition, PermissionDenied, ValidationFailed
from apps.payments.models import RefundRecord
from apps.returns.models import ReturnRequest
from apps.returns.services import ReturnService
from tests.factories import (
    CoAdminFactory, DeliveredOrderFactory, OrderFactory, OrderItemFactory, ProductFactory,
    ReturnReasonFactory, ReturnRequestFactory, UserFactory,
)


@pytest.fixture
def delivered_item(buyer, seller):
    order = DeliveredOrderFactory(buyer=buyer)
    return OrderItemFactory(order=order, product=ProductFactory(seller=seller, stock=3))


@pytest.mark.django_db
class TestReturnCreation:

    def test_unknown_order_is_404(self, buyer_client):
        response = buyer_client.post('/api/returns/request', {
            'order_id': 999999, 'order_item_id': 1, 'request_type': 'return', 'reason_text': 'Broken',
        }, format='json')
        assert response.status_code == 404
        assert response.data == {'error': 'Order not found'}

    def test_someone_elses_order_is_404(self, api_client, delivered_item):
        api_client.force_authenticate(user=UserFactory())
        response = api_client.post('/api/returns/request', {
            'order_id': delivered_item.order_id, 'order_item_id': delivered_item.pk,
            'request_type': 'return', 'reason_text': 'Broken',
        }, format='json')
        assert response.status_code == 404

    def test_item_from_another_order_is_400(self, buyer_client, buyer, delivered_item):
        other_item = OrderItemFactory(order=DeliveredOrderFactory(buyer=buyer))
        response = buyer_client.post('/api/returns/request', {
            'order_id': delivered_item.order_id, 'order_item_id': other_item.pk,
            'request_type': 'return', 'reason_text': 'Broken',
        }, format='json')
        assert response.status_code == 400

    def test_create_sets_refund_amount_and_history(self, buyer_client, delivered_item):
        reason = ReturnReasonFactory()
        response = buyer_client.post('/api/returns/request', {
            'order_id': delivered_item.order_id, 'order_item_id': delivered_item.pk,
            'request_type': 'return', 'reason_id': reason.pk, 'quantity': 1,
        }, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert response.data['refund_amount'] == '100.00'
        assert len(response.data['history']) == 1
        assert delivered_item.seller.notifications.filter(title='New return request').exists()

    def test_undelivered_order_is_not_eligible(self, buyer, buyer_client):
        item = OrderItemFactory(order=OrderFactory(buyer=buyer, status='shipped'))
        response = buyer_client.get(f'/api/returns/check-eligibility/{item.order_id}/{item.pk}')
        assert response.status_code == 200
        assert response.data['eligible'] is False

    def test_window_expiry(self, buyer, delivered_item):
        order = delivered_item.order
        order.delivered_at = timezone.now() - timedelta(days=30)
        order.save()
        result = ReturnService.check_eligibility(order, delivered_item, 'return')
        assert result['eligible'] is False
        assert 'expired' in result['reason']

    def test_open_request_blocks_another(self, buyer, delivered_item):
        ReturnService.create_request(buyer, delivered_item.order_id, delivered_item.pk, 'return', reason_text='Torn')
        result = ReturnService.check_eligibility(delivered_item.order, delivered_item)
        assert result['eligible'] is False

    def test_quantity_cannot_exceed_ordered(self, buyer_client, delivered_item):
        response = buyer_client.post('/api/returns/request', {
            'order_id': delivered_item.order_id, 'order_item_id': delivered_item.pk,
            'request_type': 'refund', 'reason_text': 'Late', 'quantity': 5,
        }, format='json')
        assert response.status_code == 400


@pytest.mark.django_db
class TestReturnTransitions:

    def test_illegal_transition_is_409(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=return_request.seller)

        response = api_client.post(
            f'/api/returns/{return_request.pk}/status', {'status': 'item_received'}, format='json'
        )

        assert response.status_code == 409
        return_request.refresh_from_db()
        assert return_request.status == 'pending'

    def test_reject_requires_note(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=return_request.seller)
        response = api_client.post(f'/api/returns/{return_request.pk}/reject', {}, format='json')
        assert response.status_code == 400

    def test_buyer_cannot_approve(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=return_request.buyer)
        response = api_client.post(f'/api/returns/{return_request.pk}/approve', {}, format='json')
        assert response.status_code == 403

    def test_cancel_needs_reason_and_is_terminal(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=return_request.buyer)

        assert api_client.post(f'/api/returns/{return_request.pk}/cancel', {}, format='json').status_code == 400
        response = api_client.post(
            f'/api/returns/{return_request.pk}/cancel', {'reason': 'Changed my mind'}, format='json'
        )
        assert response.status_code == 200
        assert response.data['status'] == 'cancelled'
        assert response.data['allowed_transitions'] == []

    def test_refund_flow_restocks_resaleable_item(self, api_client):
        return_request = ReturnRequestFactory(quantity=1)
        product = return_request.order_item.product
        stock_before = product.stock
        seller = return_request.seller
        base = f'/api/returns/{return_request.pk}'

        api_client.force_authenticate(user=seller)
        assert api_client.post(f'{base}/approve', {'notes': 'OK'}, format='json').status_code == 200

        api_client.force_authenticate(user=return_request.buyer)
        response = api_client.post(f'{base}/return-tracking', {'tracking_number': 'AWB123'}, format='json')
        assert response.data['status'] == 'item_in_transit'

        api_client.force_authenticate(user=seller)
        response = api_client.post(f'{base}/mark-received', {'condition': 'resaleable'}, format='json')
        assert response.data['status'] == 'item_received'

        response = api_client.post(f'{base}/status', {'status': 'replacement_dispatched'}, format='json')
        assert response.status_code == 409

        response = api_client.post(f'{base}/status', {'status': 'refund_initiated'}, format='json')
        assert response.status_code == 200
        assert RefundRecord.objects.get(return_request=return_request).status == 'initiated'

        response = api_client.post(
            f'{base}/status', {'status': 'refund_processed', 'refund_reference': 'RFND-1'}, format='json'
        )
        assert response.data['refund_status'] == 'processed'

        response = api_client.post(f'{base}/complete', {}, format='json')
        assert response.data['status'] == 'completed'

        product.refresh_from_db()
        assert product.stock == stock_before + 1
        record = RefundRecord.objects.get(return_request=return_request)
        assert record.status == 'processed'
        assert record.reference == 'RFND-1'
        assert ReturnRequest.objects.get(pk=return_request.pk).history.count() == 6

    def test_replacement_cannot_enter_refund_stage(self, api_client):
        return_request = ReturnRequestFactory(
            request_type='replacement', status='item_received', received_condition='damaged',
            refund_amount=None, refund_status='not_applicable',
        )
        api_client.force_authenticate(user=return_request.seller)

        response = api_client.post(
            f'/api/returns/{return_request.pk}/status', {'status': 'refund_initiated'}, format='json'
        )

        assert response.status_code == 409
        assert response.data['details'] == {'current': 'item_received', 'requested': 'refund_initiated'}
        assert not RefundRecord.objects.filter(return_request=return_request).exists()

    def test_refund_from_wrong_status_is_409_even_with_bad_amount(self):
        return_request = ReturnRequestFactory(status='approved')
        with pytest.raises(InvalidTransition):
            ReturnService.initiate_refund(return_request, return_request.seller, amount=Decimal('-5.00'))

    def test_replacement_flow(self, api_client):
        return_request = ReturnRequestFactory(
            request_type='replacement', status='item_received', received_condition='damaged',
            refund_amount=None, refund_status='not_applicable',
        )
        base = f'/api/returns/{return_request.pk}'
        api_client.force_authenticate(user=return_request.seller)

        response = api_client.post(f'{base}/replacement-tracking', {
            'courier': 'Delhivery', 'tracking_number': 'RPL-42',
        }, format='json')
        assert response.status_code == 200
        assert response.data['status'] == 'replacement_dispatched'
        assert response.data['replacement_tracking']['tracking_number'] == 'RPL-42'

        response = api_client.post(f'{base}/replacement-tracking', {'tracking_number': 'RPL-43'}, format='json')
        assert response.data['status'] == 'replacement_dispatched'
        assert response.data['replacement_tracking'] == {'courier': 'Delhivery', 'tracking_number': 'RPL-43'}

        response = api_client.post(f'{base}/complete', {}, format='json')
        assert response.status_code == 200
        assert response.data['status'] == 'completed'
        assert return_request.buyer.notifications.filter(title='Return update').count() == 2

    def test_refund_cannot_exceed_item_value(self):
        return_request = ReturnRequestFactory(status='item_received', received_condition='damaged')
        with pytest.raises(ValidationFailed) as exc:
            ReturnService.initiate_refund(return_request, return_request.seller, amount=Decimal('500.00'))
        assert 'cannot exceed' in exc.value.message


@pytest.mark.django_db
class TestReturnVisibility:

    def test_list_is_scoped_per_role(self, api_client):
        mine = ReturnRequestFactory()
        ReturnRequestFactory()

        api_client.force_authenticate(user=mine.buyer)
        response = api_client.get('/api/returns')
        assert response.data['total'] == 1
        assert response.data['returns'][0]['id'] == mine.pk

        api_client.force_authenticate(user=CoAdminFactory(permissions=['canManageReturns']))
        response = api_client.get('/api/returns?limit=1&offset=1')
        assert response.data['total'] == 2
        assert len(response.data['returns']) == 1

    def test_other_buyers_return_is_404(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=UserFactory())
        assert api_client.get(f'/api/returns/{return_request.pk}').status_code == 404


@pytest.mark.django_db
class TestReturnMessages:

    def test_buyer_and_seller_exchange_messages(self, api_client):
        return_request = ReturnRequestFactory()
        url = f'/api/returns/{return_request.pk}/messages'

        api_client.force_authenticate(user=return_request.buyer)
        response = api_client.post(url, {'message': 'The zip is broken'}, format='json')
        assert response.status_code == 201
        assert response.data['sender_role'] == 'buyer'
        assert return_request.seller.notifications.filter(notification_type='new_message').count() == 1

        api_client.force_authenticate(user=return_request.seller)
        api_client.post(url, {'message': 'Please share a photo'}, format='json')
        response = api_client.get(url)

        assert response.status_code == 200
        assert [row['message'] for row in response.data] == ['The zip is broken', 'Please share a photo']
        assert return_request.buyer.notifications.filter(notification_type='new_message').count() == 1

    def test_empty_message_rejected(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=return_request.buyer)

        response = api_client.post(f'/api/returns/{return_request.pk}/messages', {'message': ''}, format='json')

        assert response.status_code == 400
        assert not return_request.messages.exists()

    def test_outsiders_cannot_read_the_thread(self, api_client):
        return_request = ReturnRequestFactory()
        api_client.force_authenticate(user=UserFactory())

        assert api_client.get(f'/api/returns/{return_request.pk}/messages').status_code == 404
        with pytest.raises(PermissionDenied):
            ReturnService.list_messages(return_request, UserFactory())

    def test_admin_can_join_the_thread(self, admin_client, admin_user):
        return_request = ReturnRequestFactory()

        response = admin_client.post(
            f'/api/returns/{return_request.pk}/messages', {'message': 'Looking into this'}, format='json'
        )

        assert response.status_code == 201
        assert response.data['sender'] == admin_user.pk
