"""
Bulk ordering by distributors and admin review.
"""
from decimal import Decimal

import pytest

from apps.distributors.models import BulkOrder, DistributorLedgerEntry
from apps.distributors.services import BulkOrderService, LedgerService
from tests.factories import BulkItemFactory, ProductFactory, UserFactory


@pytest.fixture
def bulk_item():
    return BulkItemFactory(product=ProductFactory(price=Decimal('120.00')), selling_price=Decimal('80.00'))


@pytest.mark.django_db
class TestBulkOrderCreation:

    def test_sets_are_priced_per_piece(self, api_client, distributor, bulk_item):
        api_client.force_authenticate(user=distributor.user)
        response = api_client.post('/api/bulk-orders', {
            'items': [
                {'product_id': bulk_item.product_id, 'order_type': 'sets', 'quantity': 2},
                {'product_id': bulk_item.product_id, 'order_type': 'pieces', 'quantity': 3},
            ],
            'notes': 'Diwali stock',
        }, format='json')

        assert response.status_code == 201
        # 2 sets x 6 pieces x 80 + 3 x 80
        assert response.data['subtotal'] == '1200.00'
        assert response.data['total_amount'] == '1200.00'
        assert response.data['order_number'] == f"BO-{response.data['id']}"

        distributor.refresh_from_db()
        assert distributor.current_balance == Decimal('1200.00')
        entry = distributor.ledger_entries.get()
        assert entry.order_type == 'bulk'
        assert entry.order_id == response.data['id']

    def test_disallowed_order_type_is_rejected(self, api_client, distributor):
        item = BulkItemFactory(allow_sets=False, pieces_per_set=None)
        api_client.force_authenticate(user=distributor.user)
        response = api_client.post('/api/bulk-orders', {
            'items': [{'product_id': item.product_id, 'order_type': 'sets', 'quantity': 1}],
        }, format='json')

        assert response.status_code == 400
        assert 'sets' in response.data['error']
        assert not BulkOrder.objects.exists()

    def test_unconfigured_product_is_rejected(self, api_client, distributor):
        product = ProductFactory()
        api_client.force_authenticate(user=distributor.user)
        response = api_client.post('/api/bulk-orders', {
            'items': [{'product_id': product.pk, 'order_type': 'pieces', 'quantity': 1}],
        }, format='json')
        assert response.status_code == 400

    def test_buyers_cannot_place_bulk_orders(self, buyer_client, bulk_item):
        response = buyer_client.post('/api/bulk-orders', {
            'items': [{'product_id': bulk_item.product_id, 'order_type': 'pieces', 'quantity': 1}],
        }, format='json')
        assert response.status_code == 403


@pytest.mark.django_db
class TestBulkOrderAdmin:

    def _order(self, distributor, bulk_item, quantity=10):
        return BulkOrderService.create_order(
            distributor.user,
            [{'product_id': bulk_item.product_id, 'order_type': 'pieces', 'quantity': quantity}],
        )

    def test_deleting_order_rebalances_later_entries(self, admin_client, distributor, bulk_item):
        first = self._order(distributor, bulk_item, quantity=10)    # 800
        self._order(distributor, bulk_item, quantity=5)              # 400
        LedgerService.record_payment(distributor, Decimal('300.00'), 'cash')

        response = admin_client.delete(f'/api/admin/bulk-orders/{first.pk}')

        assert response.status_code == 200
        assert response.data['orderId'] == first.pk
        assert not BulkOrder.objects.filter(pk=first.pk).exists()
        balances = list(
            DistributorLedgerEntry.objects.filter(distributor=distributor).order_by('id').values_list(
                'balance_after', flat=True
            )
        )
        assert balances == [Decimal('400.00'), Decimal('100.00')]
        distributor.refresh_from_db()
        assert distributor.current_balance == Decimal('100.00')

    def test_reprice_moves_ledger_entry(self, admin_client, distributor, bulk_item):
        order = self._order(distributor, bulk_item, quantity=10)

        response = admin_client.patch(f'/api/admin/bulk-orders/{order.pk}', {
            'status': 'approved',
            'delivery_charges': '100.00',
            'discount': '50.00',
        }, format='json')

        assert response.status_code == 200
        assert response.data['status'] == 'approved'
        assert response.data['total_amount'] == '850.00'
        distributor.refresh_from_db()
        assert distributor.current_balance == Decimal('850.00')

    def test_rejection_removes_ledger_entry(self, admin_client, distributor, bulk_item):
        order = self._order(distributor, bulk_item)
        response = admin_client.patch(f'/api/admin/bulk-orders/{order.pk}', {'status': 'rejected'}, format='json')

        assert response.status_code == 200
        distributor.refresh_from_db()
        assert distributor.current_balance == Decimal('0.00')
        assert not distributor.ledger_entries.exists()

    def test_rejected_order_cannot_be_approved(self, admin_client, distributor, bulk_item):
        order = self._order(distributor, bulk_item)
        admin_client.patch(f'/api/admin/bulk-orders/{order.pk}', {'status': 'rejected'}, format='json')

        response = admin_client.patch(f'/api/admin/bulk-orders/{order.pk}', {'status': 'approved'}, format='json')

        assert response.status_code == 409
        order.refresh_from_db()
        assert order.status == 'rejected'

    def test_admin_list_and_stats(self, admin_client, distributor, bulk_item):
        self._order(distributor, bulk_item)
        self._order(distributor, bulk_item, quantity=1)

        response = admin_client.get('/api/admin/bulk-orders?status=pending')
        assert response.status_code == 200
        assert response.data['pagination']['total'] == 2

        stats = admin_client.get('/api/admin/bulk-orders/stats').data
        assert stats['total'] == 2
        assert stats['byStatus'][0]['status'] == 'pending'

    def test_upsert_bulk_item_validates_sets(self, admin_client):
        product = ProductFactory()
        response = admin_client.post('/api/admin/bulk-items', {
            'product_id': product.pk, 'allow_pieces': False, 'allow_sets': True,
        }, format='json')
        assert response.status_code == 400

        response = admin_client.post('/api/admin/bulk-items', {
            'product_id': product.pk, 'allow_pieces': False, 'allow_sets': True, 'pieces_per_set': 12,
        }, format='json')
        assert response.status_code == 201
        assert response.data['pieces_per_set'] == 12

    def test_distributor_cannot_read_admin_endpoints(self, api_client, distributor):
        api_client.force_authenticate(user=distributor.user)
        assert api_client.get('/api/admin/bulk-orders').status_code == 403

    def test_order_detail_is_owner_scoped(self, api_client, distributor, bulk_item):
        order = self._order(distributor, bulk_item)
        other = UserFactory(role='distributor')
        api_client.force_authenticate(user=other)
        assert api_client.get(f'/api/bulk-orders/{order.pk}').status_code == 403
