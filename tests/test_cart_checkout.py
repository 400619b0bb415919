"""
Cart quantity clamping and checkout stock handling.
"""
from decimal import Decimal

import pytest

from apps.cart.models import CartItem
from apps.orders.models import Order
from tests.factories import CartItemFactory, ProductFactory, ProductVariantFactory


@pytest.mark.django_db
class TestCart:

    def test_add_clamps_to_product_stock(self, buyer_client, product):
        product.stock = 4
        product.save()

        response = buyer_client.post('/api/cart', {'product_id': product.pk, 'quantity': 10}, format='json')

        assert response.status_code == 201
        assert response.data['item']['quantity'] == 4
        assert response.data['clamped'] is True

    def test_update_clamps_to_variant_stock(self, buyer, buyer_client):
        variant = ProductVariantFactory(stock=3)
        item = CartItemFactory(user=buyer, product=variant.product, variant=variant, quantity=1)

        response = buyer_client.put(f'/api/cart/{item.pk}', {'quantity': 9}, format='json')

        assert response.status_code == 200
        assert response.data['item']['quantity'] == 3
        assert response.data['clamped'] is True

    def test_variant_required_when_product_has_variants(self, buyer_client):
        variant = ProductVariantFactory()
        response = buyer_client.post('/api/cart', {'product_id': variant.product_id}, format='json')
        assert response.status_code == 400

    def test_zero_quantity_removes_line(self, buyer, buyer_client, product):
        item = CartItemFactory(user=buyer, product=product, quantity=2)
        response = buyer_client.put(f'/api/cart/{item.pk}', {'quantity': 0}, format='json')
        assert response.data['removed'] is True
        assert not CartItem.objects.filter(pk=item.pk).exists()

    def test_cannot_touch_someone_elses_line(self, buyer_client, product):
        item = CartItemFactory(product=product)
        response = buyer_client.delete(f'/api/cart/{item.pk}')
        assert response.status_code == 403

    def test_unapproved_product_cannot_be_added(self, buyer_client):
        product = ProductFactory(approval_status='pending')
        response = buyer_client.post('/api/cart', {'product_id': product.pk}, format='json')
        assert response.status_code == 400

    def test_merge_combines_lines_and_reports_skipped(self, buyer, buyer_client):
        kept = ProductFactory(stock=5)
        CartItemFactory(user=buyer, product=kept, quantity=2)
        fresh = ProductFactory(stock=10)
        sold_out = ProductFactory(stock=0)

        response = buyer_client.post('/api/cart/merge', {'items': [
            {'product_id': kept.pk, 'quantity': 4},
            {'product_id': fresh.pk, 'quantity': 3},
            {'product_id': sold_out.pk, 'quantity': 1},
            {'product_id': 999999, 'quantity': 1},
        ]}, format='json')

        assert response.status_code == 200
        quantities = dict(CartItem.objects.filter(user=buyer).values_list('product_id', 'quantity'))
        assert quantities == {kept.pk: 5, fresh.pk: 3}
        assert response.data['summary']['itemCount'] == 2
        assert response.data['skipped'] == [
            {'product_id': sold_out.pk, 'reason': 'Product is out of stock'},
            {'product_id': 999999, 'reason': 'Product not found'},
        ]

    def test_merge_rejects_malformed_lines(self, buyer_client):
        response = buyer_client.post('/api/cart/merge', {'items': [{'quantity': 2}]}, format='json')
        assert response.status_code == 400

    def test_cart_requires_authentication(self, api_client):
        assert api_client.get('/api/cart').status_code == 401


@pytest.mark.django_db
class TestCheckout:

    def test_checkout_decrements_stock_and_clears_cart(self, buyer, buyer_client, shipping_details):
        product = ProductFactory(stock=5, price=Decimal('250.00'))
        variant = ProductVariantFactory(stock=4, price=Decimal('300.00'))
        CartItemFactory(user=buyer, product=product, quantity=2)
        CartItemFactory(user=buyer, product=variant.product, variant=variant, quantity=3)

        response = buyer_client.post('/api/orders', {'shipping_details': shipping_details}, format='json')

        assert response.status_code == 201
        assert response.data['status'] == 'pending'
        assert response.data['total'] == '1400.00'
        product.refresh_from_db()
        variant.refresh_from_db()
        assert product.stock == 3
        assert variant.stock == 1
        assert not CartItem.objects.filter(user=buyer).exists()

    def test_insufficient_stock_rolls_back(self, buyer, buyer_client, shipping_details):
        product = ProductFactory(stock=5)
        item = CartItemFactory(user=buyer, product=product, quantity=2)
        product.stock = 1
        product.save()

        response = buyer_client.post('/api/orders', {'shipping_details': shipping_details}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Insufficient stock'
        assert response.data['details']['items'][0]['available'] == 1
        assert not Order.objects.filter(buyer=buyer).exists()
        assert CartItem.objects.filter(pk=item.pk).exists()

    def test_empty_cart(self, buyer_client, shipping_details):
        response = buyer_client.post('/api/orders', {'shipping_details': shipping_details}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Cart is empty'

    def test_cancel_restores_stock_and_terminal_status_rejects_changes(self, buyer, buyer_client, shipping_details):
        product = ProductFactory(stock=5)
        CartItemFactory(user=buyer, product=product, quantity=2)
        order_id = buyer_client.post('/api/orders', {'shipping_details': shipping_details}, format='json').data['id']

        response = buyer_client.post(f'/api/orders/{order_id}/cancel', {'reason': 'Ordered twice'}, format='json')
        assert response.status_code == 200
        product.refresh_from_db()
        assert product.stock == 5

        response = buyer_client.post(f'/api/orders/{order_id}/cancel', {}, format='json')
        assert response.status_code == 409

    def test_seller_cannot_skip_to_delivered(self, api_client, buyer, shipping_details):
        product = ProductFactory()
        CartItemFactory(user=buyer, product=product)
        api_client.force_authenticate(user=buyer)
        order_id = api_client.post('/api/orders', {'shipping_details': shipping_details}, format='json').data['id']

        api_client.force_authenticate(user=product.seller)
        response = api_client.put(f'/api/orders/{order_id}/status', {'status': 'delivered'}, format='json')

        assert response.status_code == 409
        assert response.data['details']['current'] == 'pending'
