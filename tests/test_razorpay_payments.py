"""
Razorpay checkout: gateway order creation and signature verification.
"""
import hashlib
import hmac
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from apps.cart.models import CartItem
from apps.common.exceptions import PaymentGatewayError
from apps.orders.models import Order
from apps.payments.models import PaymentTransaction, RefundRecord
from apps.payments.services.razorpay_client import RazorpayClient, to_paise, verify_payment_signature
from tests.factories import CartItemFactory, ProductFactory

SECRET = 'rzp_test_secret'


def sign(order_id, payment_id, secret=SECRET):
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


def gateway_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class TestSignature:

    def test_valid_signature(self):
        assert verify_payment_signature('order_A', 'pay_B', sign('order_A', 'pay_B'), secret=SECRET)

    def test_tampered_payment_id(self):
        assert not verify_payment_signature('order_A', 'pay_C', sign('order_A', 'pay_B'), secret=SECRET)

    def test_missing_parts_fail(self):
        assert not verify_payment_signature('', 'pay_B', 'abc', secret=SECRET)
        assert not verify_payment_signature('order_A', 'pay_B', '', secret=SECRET)

    def test_to_paise_rounds_half_up(self):
        assert to_paise(Decimal('10.005')) == 1001
        assert to_paise('1499.99') == 149999


class TestRazorpayClient:

    @patch('apps.payments.services.razorpay_client.requests.post')
    def test_create_order_posts_amount_in_paise(self, mock_post):
        mock_post.return_value = gateway_response({'id': 'order_X', 'amount': 50000, 'currency': 'INR'})
        client = RazorpayClient(key_id='rzp_test_key', key_secret=SECRET, base_url='https://api.example.test/v1')

        result = client.create_order(50000, 'receipt_1', {'userId': '1'})

        assert result['id'] == 'order_X'
        args, kwargs = mock_post.call_args
        assert args[0] == 'https://api.example.test/v1/orders'
        assert kwargs['auth'] == ('rzp_test_key', SECRET)
        assert kwargs['json']['amount'] == 50000
        assert kwargs['json']['currency'] == 'INR'

    @patch('apps.payments.services.razorpay_client.requests.get')
    def test_fetch_payment_reads_gateway_status(self, mock_get):
        mock_get.return_value = gateway_response({'id': 'pay_9', 'status': 'captured'})
        client = RazorpayClient(key_id='rzp_test_key', key_secret=SECRET, base_url='https://api.example.test/v1')

        result = client.fetch_payment('pay_9')

        assert result['status'] == 'captured'
        args, kwargs = mock_get.call_args
        assert args[0] == 'https://api.example.test/v1/payments/pay_9'
        assert kwargs['auth'] == ('rzp_test_key', SECRET)

    @patch('apps.payments.services.razorpay_client.requests.post')
    def test_timeout_becomes_gateway_error(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()
        client = RazorpayClient(key_id='k', key_secret='s', base_url='https://api.example.test/v1')
        with pytest.raises(PaymentGatewayError):
            client.create_order(100, 'r')

    def test_unconfigured_client_refuses(self, settings):
        settings.RAZORPAY_KEY_ID = ''
        settings.RAZORPAY_KEY_SECRET = ''
        with pytest.raises(PaymentGatewayError):
            RazorpayClient(base_url='https://api.example.test/v1').create_order(100, 'r')


@pytest.mark.django_db
class TestRazorpayCheckout:

    @pytest.fixture
    def cart(self, buyer):
        product = ProductFactory(price=Decimal('499.50'), stock=10)
        CartItemFactory(user=buyer, product=product, quantity=2)
        return product

    @patch('apps.payments.services.razorpay_client.requests.post')
    def test_create_order_stores_transaction(self, mock_post, buyer_client, buyer, cart):
        mock_post.return_value = gateway_response({
            'id': 'order_123', 'amount': 99900, 'currency': 'INR', 'receipt': 'receipt_x',
        })

        response = buyer_client.post('/api/razorpay/create-order', {}, format='json')

        assert response.status_code == 200
        assert response.data['orderId'] == 'order_123'
        assert response.data['amount'] == 99900
        payment = PaymentTransaction.objects.get(razorpay_order_id='order_123')
        assert payment.user == buyer
        assert payment.amount == Decimal('999.00')
        assert payment.status == 'created'

    def test_create_order_with_empty_cart(self, buyer_client):
        response = buyer_client.post('/api/razorpay/create-order', {}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Cart is empty'

    @patch('apps.payments.services.razorpay_client.requests.get')
    def test_verify_places_paid_order(self, mock_get, buyer_client, buyer, cart, shipping_details):
        mock_get.return_value = gateway_response({'id': 'pay_456', 'status': 'captured'})
        PaymentTransaction.objects.create(
            user=buyer, razorpay_order_id='order_123', amount=Decimal('999.00'), amount_paise=99900,
        )

        response = buyer_client.post('/api/razorpay/verify-payment', {
            'razorpay_order_id': 'order_123',
            'razorpay_payment_id': 'pay_456',
            'razorpay_signature': sign('order_123', 'pay_456'),
            'shipping_details': shipping_details,
        }, format='json')

        assert response.status_code == 201
        assert response.data['success'] is True
        order = response.data['order']
        assert order['status'] == 'paid'
        assert order['payment_status'] == 'paid'
        assert order['razorpay_payment_id'] == 'pay_456'
        payment = PaymentTransaction.objects.get(razorpay_order_id='order_123')
        assert payment.status == 'paid'
        assert payment.order_id == order['id']
        assert not CartItem.objects.filter(user=buyer).exists()
        cart.refresh_from_db()
        assert cart.stock == 8
        assert mock_get.call_args[0][0].endswith('/payments/pay_456')

    def test_bad_signature_marks_transaction_failed(self, buyer_client, buyer, cart, shipping_details):
        PaymentTransaction.objects.create(
            user=buyer, razorpay_order_id='order_123', amount=Decimal('999.00'), amount_paise=99900,
        )

        response = buyer_client.post('/api/razorpay/verify-payment', {
            'razorpay_order_id': 'order_123',
            'razorpay_payment_id': 'pay_456',
            'razorpay_signature': 'f' * 64,
            'shipping_details': shipping_details,
        }, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Payment verification failed'
        assert PaymentTransaction.objects.get(razorpay_order_id='order_123').status == 'failed'
        assert CartItem.objects.filter(user=buyer).exists()

    @patch('apps.payments.services.razorpay_client.requests.get')
    def test_uncaptured_payment_is_rejected(self, mock_get, buyer_client, buyer, cart, shipping_details):
        mock_get.return_value = gateway_response({'id': 'pay_456', 'status': 'authorized'})
        PaymentTransaction.objects.create(
            user=buyer, razorpay_order_id='order_123', amount=Decimal('999.00'), amount_paise=99900,
        )

        response = buyer_client.post('/api/razorpay/verify-payment', {
            'razorpay_order_id': 'order_123',
            'razorpay_payment_id': 'pay_456',
            'razorpay_signature': sign('order_123', 'pay_456'),
            'shipping_details': shipping_details,
        }, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Payment has not been captured'
        payment = PaymentTransaction.objects.get(razorpay_order_id='order_123')
        assert payment.status == 'failed'
        assert 'authorized' in payment.error_message
        assert CartItem.objects.filter(user=buyer).exists()
        assert not Order.objects.filter(buyer=buyer).exists()

    @patch('apps.payments.services.razorpay_client.requests.get')
    def test_repeated_verify_returns_first_order(self, mock_get, buyer_client, buyer, cart, shipping_details):
        mock_get.return_value = gateway_response({'id': 'pay_456', 'status': 'captured'})
        PaymentTransaction.objects.create(
            user=buyer, razorpay_order_id='order_123', amount=Decimal('999.00'), amount_paise=99900,
        )
        payload = {
            'razorpay_order_id': 'order_123',
            'razorpay_payment_id': 'pay_456',
            'razorpay_signature': sign('order_123', 'pay_456'),
            'shipping_details': shipping_details,
        }

        first = buyer_client.post('/api/razorpay/verify-payment', payload, format='json')
        second = buyer_client.post('/api/razorpay/verify-payment', payload, format='json')

        assert first.status_code == 201
        assert second.status_code == 201
        assert second.data['order']['id'] == first.data['order']['id']
        assert Order.objects.filter(buyer=buyer).count() == 1
        cart.refresh_from_db()
        assert cart.stock == 8

    @patch('apps.payments.services.razorpay_client.requests.get')
    def test_cancelling_prepaid_order_records_refund(self, mock_get, buyer_client, buyer, cart, shipping_details):
        mock_get.return_value = gateway_response({'id': 'pay_456', 'status': 'captured'})
        PaymentTransaction.objects.create(
            user=buyer, razorpay_order_id='order_123', amount=Decimal('999.00'), amount_paise=99900,
        )
        placed = buyer_client.post('/api/razorpay/verify-payment', {
            'razorpay_order_id': 'order_123',
            'razorpay_payment_id': 'pay_456',
            'razorpay_signature': sign('order_123', 'pay_456'),
            'shipping_details': shipping_details,
        }, format='json')
        order_id = placed.data['order']['id']

        response = buyer_client.post(f'/api/orders/{order_id}/cancel', {'reason': 'Changed my mind'}, format='json')

        assert response.status_code == 200
        order = Order.objects.get(pk=order_id)
        assert order.status == 'cancelled'
        assert order.payment_status == 'refunded'
        refund = RefundRecord.objects.get(order=order)
        assert refund.return_request is None
        assert refund.amount == Decimal('999.00')
        assert refund.reference == 'pay_456'
        assert refund.status == 'initiated'
        cart.refresh_from_db()
        assert cart.stock == 10

    def test_cancelling_cod_order_records_no_refund(self, buyer_client, buyer, cart, shipping_details):
        placed = buyer_client.post('/api/orders', {'shipping_details': shipping_details}, format='json')

        buyer_client.post(f"/api/orders/{placed.data['id']}/cancel", {'reason': 'Not needed'}, format='json')

        order = Order.objects.get(pk=placed.data['id'])
        assert order.status == 'cancelled'
        assert order.payment_status == 'pending'
        assert not RefundRecord.objects.filter(order=order).exists()

    def test_missing_fields(self, buyer_client):
        response = buyer_client.post('/api/razorpay/verify-payment', {'razorpay_order_id': 'order_1'}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Missing payment verification details'

    def test_key_endpoint_is_public(self, api_client):
        response = api_client.get('/api/razorpay/key')
        assert response.status_code == 200
        assert response.data == {'keyId': 'rzp_test_key'}
