"""
Razorpay REST API client.

Documentation: https://razorpay.com/docs/api/
"""
import hashlib
import hmac
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

import requests
from django.conf import settings

from apps.common.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


def to_paise(amount) -> int:
    """Rupees to paise, rounded half up"""
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    """
    Check the checkout signature Razorpay hands to the client.

    The expected value is the hex HMAC-SHA256 of ``"<order_id>|<payment_id>"``
    keyed with the API secret.
    """
    if not (order_id and payment_id and signature):
        return False
    secret = secret if secret is not None else settings.RAZORPAY_KEY_SECRET
    expected = hmac.new(
        secret.encode('utf-8'),
        f"{order_id}|{payment_id}".encode('utf-8'),
        hashlib.sha256
    ).hexdigest()
    return hmac.compare_digest(expected, signature)


class RazorpayClient:
    """Thin wrapper over the Razorpay orders and payments endpoints"""

    def __init__(self, key_id: Optional[str] = None, key_secret: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.key_id = key_id or settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret or settings.RAZORPAY_KEY_SECRET
        self.base_url = (base_url or settings.RAZORPAY_API_BASE).rstrip('/')
        self.timeout = timeout or settings.RAZORPAY_TIMEOUT

    def _make_request(self, method: str, endpoint: str, data: Optional[Dict] = None) -> Dict:
        """
        Make an authenticated request to the Razorpay API.

        Raises:
            PaymentGatewayError: If the request fails or the gateway returns an error
        """
        if not self.key_id or not self.key_secret:
            raise PaymentGatewayError('Payment gateway is not configured')

        url = f"{self.base_url}{endpoint}"
        auth = (self.key_id, self.key_secret)

        try:
            if method.upper() == 'GET':
                response = requests.get(url, auth=auth, params=data, timeout=self.timeout)
            else:
                response = requests.post(url, auth=auth, json=data, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        except requests.exceptions.Timeout:
            logger.error(f'Razorpay API timeout: {endpoint}')
            raise PaymentGatewayError('Payment gateway timeout. Please try again.')

        except requests.exceptions.RequestException as e:
            error_msg = str(e)
            if getattr(e, 'response', None) is not None:
                try:
                    body = e.response.json()
                except ValueError:
                    body = {}
                error_msg = (body.get('error') or {}).get('description', error_msg)
            logger.error(f'Razorpay API error on {endpoint}: {error_msg}')
            raise PaymentGatewayError(f'Payment gateway error: {error_msg}')

    def create_order(self, amount_paise: int, receipt: str, notes: Optional[Dict] = None) -> Dict:
        payload = {
            'amount': amount_paise,
            'currency': settings.PAYMENT_CURRENCY,
            'receipt': receipt,
            'notes': notes or {},
        }
        return self._make_request('POST', '/orders', payload)

    def fetch_payment(self, payment_id: str) -> Dict:
        return self._make_request('GET', f'/payments/{payment_id}')
