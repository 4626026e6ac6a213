"""
Thin client for the Razorpay Orders API and the checkout signature check.
"""
import hashlib
import hmac
import logging
import time

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


class PaymentGatewayError(Exception):
    """The gateway could not be reached or refused the request."""


class SignatureVerificationError(Exception):
    """The checkout callback signature does not match."""


def build_receipt(kind, item_id):
    return f"receipt_{kind}_{item_id}_{int(time.time() * 1000)}"


class RazorpayClient:
    def __init__(self, key_id=None, key_secret=None, api_url=None):
        self.key_id = key_id or settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret or settings.RAZORPAY_KEY_SECRET
        self.api_url = (api_url or settings.RAZORPAY_API_URL).rstrip('/')

    def create_order(self, amount, receipt, currency=None):
        payload = {
            "amount": amount,
            "currency": currency or settings.PAYMENT_CURRENCY,
            "receipt": receipt,
        }
        try:
            response = requests.post(
                f"{self.api_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Razorpay order creation failed for %s: %s", receipt, e)
            raise PaymentGatewayError("Failed to create order") from e

        order = response.json()
        logger.info("Created Razorpay order %s for %s paise", order.get('id'), amount)
        return order


def expected_signature(order_id, payment_id, secret):
    body = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id, payment_id, signature, secret=None):
    secret = secret or settings.RAZORPAY_KEY_SECRET
    expected = expected_signature(order_id, payment_id, secret)
    if not hmac.compare_digest(expected, signature or ''):
        raise SignatureVerificationError("Invalid signature")
