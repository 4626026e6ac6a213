import hashlib
import hmac
from unittest import mock

import pytest
import requests

from payments.gateway import (
    PaymentGatewayError, RazorpayClient, SignatureVerificationError,
    build_receipt, expected_signature, verify_payment_signature,
)


def sign(order_id, payment_id, secret='rzp_test_secret'):
    return hmac.new(secret.encode(), f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


def test_expected_signature_matches_hmac():
    assert expected_signature('order_1', 'pay_1', 'rzp_test_secret') == sign('order_1', 'pay_1')


def test_valid_signature_passes():
    verify_payment_signature('order_1', 'pay_1', sign('order_1', 'pay_1'))


@pytest.mark.parametrize("signature", ['', 'deadbeef', sign('order_1', 'pay_2')])
def test_invalid_signature_raises(signature):
    with pytest.raises(SignatureVerificationError):
        verify_payment_signature('order_1', 'pay_1', signature)


def test_receipt_format():
    with mock.patch('payments.gateway.time.time', return_value=1700000000.123):
        assert build_receipt('workshop', 7) == 'receipt_workshop_7_1700000000123'


@mock.patch('payments.gateway.requests.post')
def test_create_order_posts_to_orders_api(post):
    post.return_value.json.return_value = {'id': 'order_9', 'amount': 49900, 'currency': 'INR'}

    order = RazorpayClient().create_order(49900, 'receipt_event_1_1')

    assert order['id'] == 'order_9'
    args, kwargs = post.call_args
    assert args[0] == 'https://api.razorpay.com/v1/orders'
    assert kwargs['json'] == {'amount': 49900, 'currency': 'INR', 'receipt': 'receipt_event_1_1'}
    assert kwargs['auth'] == ('rzp_test_key', 'rzp_test_secret')


@mock.patch('payments.gateway.requests.post')
def test_create_order_wraps_http_errors(post):
    post.return_value.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")

    with pytest.raises(PaymentGatewayError):
        RazorpayClient().create_order(100, 'receipt_event_1_1')


@mock.patch('payments.gateway.requests.post', side_effect=requests.ConnectionError)
def test_create_order_wraps_connection_errors(post):
    with pytest.raises(PaymentGatewayError):
        RazorpayClient().create_order(100, 'receipt_event_1_1')
