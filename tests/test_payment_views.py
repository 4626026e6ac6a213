import hashlib
import hmac
import json
from unittest import mock

import pytest
import requests

from accounts.models import User
from events.models import EventRegistration, WorkshopRegistration
from payments.models import Payment

ORDER_URL = '/api/razorpay/order/'
VERIFY_URL = '/api/razorpay/verify/'

REGISTRATION = {
    'name': 'Asha Rao',
    'email': 'asha@college.edu',
    'phone': '9876543210',
    'organization': 'REC',
    'year': 'Second Year',
}


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type='application/json')


def sign(order_id, payment_id):
    return hmac.new(b'rzp_test_secret', f"{order_id}|{payment_id}".encode(), hashlib.sha256).hexdigest()


@pytest.fixture
def gateway():
    with mock.patch('payments.gateway.requests.post') as post:
        post.return_value.json.return_value = {
            'id': 'order_abc', 'amount': 49900, 'currency': 'INR', 'status': 'created',
        }
        yield post


@pytest.fixture
def paid_event(make_event):
    return make_event(is_free=False, price=49900)


@pytest.fixture
def paid_workshop(make_workshop):
    return make_workshop(price=49900)


def test_create_order_requires_login(client, db):
    response = post_json(client, ORDER_URL, {'kind': 'event', 'id': 1, 'amount': 100})
    assert response.status_code == 401


@pytest.mark.parametrize("payload", [
    {},
    {'kind': 'event', 'id': 1},
    {'kind': 'event', 'amount': 100},
    {'kind': 'concert', 'id': 1, 'amount': 100},
])
def test_create_order_missing_fields(student_client, payload):
    response = post_json(student_client, ORDER_URL, payload)
    assert response.status_code == 400


@pytest.mark.parametrize("payload", [
    {'kind': 'event', 'id': 'abc', 'amount': 49900},
    {'kind': 'event', 'id': 1.5, 'amount': 49900},
    {'kind': 'event', 'id': 1, 'amount': 'lots'},
    {'kind': 'event', 'id': 1, 'amount': True},
])
def test_create_order_rejects_malformed_numbers(student_client, gateway, payload):
    response = post_json(student_client, ORDER_URL, payload)

    assert response.status_code == 400
    gateway.assert_not_called()


def test_create_order_rejects_fractional_amount(student_client, paid_event, gateway):
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': paid_event.pk, 'amount': 49900.9})

    assert response.status_code == 400
    gateway.assert_not_called()
    assert not Payment.objects.exists()


def test_create_order_accepts_numeric_string_id(student_client, paid_event, gateway):
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': str(paid_event.pk), 'amount': 49900})
    assert response.status_code == 200


def test_create_order_unknown_item(student_client):
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': 999, 'amount': 100})
    assert response.status_code == 404
    assert response.json()['error'] == 'Event not found'


def test_create_order_price_mismatch(student_client, paid_event, gateway):
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': paid_event.pk, 'amount': 100})

    assert response.status_code == 400
    assert response.json()['error'] == 'Price mismatch'
    gateway.assert_not_called()


def test_create_order_for_free_item(student_client, make_event, gateway):
    event = make_event()
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': event.pk, 'amount': 100})

    assert response.status_code == 400
    gateway.assert_not_called()


def test_create_order_for_event(student_client, student, paid_event, gateway):
    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': paid_event.pk, 'amount': 49900})

    assert response.status_code == 200
    body = response.json()
    assert body['order']['id'] == 'order_abc'
    assert body['key_id'] == 'rzp_test_key'

    receipt = gateway.call_args.kwargs['json']['receipt']
    assert receipt.startswith(f"receipt_event_{paid_event.pk}_")

    payment = Payment.objects.get(razorpay_order_id='order_abc')
    assert payment.user == student
    assert payment.event == paid_event
    assert payment.status == 'pending'


def test_create_order_validates_workshop_form(student_client, paid_workshop, gateway):
    payload = {
        'kind': 'workshop', 'id': paid_workshop.pk, 'amount': 49900,
        'registration': dict(REGISTRATION, phone='123'),
    }
    response = post_json(student_client, ORDER_URL, payload)

    assert response.status_code == 400
    assert 'phone' in response.json()['errors']
    gateway.assert_not_called()


def test_create_order_keeps_workshop_details(student_client, paid_workshop, gateway):
    payload = {'kind': 'workshop', 'id': paid_workshop.pk, 'amount': 49900, 'registration': REGISTRATION}
    response = post_json(student_client, ORDER_URL, payload)

    assert response.status_code == 200
    assert Payment.objects.get().details == REGISTRATION


def test_create_order_refuses_already_registered(student_client, student, paid_event, gateway):
    EventRegistration.objects.create(user=student, event=paid_event, payment_status='success')

    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': paid_event.pk, 'amount': 49900})

    assert response.status_code == 400
    gateway.assert_not_called()


def test_create_order_gateway_failure(student_client, paid_event, gateway):
    gateway.side_effect = requests.ConnectionError

    response = post_json(student_client, ORDER_URL, {'kind': 'event', 'id': paid_event.pk, 'amount': 49900})

    assert response.status_code == 500
    assert response.json()['error'] == 'Failed to create order'
    assert not Payment.objects.exists()


def test_verify_missing_details(student_client):
    response = post_json(student_client, VERIFY_URL, {'razorpay_order_id': 'order_abc'})

    assert response.status_code == 400
    assert response.json()['error'] == 'Missing payment details'


def test_verify_invalid_signature(student_client, student, paid_event):
    Payment.objects.create(user=student, kind='event', event=paid_event, amount=49900, razorpay_order_id='order_abc')

    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_abc',
        'razorpay_payment_id': 'pay_1',
        'razorpay_signature': 'forged',
    })

    assert response.status_code == 400
    assert response.json() == {'success': False, 'error': 'Invalid signature'}
    assert Payment.objects.get().status == 'failed'
    assert not EventRegistration.objects.exists()


def test_verify_event_payment(student_client, student, paid_event):
    payment = Payment.objects.create(
        user=student, kind='event', event=paid_event, amount=49900, razorpay_order_id='order_abc',
    )

    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_abc',
        'razorpay_payment_id': 'pay_1',
        'razorpay_signature': sign('order_abc', 'pay_1'),
    })

    assert response.status_code == 200
    body = response.json()
    registration = EventRegistration.objects.get(user=student, event=paid_event)
    assert body == {'success': True, 'paymentId': 'pay_1', 'registrationId': registration.pk}
    assert registration.payment == payment
    assert registration.payment_status == 'success'
    payment.refresh_from_db()
    assert payment.status == 'success'
    assert payment.razorpay_payment_id == 'pay_1'


def test_verify_workshop_payment(student_client, student, paid_workshop):
    Payment.objects.create(
        user=student, kind='workshop', workshop=paid_workshop, amount=49900,
        razorpay_order_id='order_ws', details=REGISTRATION,
    )

    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_ws',
        'razorpay_payment_id': 'pay_2',
        'razorpay_signature': sign('order_ws', 'pay_2'),
    })

    assert response.status_code == 200
    registration = WorkshopRegistration.objects.get(user=student, workshop=paid_workshop)
    assert registration.phone == '9876543210'
    assert registration.payment_status == 'success'


def test_verify_unknown_order(student_client):
    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_missing',
        'razorpay_payment_id': 'pay_1',
        'razorpay_signature': sign('order_missing', 'pay_1'),
    })
    assert response.status_code == 404


def test_verify_twice_returns_the_same_registration(student_client, student, paid_event):
    Payment.objects.create(user=student, kind='event', event=paid_event, amount=49900, razorpay_order_id='order_abc')
    payload = {
        'razorpay_order_id': 'order_abc',
        'razorpay_payment_id': 'pay_1',
        'razorpay_signature': sign('order_abc', 'pay_1'),
    }

    first = post_json(student_client, VERIFY_URL, payload)
    second = post_json(student_client, VERIFY_URL, payload)

    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json() == first.json()
    assert EventRegistration.objects.filter(user=student, event=paid_event).count() == 1


def test_forged_callback_does_not_undo_verified_payment(student_client, student, paid_event):
    Payment.objects.create(user=student, kind='event', event=paid_event, amount=49900, razorpay_order_id='order_abc')
    post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_abc',
        'razorpay_payment_id': 'pay_1',
        'razorpay_signature': sign('order_abc', 'pay_1'),
    })

    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_abc',
        'razorpay_payment_id': 'pay_bogus',
        'razorpay_signature': 'forged',
    })

    assert response.status_code == 400
    payment = Payment.objects.get()
    assert payment.status == 'success'
    assert payment.razorpay_payment_id == 'pay_1'
    assert EventRegistration.objects.get(user=student).payment == payment


def test_verify_when_event_filled_up_keeps_payment(student_client, student, make_event):
    event = make_event(is_free=False, price=49900, capacity=1)
    other = User.objects.create_user(username='ravi', email='ravi@college.edu', password='x')
    EventRegistration.objects.create(user=other, event=event, payment_status='success')
    Payment.objects.create(user=student, kind='event', event=event, amount=49900, razorpay_order_id='order_late')

    response = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_late',
        'razorpay_payment_id': 'pay_9',
        'razorpay_signature': sign('order_late', 'pay_9'),
    })

    assert response.status_code == 409
    body = response.json()
    assert body['success'] is False
    assert body['paymentId'] == 'pay_9'
    assert Payment.objects.get().status == 'success'
    assert not EventRegistration.objects.filter(user=student).exists()

    retry = post_json(student_client, VERIFY_URL, {
        'razorpay_order_id': 'order_late',
        'razorpay_payment_id': 'pay_9',
        'razorpay_signature': sign('order_late', 'pay_9'),
    })
    assert retry.status_code == 409
