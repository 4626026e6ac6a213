import json
import logging

from django.conf import settings
from django.db import transaction
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from events.forms import WorkshopRegistrationForm
from events.models import Event, EventRegistration, Workshop, WorkshopRegistration
from events.services import RegistrationError, register_for_event, register_for_workshop
from .gateway import (
    PaymentGatewayError, RazorpayClient, SignatureVerificationError, build_receipt, verify_payment_signature,
)
from .models import Payment

logger = logging.getLogger(__name__)

ITEM_MODELS = {
    'event': Event,
    'workshop': Workshop,
}


def _json_body(request):
    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _whole_number(value):
    """JSON integers or digit strings only. Floats and booleans are refused."""
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(value)


def _registration_for(payment):
    registrations = payment.event_registrations if payment.kind == 'event' else payment.workshop_registrations
    return registrations.first()


def _check_can_register(user, kind, item):
    if kind == 'event':
        exists = EventRegistration.objects.filter(user=user, event=item).exists()
    else:
        exists = WorkshopRegistration.objects.filter(user=user, workshop=item).exists()
    if exists:
        raise RegistrationError(f"You are already registered for this {kind}.")
    if item.is_full:
        raise RegistrationError(f"This {kind} is full.")


@require_POST
def create_order(request):
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    data = _json_body(request)
    if data is None:
        return JsonResponse({'error': 'Invalid JSON body'}, status=400)

    kind = data.get('kind') or data.get('type')
    item_id = data.get('id')
    amount = data.get('amount')
    if not kind or not item_id or not amount or kind not in ITEM_MODELS:
        return JsonResponse({'error': 'Amount, kind and id are required'}, status=400)
    try:
        amount = _whole_number(amount)
    except ValueError:
        return JsonResponse({'error': 'Amount must be a whole number of paise'}, status=400)
    try:
        item_id = _whole_number(item_id)
    except ValueError:
        return JsonResponse({'error': f'Invalid {kind} id'}, status=400)

    item = ITEM_MODELS[kind].objects.filter(pk=item_id).first()
    if item is None:
        return JsonResponse({'error': f'{kind.title()} not found'}, status=404)

    # Price is confirmed server side, never trusted from the client
    if not item.is_paid:
        return JsonResponse({'error': f'This {kind} is free'}, status=400)
    if item.price != amount:
        logger.warning("Price mismatch for %s %s: got %s, expected %s", kind, item.pk, amount, item.price)
        return JsonResponse({'error': 'Price mismatch'}, status=400)

    details = {}
    if kind == 'workshop':
        form = WorkshopRegistrationForm(data.get('registration') or {})
        if not form.is_valid():
            errors = form.errors.get_json_data()
            return JsonResponse({'error': 'Invalid registration details', 'errors': errors}, status=400)
        details = form.cleaned_data

    try:
        _check_can_register(request.user, kind, item)
    except RegistrationError as e:
        return JsonResponse({'error': str(e)}, status=400)

    try:
        order = RazorpayClient().create_order(amount, build_receipt(kind, item.pk))
    except PaymentGatewayError:
        return JsonResponse({'error': 'Failed to create order'}, status=500)

    Payment.objects.create(
        user=request.user,
        kind=kind,
        event=item if kind == 'event' else None,
        workshop=item if kind == 'workshop' else None,
        amount=amount,
        currency=order.get('currency', settings.PAYMENT_CURRENCY),
        razorpay_order_id=order['id'],
        details=details,
    )
    return JsonResponse({'order': order, 'key_id': settings.RAZORPAY_KEY_ID})


@require_POST
def verify_payment(request):
    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)

    data = _json_body(request) or {}
    order_id = data.get('razorpay_order_id')
    payment_id = data.get('razorpay_payment_id')
    signature = data.get('razorpay_signature')
    if not order_id or not payment_id or not signature:
        return JsonResponse({'error': 'Missing payment details'}, status=400)

    with transaction.atomic():
        payment = Payment.objects.select_for_update().filter(razorpay_order_id=order_id, user=request.user).first()
        if payment is None:
            return JsonResponse({'error': 'Order not found'}, status=404)

        try:
            verify_payment_signature(order_id, payment_id, signature)
        except SignatureVerificationError:
            logger.warning("Invalid signature for order %s", order_id)
            # A verified payment is never overwritten by a later bad callback
            if payment.status != 'success':
                payment.razorpay_payment_id = payment_id
                payment.razorpay_signature = signature
                payment.status = 'failed'
                payment.save(update_fields=['razorpay_payment_id', 'razorpay_signature', 'status'])
            return JsonResponse({'success': False, 'error': 'Invalid signature'}, status=400)

        if payment.status == 'success':
            registration = _registration_for(payment)
            if registration is None:
                return JsonResponse({
                    'success': False,
                    'error': 'Payment verified but no registration was written',
                    'paymentId': payment.razorpay_payment_id,
                }, status=409)
            return JsonResponse({
                'success': True,
                'paymentId': payment.razorpay_payment_id,
                'registrationId': registration.pk,
            })

        payment.razorpay_payment_id = payment_id
        payment.razorpay_signature = signature
        payment.status = 'success'
        payment.save(update_fields=['razorpay_payment_id', 'razorpay_signature', 'status'])
        try:
            if payment.kind == 'event':
                registration = register_for_event(request.user, payment.event, payment=payment)
            else:
                registration = register_for_workshop(request.user, payment.workshop, payment.details, payment=payment)
        except RegistrationError as e:
            # Captured payment stays marked success until refunded from the gateway dashboard
            logger.error("Payment %s verified but registration refused: %s", payment_id, e)
            return JsonResponse({'success': False, 'error': str(e), 'paymentId': payment_id}, status=409)

    logger.info("Payment %s verified for order %s", payment_id, order_id)
    return JsonResponse({'success': True, 'paymentId': payment_id, 'registrationId': registration.pk})
