"""
Registration rules shared by the public pages, the payment callback and the
admin panel.
"""
import logging

from django.db import transaction

from accounts.gamification import POINTS, award_points
from .models import EventRegistration, WorkshopRegistration

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Raised when a registration is refused (duplicate, full or unpaid)."""


def _check_payment(item, payment):
    if item.is_paid and (payment is None or payment.status != 'success'):
        raise RegistrationError("Payment is required to register.")


@transaction.atomic
def register_for_event(user, event, payment=None):
    if EventRegistration.objects.filter(user=user, event=event).exists():
        raise RegistrationError("You are already registered for this event.")
    if event.is_full:
        raise RegistrationError("This event is full.")
    _check_payment(event, payment)

    registration = EventRegistration.objects.create(
        user=user,
        event=event,
        payment=payment,
        payment_status='success',
    )
    logger.info("User %s registered for event %s", user.pk, event.pk)
    return registration


@transaction.atomic
def register_for_workshop(user, workshop, details, payment=None):
    """`details` holds the cleaned registration form (name, email, phone, organization, year)."""
    if WorkshopRegistration.objects.filter(user=user, workshop=workshop).exists():
        raise RegistrationError("You are already registered for this workshop.")
    if workshop.is_full:
        raise RegistrationError("This workshop is full.")
    _check_payment(workshop, payment)

    registration = WorkshopRegistration.objects.create(
        user=user,
        workshop=workshop,
        name=details['name'],
        email=details['email'],
        phone=details['phone'],
        organization=details.get('organization', ''),
        year=details.get('year', ''),
        payment=payment,
        payment_status='success',
    )
    logger.info("User %s registered for workshop %s", user.pk, workshop.pk)
    return registration


def mark_event_attendance(registrations, status):
    """Bulk status update. Returns the number of registrations changed."""
    updated = 0
    for registration in registrations:
        if registration.status == status:
            continue
        registration.status = status
        fields = ['status']
        if status == 'attended' and not registration.points_awarded:
            award_points(registration.user, POINTS['event_attended'], f'event {registration.event_id}')
            registration.points_awarded = True
            fields.append('points_awarded')
        registration.save(update_fields=fields)
        updated += 1
    return updated


def mark_workshop_attendance(registration, attended=True):
    registration.attended = attended
    fields = ['attended']
    if attended and not registration.points_awarded:
        award_points(registration.user, POINTS['workshop_attended'], f'workshop {registration.workshop_id}')
        registration.points_awarded = True
        fields.append('points_awarded')
    registration.save(update_fields=fields)
    return registration
