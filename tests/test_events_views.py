from datetime import timedelta

from django.urls import reverse
from django.utils import timezone

from events.models import EventRegistration, WorkshopRegistration


def test_home_lists_upcoming_only(client, make_event, db):
    make_event(title='Future Talk')
    make_event(title='Past Talk', date=timezone.now() - timedelta(days=3))

    response = client.get(reverse('home'))

    assert [e.title for e in response.context['events']] == ['Future Talk']


def test_free_event_registration_view(student_client, student, make_event):
    event = make_event()

    response = student_client.post(reverse('register_event', args=[event.pk]))

    assert response.url == reverse('my_events')
    assert EventRegistration.objects.filter(user=student, event=event).exists()


def test_paid_event_cannot_skip_checkout(student_client, student, make_event):
    event = make_event(is_free=False, price=9900)

    response = student_client.post(reverse('register_event', args=[event.pk]))

    assert response.url == reverse('event_detail', args=[event.pk])
    assert not EventRegistration.objects.exists()


def test_event_detail_shows_registration(student_client, student, make_event):
    event = make_event()
    EventRegistration.objects.create(user=student, event=event)

    response = student_client.get(reverse('event_detail', args=[event.pk]))

    assert response.context['registration'] is not None


def test_free_workshop_registration(student_client, student, make_workshop):
    workshop = make_workshop()

    response = student_client.post(reverse('workshop_detail', args=[workshop.pk]), {
        'name': 'Asha Rao', 'email': 'asha@college.edu', 'phone': '9876543210', 'year': 'Final Year',
    })

    assert response.url == reverse('my_workshops')
    assert WorkshopRegistration.objects.get(user=student).year == 'Final Year'


def test_workshop_registration_form_errors(student_client, make_workshop):
    workshop = make_workshop()

    response = student_client.post(reverse('workshop_detail', args=[workshop.pk]), {
        'name': 'A', 'email': 'not-an-email', 'phone': '123',
    })

    errors = response.context['form'].errors
    assert {'name', 'email', 'phone'} <= set(errors)
    assert not WorkshopRegistration.objects.exists()


def test_my_events_split(student_client, student, make_event):
    EventRegistration.objects.create(user=student, event=make_event(title='Next Week'))
    EventRegistration.objects.create(
        user=student, event=make_event(title='Last Week', date=timezone.now() - timedelta(days=7)),
    )

    response = student_client.get(reverse('my_events'))

    assert [r.event.title for r in response.context['upcoming']] == ['Next Week']
    assert [r.event.title for r in response.context['past']] == ['Last Week']


def test_certificate_for_attendee(student_client, student, make_workshop):
    registration = WorkshopRegistration.objects.create(
        user=student, workshop=make_workshop(), name='Asha Rao',
        email='asha@college.edu', phone='9876543210', attended=True,
    )

    response = student_client.get(reverse('workshop_certificate', args=[registration.pk]))

    assert response.status_code == 200
    assert response['Content-Type'] == 'application/pdf'
    assert b''.join(response.streaming_content).startswith(b'%PDF')


def test_certificate_refused(student_client, student, admin, make_workshop):
    workshop = make_workshop()
    not_attended = WorkshopRegistration.objects.create(
        user=student, workshop=workshop, name='Asha Rao', email='asha@college.edu', phone='9876543210',
    )
    someone_else = WorkshopRegistration.objects.create(
        user=admin, workshop=workshop, name='Panel Admin', email='admin@revamp.test',
        phone='9876543210', attended=True,
    )
    no_certificates = WorkshopRegistration.objects.create(
        user=student, workshop=make_workshop(certificates_enabled=False), name='Asha Rao',
        email='asha@college.edu', phone='9876543210', attended=True,
    )

    for registration in (not_attended, someone_else, no_certificates):
        response = student_client.get(reverse('workshop_certificate', args=[registration.pk]))
        assert response.status_code == 403
