from datetime import timedelta
from unittest import mock

import pytest
from django.utils import timezone

from accounts.models import User
from events.models import Event, Workshop


@pytest.fixture
def student(db):
    return User.objects.create_user(
        username='asha',
        email='asha@college.edu',
        password='pass12345',
        name='Asha Rao',
        college='REC',
        year=2,
        primary_domain='web-dev',
        domains=['web-dev'],
        onboarding_completed=True,
    )


@pytest.fixture
def admin(db):
    return User.objects.create_user(
        username='admin',
        email='admin@revamp.test',
        password='pass12345',
        name='Panel Admin',
        role='admin',
        onboarding_completed=True,
    )


@pytest.fixture
def student_client(client, student):
    client.force_login(student)
    return client


@pytest.fixture
def admin_client(client, admin):
    client.force_login(admin)
    return client


@pytest.fixture
def make_event(db):
    def _make_event(**kwargs):
        defaults = {
            'title': 'Intro to Django',
            'description': 'A hands-on evening building web apps.',
            'date': timezone.now() + timedelta(days=7),
            'location': 'Main Auditorium',
            'capacity': 50,
            'meet_link': 'https://meet.example.com/abc',
        }
        defaults.update(kwargs)
        return Event.objects.create(**defaults)
    return _make_event


@pytest.fixture
def make_workshop(db):
    def _make_workshop(**kwargs):
        defaults = {
            'title': 'Machine Learning Bootcamp',
            'description': 'Two days of practical model building.',
            'date': timezone.now() + timedelta(days=10),
            'location': 'Lab 3, CSE Block',
            'price': 0,
            'max_seats': 20,
        }
        defaults.update(kwargs)
        return Workshop.objects.create(**defaults)
    return _make_workshop


@pytest.fixture
def fake_upload():
    """Replaces the object-store upload with a canned response."""
    def _upload(file, folder=None, public_id=None, resource_type='image', **options):
        return {
            'public_id': f"{folder}/{public_id}",
            'version': 1700000000,
            'format': 'png',
            'type': 'upload',
            'resource_type': 'image' if resource_type == 'auto' else resource_type,
        }

    with mock.patch('events.utils.cloudinary.uploader.upload', side_effect=_upload) as upload:
        yield upload
