from datetime import timedelta

from django.db import models
from django.conf import settings
from django.utils import timezone
from cloudinary.models import CloudinaryField

PAYMENT_STATUS_CHOICES = (
    ('pending', 'Pending'),
    ('success', 'Success'),
    ('failed', 'Failed'),
)

JOIN_WINDOW = timedelta(hours=1)


# 1. Community events (talks, meetups, hackathons)
class Event(models.Model):
    RECURRENCE_CHOICES = (
        ('weekly', 'Weekly'),
        ('biweekly', 'Every two weeks'),
        ('monthly', 'Monthly'),
    )

    title = models.CharField(max_length=200)
    description = models.TextField()
    banner = CloudinaryField('banner', blank=True, null=True)

    date = models.DateTimeField()
    duration = models.PositiveSmallIntegerField(default=1, help_text="Length in hours")
    location = models.CharField(max_length=200)
    capacity = models.PositiveIntegerField(default=100)
    meet_link = models.URLField(blank=True)

    is_free = models.BooleanField(default=True)
    # Stored in paise
    price = models.PositiveIntegerField(default=0)

    domains = models.JSONField(default=list, blank=True)
    target_years = models.JSONField(default=list, blank=True)
    colleges = models.JSONField(default=list, blank=True)

    is_recurring = models.BooleanField(default=False)
    recurrence_pattern = models.CharField(max_length=10, choices=RECURRENCE_CHOICES, blank=True)
    send_reminders = models.BooleanField(default=True)
    reminder_time = models.PositiveSmallIntegerField(default=24, help_text="Hours before start")
    luma_url = models.URLField(blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='created_events',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date']

    def __str__(self):
        return self.title

    @property
    def is_paid(self):
        return not self.is_free and self.price > 0

    @property
    def price_rupees(self):
        return self.price / 100

    @property
    def registered_count(self):
        return self.registrations.count()

    @property
    def is_full(self):
        return self.registered_count >= self.capacity

    @property
    def is_upcoming(self):
        return self.date >= timezone.now()


# 2. Paid / free hands-on workshops
class Workshop(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    banner = CloudinaryField('banner', blank=True, null=True)

    date = models.DateTimeField()
    location = models.CharField(max_length=200)
    # Stored in paise, 0 means free
    price = models.PositiveIntegerField(default=0)
    max_seats = models.PositiveIntegerField(default=30)

    prerequisites = models.JSONField(default=list, blank=True)
    learning_outcomes = models.JSONField(default=list, blank=True)
    # [{"title": ..., "url": ..., "type": "slides|code|document|video|other"}]
    materials = models.JSONField(default=list, blank=True)
    domains = models.JSONField(default=list, blank=True)

    recording_enabled = models.BooleanField(default=False)
    certificates_enabled = models.BooleanField(default=True)
    feedback_enabled = models.BooleanField(default=True)
    pre_assessment_enabled = models.BooleanField(default=False)
    post_assessment_enabled = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL,
        null=True, blank=True, related_name='created_workshops',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-date']

    def __str__(self):
        return self.title

    @property
    def is_free(self):
        return self.price == 0

    @property
    def is_paid(self):
        return self.price > 0

    @property
    def price_rupees(self):
        return self.price / 100

    @property
    def registered_count(self):
        return self.registrations.count()

    @property
    def seats_left(self):
        return max(self.max_seats - self.registered_count, 0)

    @property
    def is_full(self):
        return self.seats_left == 0


# 3. Registrations
class EventRegistration(models.Model):
    STATUS_CHOICES = (
        ('registered', 'Registered'),
        ('attended', 'Attended'),
        ('no-show', 'No show'),
    )

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='event_registrations')
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name='registrations')
    payment = models.ForeignKey(
        'payments.Payment', on_delete=models.SET_NULL, null=True, blank=True, related_name='event_registrations',
    )
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='pending')
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default='registered')
    points_awarded = models.BooleanField(default=False)
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-registered_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'event'], name='unique_event_registration'),
        ]

    def __str__(self):
        return f"{self.user} - {self.event.title}"

    @property
    def is_joinable(self):
        """The meeting link opens one hour before start and stays open for the event."""
        now = timezone.now()
        start = self.event.date
        end = start + timedelta(hours=self.event.duration)
        return start - JOIN_WINDOW <= now <= end


class WorkshopRegistration(models.Model):
    YEAR_CHOICES = (
        ('First Year', 'First Year'),
        ('Second Year', 'Second Year'),
        ('Third Year', 'Third Year'),
        ('Final Year', 'Final Year'),
        ('Working Professional', 'Working Professional'),
        ('Other', 'Other'),
    )

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='workshop_registrations')
    workshop = models.ForeignKey(Workshop, on_delete=models.CASCADE, related_name='registrations')
    name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=20)
    organization = models.CharField(max_length=200, blank=True)
    year = models.CharField(max_length=30, choices=YEAR_CHOICES, blank=True)

    payment = models.ForeignKey(
        'payments.Payment', on_delete=models.SET_NULL, null=True, blank=True, related_name='workshop_registrations',
    )
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='pending')
    attended = models.BooleanField(default=False)
    feedback_submitted = models.BooleanField(default=False)
    points_awarded = models.BooleanField(default=False)
    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-registered_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'workshop'], name='unique_workshop_registration'),
        ]

    def __str__(self):
        return f"{self.name} - {self.workshop.title}"

    def get_certificate_id(self):
        day = self.registered_at.strftime("%Y%m%d")
        return f"RV-{self.workshop_id:04d}-{day}-{str(self.id).zfill(4)}"
