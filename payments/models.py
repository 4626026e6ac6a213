from django.db import models
from django.conf import settings

from events.models import PAYMENT_STATUS_CHOICES


class Payment(models.Model):
    """One gateway order and its outcome."""
    KIND_CHOICES = (
        ('event', 'Event'),
        ('workshop', 'Workshop'),
    )

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='payments')
    kind = models.CharField(max_length=10, choices=KIND_CHOICES)
    event = models.ForeignKey('events.Event', on_delete=models.SET_NULL, null=True, blank=True, related_name='payments')
    workshop = models.ForeignKey(
        'events.Workshop', on_delete=models.SET_NULL, null=True, blank=True, related_name='payments',
    )

    # Smallest currency unit (paise)
    amount = models.PositiveIntegerField()
    currency = models.CharField(max_length=3, default='INR')

    razorpay_order_id = models.CharField(max_length=100, unique=True)
    razorpay_payment_id = models.CharField(max_length=100, blank=True)
    razorpay_signature = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='pending')

    # Workshop registration form, kept until the payment is verified
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.razorpay_order_id} ({self.status})"

    @property
    def item(self):
        return self.event if self.kind == 'event' else self.workshop
