import logging

from django.dispatch import receiver
from django.conf import settings
from allauth.account.signals import user_signed_up

from .gamification import POINTS, award_points

logger = logging.getLogger(__name__)


@receiver(user_signed_up)
def user_signed_up_(request, user, **kwargs):
    # Every new account (e-mail or Google) starts as a pending student
    # with the signup bonus. The configured admin e-mail becomes an admin.
    user.role = 'student'
    user.verification_status = 'pending'
    if settings.ADMIN_EMAIL and user.email.lower() == settings.ADMIN_EMAIL.lower():
        user.role = 'admin'
    if not user.name:
        user.name = user.get_full_name()
    user.save(update_fields=['role', 'verification_status', 'name'])
    award_points(user, POINTS['signup'], 'signup')
    logger.info("New %s account created for %s", user.role, user.email)
