from django.utils import timezone

from .gamification import touch_activity


class ActivityStreakMiddleware:
    """Keeps the daily activity streak of signed-in users up to date."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            touch_activity(user, timezone.localdate())
        return self.get_response(request)
