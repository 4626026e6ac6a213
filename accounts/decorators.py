from functools import wraps

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect


def admin_required(view_func):
    """login_required plus the administrator check used by every panel screen."""
    @login_required
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_admin:
            messages.error(request, "You do not have permission to access the admin panel.")
            return redirect('dashboard')
        return view_func(request, *args, **kwargs)
    return wrapper
