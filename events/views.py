import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.views import redirect_to_login
from django.http import FileResponse, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.decorators.http import require_POST

from .certificates import render_certificate
from .forms import WorkshopRegistrationForm
from .models import Event, EventRegistration, Workshop, WorkshopRegistration
from .services import RegistrationError, register_for_event, register_for_workshop

logger = logging.getLogger(__name__)


def home(request):
    now = timezone.now()
    events = Event.objects.filter(date__gte=now).order_by('date')
    workshops = Workshop.objects.filter(date__gte=now).order_by('date')
    return render(request, 'events/index.html', {'events': events, 'workshops': workshops})


def event_detail(request, pk):
    event = get_object_or_404(Event, pk=pk)
    registration = None
    if request.user.is_authenticated:
        registration = EventRegistration.objects.filter(user=request.user, event=event).first()
    return render(request, 'events/event_detail.html', {
        'event': event,
        'registration': registration,
        'razorpay_key_id': settings.RAZORPAY_KEY_ID,
    })


@login_required
@require_POST
def register_event(request, pk):
    """Free events register straight away; paid ones go through the checkout widget."""
    event = get_object_or_404(Event, pk=pk)
    if event.is_paid:
        messages.error(request, "This event requires payment.")
        return redirect('event_detail', pk=event.pk)
    try:
        register_for_event(request.user, event)
    except RegistrationError as e:
        messages.error(request, str(e))
        return redirect('event_detail', pk=event.pk)
    messages.success(request, f'You are registered for "{event.title}".')
    return redirect('my_events')


def workshop_list(request):
    workshops = Workshop.objects.filter(date__gte=timezone.now()).order_by('date')
    return render(request, 'events/workshop_list.html', {'workshops': workshops})


def workshop_detail(request, pk):
    workshop = get_object_or_404(Workshop, pk=pk)
    registration = None
    initial = {}
    if request.user.is_authenticated:
        registration = WorkshopRegistration.objects.filter(user=request.user, workshop=workshop).first()
        initial = {
            'name': request.user.display_name,
            'email': request.user.email,
            'organization': request.user.college,
        }

    if request.method == 'POST':
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        form = WorkshopRegistrationForm(request.POST)
        if workshop.is_paid:
            messages.error(request, "This workshop requires payment.")
        elif form.is_valid():
            try:
                register_for_workshop(request.user, workshop, form.cleaned_data)
            except RegistrationError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, f'You are registered for "{workshop.title}".')
                return redirect('my_workshops')
    else:
        form = WorkshopRegistrationForm(initial=initial)

    return render(request, 'events/workshop_detail.html', {
        'workshop': workshop,
        'form': form,
        'registration': registration,
        'razorpay_key_id': settings.RAZORPAY_KEY_ID,
    })


@login_required
def my_events(request):
    now = timezone.now()
    registrations = EventRegistration.objects.filter(user=request.user).select_related('event')
    upcoming = [r for r in registrations if r.event.date >= now or r.is_joinable]
    past = [r for r in registrations if r not in upcoming]
    upcoming.sort(key=lambda r: r.event.date)
    return render(request, 'events/my_events.html', {'upcoming': upcoming, 'past': past})


@login_required
def my_workshops(request):
    registrations = WorkshopRegistration.objects.filter(user=request.user).select_related('workshop')
    return render(request, 'events/my_workshops.html', {'registrations': registrations})


@login_required
def workshop_certificate(request, pk):
    registration = get_object_or_404(WorkshopRegistration, pk=pk)

    if registration.user != request.user:
        return HttpResponse("Access denied: this registration belongs to another account.", status=403)

    if not registration.workshop.certificates_enabled:
        return HttpResponse("Certificates are not issued for this workshop.", status=403)

    if not registration.attended:
        return HttpResponse("Certificates are only available to attendees.", status=403)

    buffer = render_certificate(registration)
    logger.info("Certificate issued for workshop registration %s", registration.pk)
    filename = f"Certificate-{registration.name}.pdf"
    return FileResponse(buffer, as_attachment=True, filename=filename)
