import logging

from django.contrib import messages
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_POST

from accounts.decorators import admin_required
from accounts.models import User
from events.forms import EventForm, WorkshopForm
from events.models import Event, EventRegistration, Workshop, WorkshopRegistration
from events.services import mark_event_attendance, mark_workshop_attendance
from events.utils import send_email_in_background, upload_file
from .exports import export_attendees, export_events, export_workshop_registrations
from .forms import EmailAttendeesForm, UserEditForm

logger = logging.getLogger(__name__)


# --- EVENTS ---

@admin_required
def event_list(request):
    events = Event.objects.all().order_by('-date')

    query = request.GET.get('q', '').strip()
    if query:
        events = events.filter(Q(title__icontains=query) | Q(description__icontains=query))

    day = parse_date(request.GET.get('date', '') or '')
    if day:
        events = events.filter(date__date=day)

    status = request.GET.get('status', 'all')
    now = timezone.now()
    if status == 'upcoming':
        events = events.filter(date__gte=now)
    elif status == 'past':
        events = events.filter(date__lt=now)

    if request.GET.get('export') == 'xlsx':
        return export_events(events)

    return render(request, 'panel/event_list.html', {
        'events': events.annotate(attendee_count=Count('registrations')),
        'query': query,
        'day': day,
        'status': status,
    })


@admin_required
def event_create(request):
    if request.method == 'POST':
        form = EventForm(request.POST, request.FILES)
        if form.is_valid():
            event = form.save(commit=False)
            event.created_by = request.user
            event.save()
            event.banner = upload_file(form.cleaned_data['banner_file'], f"event-banners/{event.pk}")
            event.save(update_fields=['banner'])
            logger.info("Event %s created by %s", event.pk, request.user.email)
            messages.success(request, f'Event "{event.title}" has been created.')
            return redirect('panel_event_list')
    else:
        form = EventForm()

    return render(request, 'panel/event_form.html', {'form': form})


@admin_required
def event_attendees(request, pk):
    event = get_object_or_404(Event, pk=pk)
    registrations = event.registrations.select_related('user').order_by('-registered_at')

    query = request.GET.get('q', '').strip()
    if query:
        registrations = registrations.filter(
            Q(user__name__icontains=query) | Q(user__email__icontains=query)
        )
    status = request.GET.get('status', '')
    if status:
        registrations = registrations.filter(status=status)

    if request.GET.get('export') == 'xlsx':
        return export_attendees(event, registrations)

    return render(request, 'panel/event_attendees.html', {
        'event': event,
        'registrations': registrations,
        'query': query,
        'status': status,
        'status_choices': EventRegistration.STATUS_CHOICES,
        'email_form': EmailAttendeesForm(),
    })


@admin_required
@require_POST
def event_attendees_action(request, pk):
    event = get_object_or_404(Event, pk=pk)
    ids = request.POST.getlist('selected')
    selected = event.registrations.filter(pk__in=ids).select_related('user')
    action = request.POST.get('action')

    if not selected:
        messages.warning(request, "Select at least one attendee first.")
    elif action in ('attended', 'no-show'):
        updated = mark_event_attendance(selected, action)
        messages.success(request, f"{updated} attendee(s) marked as {action}.")
    elif action == 'email':
        form = EmailAttendeesForm(request.POST)
        if form.is_valid():
            emails = [r.user.email for r in selected if r.user.email]
            send_email_in_background(form.cleaned_data['subject'], form.cleaned_data['message'], emails)
            messages.success(request, f"Sending e-mail to {len(emails)} attendee(s) in the background.")
        else:
            messages.error(request, "Subject and message are required to e-mail attendees.")
    else:
        messages.error(request, "Unknown action.")

    return redirect('panel_event_attendees', pk=event.pk)


# --- WORKSHOPS ---

@admin_required
def workshop_list(request):
    workshops = Workshop.objects.annotate(registration_count=Count('registrations')).order_by('-date')
    return render(request, 'panel/workshop_list.html', {'workshops': workshops})


@admin_required
def workshop_create(request):
    if request.method == 'POST':
        form = WorkshopForm(request.POST, request.FILES)
        if form.is_valid():
            workshop = form.save(commit=False)
            workshop.created_by = request.user
            workshop.save()
            workshop.banner = upload_file(form.cleaned_data['banner_file'], f"workshop-banners/{workshop.pk}")
            workshop.save(update_fields=['banner'])
            logger.info("Workshop %s created by %s", workshop.pk, request.user.email)
            messages.success(request, f'Workshop "{workshop.title}" has been created.')
            return redirect('panel_workshop_list')
    else:
        form = WorkshopForm()

    return render(request, 'panel/workshop_form.html', {'form': form})


@admin_required
def workshop_registrations(request, pk):
    workshop = get_object_or_404(Workshop, pk=pk)
    registrations = workshop.registrations.order_by('-registered_at')

    if request.GET.get('export') == 'xlsx':
        return export_workshop_registrations(workshop, registrations)

    return render(request, 'panel/workshop_registrations.html', {
        'workshop': workshop,
        'registrations': registrations,
    })


@admin_required
@require_POST
def toggle_workshop_attendance(request, pk):
    registration = get_object_or_404(WorkshopRegistration.objects.select_related('user'), pk=pk)
    mark_workshop_attendance(registration, attended=not registration.attended)
    state = "attended" if registration.attended else "not attended"
    messages.success(request, f"{registration.name} marked as {state}.")
    return redirect('panel_workshop_registrations', pk=registration.workshop_id)


# --- USERS ---

@admin_required
def user_list(request):
    users = User.objects.all().order_by('-date_joined')
    query = request.GET.get('q', '').strip()
    if query:
        users = users.filter(
            Q(name__icontains=query) | Q(email__icontains=query) | Q(college__icontains=query)
        )
    return render(request, 'panel/user_list.html', {'users': users, 'query': query})


@admin_required
def user_detail(request, pk):
    member = get_object_or_404(User, pk=pk)
    return render(request, 'panel/user_detail.html', {
        'member': member,
        'event_registrations': member.event_registrations.select_related('event'),
        'workshop_registrations': member.workshop_registrations.select_related('workshop'),
        'application': getattr(member, 'ambassador_application', None),
    })


@admin_required
def user_edit(request, pk):
    member = get_object_or_404(User, pk=pk)
    if request.method == 'POST':
        form = UserEditForm(request.POST, instance=member)
        if form.is_valid():
            form.save()
            messages.success(request, f"{member.display_name} has been updated.")
            return redirect('panel_user_detail', pk=member.pk)
    else:
        form = UserEditForm(instance=member)

    return render(request, 'panel/user_form.html', {'form': form, 'member': member})


@admin_required
@require_POST
def verify_user(request, pk):
    member = get_object_or_404(User, pk=pk)
    decision = request.POST.get('decision')
    if decision not in ('verified', 'rejected'):
        messages.error(request, "Unknown verification decision.")
    else:
        member.verification_status = decision
        member.save(update_fields=['verification_status'])
        logger.info("College ID of user %s %s by %s", member.pk, decision, request.user.email)
        messages.success(request, f"{member.display_name} is now {decision}.")
    return redirect('panel_user_detail', pk=member.pk)
