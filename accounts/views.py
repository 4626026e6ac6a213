import logging
from itertools import groupby

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils import timezone

from events.models import Event, EventRegistration
from events.utils import upload_file
from .forms import AmbassadorApplicationForm, OnboardingForm
from .gamification import FIRST_STEPS_BADGE, POINTS, award_badge, award_points, next_tier, tier_index
from .models import AmbassadorApplication, Perk, Resource

logger = logging.getLogger(__name__)


@login_required
def dashboard(request):
    user = request.user
    if not user.onboarding_completed and not user.is_admin:
        return redirect('onboarding')

    upcoming = (
        EventRegistration.objects.filter(user=user, event__date__gte=timezone.now())
        .select_related('event').order_by('event__date')[:3]
    )
    suggested = Event.objects.filter(date__gte=timezone.now()).exclude(registrations__user=user).order_by('date')
    if user.primary_domain:
        suggested = [e for e in suggested if not e.domains or user.primary_domain in e.domains]
    tier, needed = next_tier(user.points)

    return render(request, 'accounts/dashboard.html', {
        'upcoming': upcoming,
        'suggested': list(suggested)[:3],
        'next_tier': tier,
        'points_needed': needed,
    })


@login_required
def onboarding(request):
    user = request.user
    if user.onboarding_completed:
        return redirect('dashboard')

    if request.method == 'POST':
        form = OnboardingForm(request.POST, request.FILES, instance=user)
        if form.is_valid():
            user = form.save(commit=False)
            user.college_id = upload_file(
                form.cleaned_data['college_id_file'],
                f"college-ids/{user.pk}",
                resource_type='auto',
            )
            user.verification_status = 'pending'
            user.onboarding_completed = True
            user.save(update_fields=OnboardingForm.Meta.fields + [
                'college_id', 'verification_status', 'onboarding_completed',
            ])

            award_points(user, POINTS['onboarding'], 'onboarding')
            award_badge(user, FIRST_STEPS_BADGE)
            messages.success(request, f"Welcome aboard! You earned {POINTS['onboarding']} points.")
            return redirect('dashboard')
    else:
        form = OnboardingForm(instance=user, initial={'name': user.display_name})

    return render(request, 'accounts/onboarding.html', {'form': form})


@login_required
def profile(request):
    user = request.user
    tier, needed = next_tier(user.points)
    context = {
        'campus_rank': user.campus_rank(),
        'events_attended': user.event_registrations.filter(status='attended').count(),
        'workshops_attended': user.workshop_registrations.filter(attended=True).count(),
        'next_tier': tier,
        'points_needed': needed,
    }
    return render(request, 'accounts/profile.html', context)


@login_required
def perks(request):
    user_level = tier_index(request.user.tier)
    perk_list = [
        {'perk': perk, 'unlocked': user_level >= tier_index(perk.tier)}
        for perk in Perk.objects.all()
    ]
    return render(request, 'accounts/perks.html', {'perks': perk_list})


@login_required
def resources(request):
    query = request.GET.get('q', '').strip()
    domain = request.user.primary_domain
    items = Resource.objects.filter(domain=domain) if domain else Resource.objects.none()
    if query:
        items = items.filter(title__icontains=query)

    grouped = [(category, list(group)) for category, group in groupby(items, key=lambda r: r.category)]
    return render(request, 'accounts/resources.html', {
        'grouped_resources': grouped,
        'query': query,
        'domain': request.user.get_primary_domain_display(),
    })


@login_required
def ambassador_apply(request):
    application = AmbassadorApplication.objects.filter(user=request.user).first()
    if application:
        return render(request, 'accounts/ambassador.html', {'application': application})

    if request.method == 'POST':
        form = AmbassadorApplicationForm(request.POST, request.FILES)
        if form.is_valid():
            application = form.save(commit=False)
            application.user = request.user
            video = form.cleaned_data.get('video_file')
            if video:
                application.video = upload_file(
                    video, f"ambassador-applications/{request.user.pk}", resource_type='video',
                )
            application.save()
            logger.info("Ambassador application submitted by user %s", request.user.pk)
            messages.success(request, "Your application has been submitted. We will get back to you soon.")
            return redirect('ambassador_apply')
    else:
        form = AmbassadorApplicationForm()

    return render(request, 'accounts/ambassador.html', {'form': form})
