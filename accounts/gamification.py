"""
Points, tiers, badges and activity streaks.

Tiers are never edited directly: they are derived from the points counter
whenever points are written.
"""
import logging
from datetime import timedelta

from django.db import transaction

logger = logging.getLogger(__name__)

TIERS = ['Bronze', 'Silver', 'Gold', 'Platinum']

# Minimum points for each tier, highest first
TIER_THRESHOLDS = (
    ('Platinum', 2000),
    ('Gold', 750),
    ('Silver', 250),
    ('Bronze', 0),
)

POINTS = {
    'signup': 50,
    'onboarding': 25,
    'event_attended': 20,
    'workshop_attended': 30,
}

FIRST_STEPS_BADGE = 'First Steps'


def tier_for_points(points):
    for tier, minimum in TIER_THRESHOLDS:
        if points >= minimum:
            return tier
    return 'Bronze'


def tier_index(tier):
    return TIERS.index(tier) if tier in TIERS else 0


def next_tier(points):
    """Return (tier name, points still needed) for the next tier, or (None, 0) at the top."""
    for tier, minimum in reversed(TIER_THRESHOLDS):
        if points < minimum:
            return tier, minimum - points
    return None, 0


def award_points(user, amount, reason):
    """Add points on a locked row so concurrent awards never read a stale total."""
    previous_tier = user.tier
    with transaction.atomic():
        locked = type(user).objects.select_for_update().get(pk=user.pk)
        locked.points += amount
        locked.save(update_fields=['points', 'tier'])
    user.points, user.tier = locked.points, locked.tier
    logger.info("Awarded %s points to user %s for %s (total %s)", amount, user.pk, reason, user.points)
    if user.tier != previous_tier:
        logger.info("User %s moved from %s to %s", user.pk, previous_tier, user.tier)
    return user.points


def award_badge(user, name):
    if name in user.badges:
        return False
    user.badges = list(user.badges) + [name]
    user.save(update_fields=['badges'])
    return True


def touch_activity(user, today):
    """Update the daily streak. Returns True when the user record changed."""
    last = user.last_active_date
    if last == today:
        return False
    if last is not None and last == today - timedelta(days=1):
        user.streak += 1
    else:
        user.streak = 1
    user.last_active_date = today
    user.save(update_fields=['streak', 'last_active_date'])
    return True
