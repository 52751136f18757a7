"""
Trial and promo countdowns.

Turns the trial and promo end timestamps into day/hour countdowns and an
urgency level for banners and admin lists. Nothing is cached: every call
recomputes from the timestamps and ``now``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from salonhub.billing.constants import CRITICAL_DAYS_REMAINING
from salonhub.billing.constants import WARNING_DAYS_REMAINING
from salonhub.billing.constants import SubscriptionStatus
from salonhub.billing.constants import UrgencyLevel
from salonhub.billing.limits import first_defined
from salonhub.billing.schedule import days_until
from salonhub.billing.schedule import hours_until
from salonhub.billing.schedule import is_future


@dataclass(frozen=True)
class TrialStatus:
    is_in_trial: bool = False
    trial_ends_at: datetime | None = None
    days_remaining: int | None = None
    hours_remaining: int | None = None
    urgency_level: str = UrgencyLevel.NORMAL
    is_expired: bool = False


@dataclass(frozen=True)
class PromoStatus:
    is_in_promo: bool = False
    promo_ends_at: datetime | None = None
    days_remaining: int | None = None
    hours_remaining: int | None = None
    urgency_level: str = UrgencyLevel.NORMAL


def classify_urgency(days_remaining: int) -> str:
    if days_remaining <= 0:
        return UrgencyLevel.EXPIRED
    if days_remaining <= CRITICAL_DAYS_REMAINING:
        return UrgencyLevel.CRITICAL
    if days_remaining <= WARNING_DAYS_REMAINING:
        return UrgencyLevel.WARNING
    return UrgencyLevel.NORMAL


def _countdown(ends_at: datetime, now: datetime) -> tuple[int, int, bool]:
    """Return (days, hours, expired), with both counters clamped at zero."""
    expired = ends_at <= now
    if expired:
        return 0, 0, True
    return days_until(ends_at, now), hours_until(ends_at, now), False


def compute_trial_status(
    organization,
    billing,
    calculation=None,
    now: datetime | None = None,
) -> TrialStatus:
    """
    Work out whether the organization is in trial and how long is left.

    The billing record's trial end overrides the organization's. Any one
    signal puts the organization in trial: the pricing calculation says so,
    the subscription status is ``trialing``, or the trial end is still ahead.
    """
    now = now or timezone.now()
    ends_at = first_defined(
        getattr(billing, "trial_ends_at", None),
        getattr(organization, "trial_ends_at", None),
    )
    is_in_trial = (
        bool(getattr(calculation, "is_in_trial", False))
        or getattr(organization, "subscription_status", None)
        == SubscriptionStatus.TRIALING
        or is_future(ends_at, now)
    )
    if not is_in_trial or ends_at is None:
        return TrialStatus()

    days, hours, expired = _countdown(ends_at, now)
    return TrialStatus(
        is_in_trial=True,
        trial_ends_at=ends_at,
        days_remaining=days,
        hours_remaining=hours,
        urgency_level=classify_urgency(days),
        is_expired=expired,
    )


def compute_promo_status(billing, now: datetime | None = None) -> PromoStatus:
    """Countdown for the promotional price window, if one is running."""
    now = now or timezone.now()
    ends_at = getattr(billing, "promo_ends_at", None)
    if not is_future(ends_at, now):
        return PromoStatus(promo_ends_at=ends_at)

    days, hours, _expired = _countdown(ends_at, now)
    return PromoStatus(
        is_in_promo=True,
        promo_ends_at=ends_at,
        days_remaining=days,
        hours_remaining=hours,
        urgency_level=classify_urgency(days),
    )
