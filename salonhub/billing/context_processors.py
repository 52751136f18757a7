"""
Context processors for billing information.

Provides trial status to all templates for the persistent trial banner.
"""

from __future__ import annotations

from salonhub.billing.constants import UrgencyLevel
from salonhub.billing.services import BillingService


def trial_banner_context(request):
    """
    Provide trial status info for the persistent trial banner.

    Returns context with:
    - show_trial_banner: Whether to show the banner
    - trial_days_remaining: Days left in trial
    - trial_hours_remaining: Hours left in trial
    - trial_urgency: normal / warning / critical / expired
    - subscription_status: Current subscription status

    Only provides data when the request carries an organization.
    """
    context = {
        "show_trial_banner": False,
        "trial_days_remaining": 0,
        "trial_hours_remaining": 0,
        "trial_urgency": UrgencyLevel.NORMAL,
        "subscription_status": None,
    }

    org = getattr(request, "organization", None)
    if org is None:
        return context

    context["subscription_status"] = org.subscription_status

    trial = BillingService().get_summary(org).trial
    if trial.is_in_trial:
        context["show_trial_banner"] = True
        context["trial_days_remaining"] = trial.days_remaining or 0
        context["trial_hours_remaining"] = trial.hours_remaining or 0
        context["trial_urgency"] = trial.urgency_level

    return context
