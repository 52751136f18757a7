from datetime import timedelta

import pytest
from django.test import RequestFactory
from django.utils import timezone

from salonhub.billing.constants import SubscriptionStatus
from salonhub.billing.constants import UrgencyLevel
from salonhub.billing.context_processors import trial_banner_context
from salonhub.billing.tests.factories import OrganizationBillingFactory


@pytest.fixture
def request_factory():
    return RequestFactory()


def test_no_organization_on_request(request_factory):
    request = request_factory.get("/")

    context = trial_banner_context(request)

    assert context["show_trial_banner"] is False
    assert context["subscription_status"] is None
    assert context["trial_urgency"] == UrgencyLevel.NORMAL


@pytest.mark.django_db
class TestTrialBanner:
    def test_shows_banner_during_trial(self, request_factory, org, starter_plan):
        org.subscription_status = SubscriptionStatus.TRIALING
        org.save()
        OrganizationBillingFactory(
            org=org,
            plan=starter_plan,
            trial_ends_at=timezone.now() + timedelta(days=3),
        )
        request = request_factory.get("/")
        request.organization = org

        context = trial_banner_context(request)

        assert context["show_trial_banner"] is True
        assert context["trial_days_remaining"] == 3
        assert context["trial_urgency"] == UrgencyLevel.WARNING
        assert context["subscription_status"] == SubscriptionStatus.TRIALING

    def test_hidden_for_active_org(self, request_factory, org, starter_plan):
        org.subscription_status = SubscriptionStatus.ACTIVE
        org.save()
        OrganizationBillingFactory(org=org, plan=starter_plan)
        request = request_factory.get("/")
        request.organization = org

        context = trial_banner_context(request)

        assert context["show_trial_banner"] is False
        assert context["trial_days_remaining"] == 0
        assert context["subscription_status"] == SubscriptionStatus.ACTIVE
