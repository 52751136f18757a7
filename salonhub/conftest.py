from decimal import Decimal

import pytest

from salonhub.billing.constants import UNLIMITED
from salonhub.billing.constants import PlanTier
from salonhub.billing.models import SubscriptionPlan
from salonhub.organizations.models import Organization
from salonhub.organizations.tests.factories import OrganizationFactory

PLAN_DEFAULTS = {
    PlanTier.STARTER: {
        "name": "Starter",
        "price_monthly": Decimal("99.00"),
        "max_locations": 1,
        "max_users": 5,
        "display_order": 1,
    },
    PlanTier.STANDARD: {
        "name": "Standard",
        "price_monthly": Decimal("199.00"),
        "max_locations": 2,
        "max_users": 15,
        "display_order": 2,
    },
    PlanTier.PROFESSIONAL: {
        "name": "Professional",
        "price_monthly": Decimal("299.00"),
        "max_locations": 5,
        "max_users": 50,
        "display_order": 3,
    },
    PlanTier.ENTERPRISE: {
        "name": "Enterprise",
        "price_monthly": Decimal("499.00"),
        "max_locations": UNLIMITED,
        "max_users": UNLIMITED,
        "display_order": 4,
    },
}


@pytest.fixture
def billing_plans(db) -> dict[str, SubscriptionPlan]:
    """
    Ensure the four catalog plans exist.

    Returns a mapping of tier to plan.
    """
    plans = {}
    for tier, defaults in PLAN_DEFAULTS.items():
        plan, _ = SubscriptionPlan.objects.get_or_create(tier=tier, defaults=defaults)
        plans[tier] = plan
    return plans


@pytest.fixture
def starter_plan(billing_plans) -> SubscriptionPlan:
    return billing_plans[PlanTier.STARTER]


@pytest.fixture
def professional_plan(billing_plans) -> SubscriptionPlan:
    return billing_plans[PlanTier.PROFESSIONAL]


@pytest.fixture
def enterprise_plan(billing_plans) -> SubscriptionPlan:
    return billing_plans[PlanTier.ENTERPRISE]


@pytest.fixture
def org(db) -> Organization:
    return OrganizationFactory()
