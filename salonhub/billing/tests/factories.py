from decimal import Decimal

import factory
from factory.django import DjangoModelFactory

from salonhub.billing.constants import BillingCycle
from salonhub.billing.constants import PlanTier
from salonhub.billing.models import OrganizationBilling
from salonhub.billing.models import SubscriptionPlan
from salonhub.organizations.tests.factories import OrganizationFactory


class SubscriptionPlanFactory(DjangoModelFactory):
    class Meta:
        model = SubscriptionPlan
        django_get_or_create = ["tier"]

    tier = PlanTier.STARTER
    name = "Starter"
    price_monthly = Decimal("100.00")
    price_annually = Decimal("960.00")
    max_locations = 1
    max_users = 5
    display_order = 1


class OrganizationBillingFactory(DjangoModelFactory):
    class Meta:
        model = OrganizationBilling

    org = factory.SubFactory(OrganizationFactory)
    plan = factory.SubFactory(SubscriptionPlanFactory)
    billing_cycle = BillingCycle.MONTHLY
    base_price = factory.LazyAttribute(
        lambda o: o.plan.price_monthly if o.plan else None,
    )
