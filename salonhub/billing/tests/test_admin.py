from decimal import Decimal

import pytest
from django.contrib.admin.sites import AdminSite
from django.test import RequestFactory

from salonhub.billing.admin import OrganizationBillingAdmin
from salonhub.billing.admin import SubscriptionPlanAdmin
from salonhub.billing.models import OrganizationBilling
from salonhub.billing.models import SubscriptionPlan
from salonhub.billing.tests.factories import OrganizationBillingFactory
from salonhub.organizations.tests.factories import LocationFactory


@pytest.fixture
def site():
    return AdminSite()


class TestSubscriptionPlanAdmin:
    def test_display_columns(self, site):
        model_admin = SubscriptionPlanAdmin(SubscriptionPlan, site)
        plan = SubscriptionPlan(
            name="Enterprise",
            price_monthly=Decimal("1499.00"),
            max_locations=-1,
            max_users=250,
        )

        assert model_admin.monthly_price_display(plan) == "$1,499"
        assert model_admin.location_limit_display(plan) == "Unlimited"
        assert model_admin.user_limit_display(plan) == "250"


@pytest.mark.django_db
class TestOrganizationBillingAdmin:
    def test_computed_amounts(self, site, starter_plan):
        billing = OrganizationBillingFactory(
            plan=starter_plan,
            setup_fee=Decimal("25"),
        )
        model_admin = OrganizationBillingAdmin(OrganizationBilling, site)

        assert model_admin.effective_monthly_display(billing) == "$99"
        assert model_admin.first_invoice_display(billing) == "$124"

    def test_unsaved_record(self, site):
        model_admin = OrganizationBillingAdmin(OrganizationBilling, site)
        assert model_admin.effective_monthly_display(OrganizationBilling()) == "-"

    def test_derived_dates_are_read_only(self, site):
        model_admin = OrganizationBillingAdmin(OrganizationBilling, site)
        assert {"trial_ends_at", "promo_ends_at"} <= set(model_admin.readonly_fields)

    def test_changelist_rows_use_annotated_usage(
        self,
        site,
        starter_plan,
        django_assert_num_queries,
    ):
        billing = OrganizationBillingFactory(
            plan=starter_plan,
            per_location_fee=Decimal("10"),
        )
        LocationFactory.create_batch(3, org=billing.org)
        LocationFactory(org=billing.org, is_active=False)
        OrganizationBillingFactory(plan=starter_plan)
        model_admin = OrganizationBillingAdmin(OrganizationBilling, site)

        rows = list(model_admin.get_queryset(RequestFactory().get("/")))

        with django_assert_num_queries(0):
            amounts = {
                row.pk: (
                    model_admin.effective_monthly_display(row),
                    model_admin.first_invoice_display(row),
                )
                for row in rows
            }
        assert amounts[billing.pk] == ("$119", "$119")
