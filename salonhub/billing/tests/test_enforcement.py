import pytest

from salonhub.billing.enforcement import BillingError
from salonhub.billing.enforcement import CapacityEnforcer
from salonhub.billing.enforcement import LocationLimitError
from salonhub.billing.enforcement import UserLimitError
from salonhub.billing.tests.factories import OrganizationBillingFactory
from salonhub.organizations.tests.factories import LocationFactory
from salonhub.organizations.tests.factories import TeamMemberFactory


@pytest.mark.django_db
class TestLocationLimit:
    def test_allows_when_under_limit(self, org, starter_plan):
        OrganizationBillingFactory(org=org, plan=starter_plan)

        CapacityEnforcer().check_can_add_location(org)

    def test_blocks_at_limit(self, org, starter_plan):
        OrganizationBillingFactory(org=org, plan=starter_plan)
        LocationFactory(org=org)

        with pytest.raises(LocationLimitError) as exc_info:
            CapacityEnforcer().check_can_add_location(org)

        assert exc_info.value.limit == 1
        assert exc_info.value.code == "location_limit_exceeded"
        assert "limit of 1 locations" in exc_info.value.detail

    def test_purchased_locations_add_room(self, org, starter_plan):
        OrganizationBillingFactory(
            org=org,
            plan=starter_plan,
            additional_locations_purchased=1,
        )
        LocationFactory(org=org)

        CapacityEnforcer().check_can_add_location(org)

    def test_inactive_locations_do_not_count(self, org, starter_plan):
        OrganizationBillingFactory(org=org, plan=starter_plan)
        LocationFactory(org=org, is_active=False)

        CapacityEnforcer().check_can_add_location(org)

    def test_unlimited_plan_never_blocks(self, org, enterprise_plan):
        OrganizationBillingFactory(org=org, plan=enterprise_plan)
        LocationFactory.create_batch(25, org=org)

        CapacityEnforcer().check_can_add_location(org)


@pytest.mark.django_db
class TestUserLimit:
    def test_blocks_at_limit(self, org, starter_plan):
        OrganizationBillingFactory(org=org, plan=starter_plan)
        TeamMemberFactory.create_batch(5, org=org)

        with pytest.raises(UserLimitError) as exc_info:
            CapacityEnforcer().check_can_add_user(org)

        assert exc_info.value.limit == 5
        assert isinstance(exc_info.value, BillingError)

    def test_billing_override_allows_more(self, org, starter_plan):
        OrganizationBillingFactory(org=org, plan=starter_plan, included_users=10)
        TeamMemberFactory.create_batch(5, org=org)

        CapacityEnforcer().check_can_add_user(org)

    def test_default_plan_applies_without_billing(self, org, professional_plan):
        TeamMemberFactory.create_batch(49, org=org)

        CapacityEnforcer().check_can_add_user(org)
        TeamMemberFactory(org=org)
        with pytest.raises(UserLimitError):
            CapacityEnforcer().check_can_add_user(org)
