import pytest
from django.db import IntegrityError

from salonhub.billing.constants import SubscriptionStatus
from salonhub.organizations.models import Organization
from salonhub.organizations.tests.factories import OrganizationFactory
from salonhub.organizations.tests.factories import TeamMemberFactory
from salonhub.organizations.tests.factories import UserFactory


@pytest.mark.django_db
class TestOrganization:
    def test_slug_generated_from_name(self):
        org = Organization.objects.create(name="Downtown Hair Studio")
        assert org.slug == "downtown-hair-studio"

    def test_explicit_slug_kept(self):
        org = OrganizationFactory(name="Bloom", slug="bloom-east")
        assert org.slug == "bloom-east"

    def test_defaults_to_inactive(self):
        assert OrganizationFactory().subscription_status == SubscriptionStatus.INACTIVE

    def test_by_status_priority(self):
        OrganizationFactory(name="Cancelled", subscription_status=SubscriptionStatus.CANCELLED)
        OrganizationFactory(name="Active", subscription_status=SubscriptionStatus.ACTIVE)
        OrganizationFactory(name="Past Due", subscription_status=SubscriptionStatus.PAST_DUE)
        OrganizationFactory(name="Trialing", subscription_status=SubscriptionStatus.TRIALING)
        OrganizationFactory(name="Inactive")

        names = list(Organization.objects.by_status_priority().values_list("name", flat=True))

        assert names == ["Past Due", "Active", "Trialing", "Inactive", "Cancelled"]


@pytest.mark.django_db
class TestTeamMember:
    def test_one_membership_per_user_and_org(self):
        member = TeamMemberFactory()
        with pytest.raises(IntegrityError):
            TeamMemberFactory(org=member.org, user=member.user)

    def test_same_user_in_two_orgs(self):
        user = UserFactory()
        TeamMemberFactory(user=user)
        TeamMemberFactory(user=user)

        assert user.team_memberships.count() == 2
