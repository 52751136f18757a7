"""
Tests for plan change previews.

These tests cover:
- Upgrade / downgrade / lateral detection
- Limit comparison, including unlimited limits
- Proration for immediate changes
- Next-cycle changes carrying no proration
"""

from decimal import Decimal

import pytest

from salonhub.billing.constants import PlanTier
from salonhub.billing.models import SubscriptionPlan
from salonhub.billing.plan_changes import LimitChange
from salonhub.billing.plan_changes import PlanChangeTiming
from salonhub.billing.plan_changes import PlanChangeType
from salonhub.billing.plan_changes import calculate_proration
from salonhub.billing.plan_changes import compare_limits
from salonhub.billing.plan_changes import get_change_type
from salonhub.billing.plan_changes import preview_plan_change

CENTS = Decimal("0.01")


@pytest.mark.django_db
class TestPlanChangeType:
    """Tests for determining upgrade vs downgrade."""

    def test_upgrade_detection(self, billing_plans):
        result = get_change_type(
            billing_plans[PlanTier.STARTER],
            billing_plans[PlanTier.PROFESSIONAL],
        )
        assert result == PlanChangeType.UPGRADE

    def test_downgrade_detection(self, billing_plans):
        result = get_change_type(
            billing_plans[PlanTier.ENTERPRISE],
            billing_plans[PlanTier.STANDARD],
        )
        assert result == PlanChangeType.DOWNGRADE

    def test_lateral_detection(self, starter_plan):
        twin = SubscriptionPlan(name="Twin", price_monthly=starter_plan.price_monthly)
        assert get_change_type(starter_plan, twin) == PlanChangeType.LATERAL

    def test_no_current_plan_is_upgrade(self, starter_plan):
        assert get_change_type(None, starter_plan) == PlanChangeType.UPGRADE


@pytest.mark.django_db
class TestCompareLimits:
    def test_increase(self, starter_plan, professional_plan):
        changes = compare_limits(starter_plan, professional_plan)
        assert changes == {
            "locations": LimitChange.INCREASE,
            "users": LimitChange.INCREASE,
        }

    def test_unlimited_ranks_highest(self, professional_plan, enterprise_plan):
        assert compare_limits(enterprise_plan, professional_plan) == {
            "locations": LimitChange.DECREASE,
            "users": LimitChange.DECREASE,
        }
        assert compare_limits(professional_plan, enterprise_plan)["users"] == (
            LimitChange.INCREASE
        )

    def test_same(self, enterprise_plan):
        changes = compare_limits(enterprise_plan, enterprise_plan)
        assert set(changes.values()) == {LimitChange.SAME}

    def test_no_current_plan(self, starter_plan):
        assert compare_limits(None, starter_plan) == {}


class TestCalculateProration:
    def test_upgrade_charges_difference(self):
        proration = calculate_proration(Decimal("99"), Decimal("299"), 15)

        assert proration.credit.quantize(CENTS) == Decimal("49.50")
        assert proration.charge.quantize(CENTS) == Decimal("149.50")
        assert proration.net.quantize(CENTS) == Decimal("100.00")
        assert proration.is_credit is False

    def test_downgrade_is_credit(self):
        proration = calculate_proration(Decimal("300"), Decimal("150"), 10)

        assert proration.net == Decimal("-50")
        assert proration.is_credit is True

    def test_negative_days_clamped(self):
        proration = calculate_proration(Decimal("100"), Decimal("200"), -4)
        assert proration.net == 0


@pytest.mark.django_db
class TestPreviewPlanChange:
    def test_immediate_upgrade(self, starter_plan, professional_plan):
        preview = preview_plan_change(
            starter_plan,
            professional_plan,
            current_monthly_amount=starter_plan.price_monthly,
            days_remaining_in_cycle=15,
        )

        assert preview.change_type == PlanChangeType.UPGRADE
        assert preview.timing == PlanChangeTiming.IMMEDIATELY
        assert preview.proration.net.quantize(CENTS) == Decimal("100.00")
        assert preview.message == (
            "Professional takes effect immediately. "
            "A prorated $100 will be charged."
        )

    def test_immediate_downgrade_shows_credit(self, starter_plan, professional_plan):
        preview = preview_plan_change(
            professional_plan,
            starter_plan,
            current_monthly_amount=professional_plan.price_monthly,
            days_remaining_in_cycle=15,
        )

        assert preview.change_type == PlanChangeType.DOWNGRADE
        assert preview.proration.is_credit is True
        assert preview.message.endswith("Credit: $100.")

    def test_next_cycle_has_no_proration(self, starter_plan, professional_plan):
        preview = preview_plan_change(
            starter_plan,
            professional_plan,
            current_monthly_amount=starter_plan.price_monthly,
            timing="next_cycle",
        )

        assert preview.timing == PlanChangeTiming.NEXT_CYCLE
        assert preview.proration is None
        assert preview.message == (
            "Professional takes effect at the start of the next cycle."
        )

    def test_invalid_timing(self, starter_plan, professional_plan):
        with pytest.raises(ValueError, match="someday"):
            preview_plan_change(starter_plan, professional_plan, timing="someday")
