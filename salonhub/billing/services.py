"""
Billing service for loading, computing and updating organization billing.

This service is the database-facing side of the billing module:
- Counting current usage (active locations and team members)
- Loading an organization's billing record and plan and running the
  pricing, capacity and trial calculators over them with one shared ``now``
- Creating or updating billing records (platform admin edits)
- Applying or scheduling plan changes

The calculators themselves live in pricing.py, capacity.py and trial.py and
never touch the database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from salonhub.billing.capacity import OrganizationCapacity
from salonhub.billing.capacity import UsageSnapshot
from salonhub.billing.capacity import compute_capacity
from salonhub.billing.constants import DEFAULT_DAYS_REMAINING_IN_CYCLE
from salonhub.billing.models import OrganizationBilling
from salonhub.billing.models import SubscriptionPlan
from salonhub.billing.plan_changes import PlanChangePreview
from salonhub.billing.plan_changes import PlanChangeTiming
from salonhub.billing.plan_changes import preview_plan_change
from salonhub.billing.pricing import BillingCalculation
from salonhub.billing.pricing import compute_billing
from salonhub.billing.trial import PromoStatus
from salonhub.billing.trial import TrialStatus
from salonhub.billing.trial import compute_promo_status
from salonhub.billing.trial import compute_trial_status

if TYPE_CHECKING:
    from salonhub.organizations.models import Organization

logger = logging.getLogger(__name__)

# Fields a platform admin may set through upsert_billing(). Derived dates
# (contract_end_date, promo_ends_at, trial_ends_at, billing_starts_at) and
# base_price are filled in from these.
EDITABLE_FIELDS = frozenset(
    {
        "plan",
        "billing_cycle",
        "contract_length_months",
        "contract_start_date",
        "auto_renewal",
        "custom_price",
        "discount_type",
        "discount_value",
        "discount_reason",
        "promo_months",
        "promo_price",
        "trial_days",
        "setup_fee",
        "setup_fee_paid",
        "per_location_fee",
        "per_user_fee",
        "included_locations",
        "included_users",
        "additional_locations_purchased",
        "additional_users_purchased",
        "notes",
    },
)


@dataclass(frozen=True)
class BillingSummary:
    """Everything the billing screens show for one organization."""

    billing: OrganizationBilling | None
    plan: SubscriptionPlan | None
    usage: UsageSnapshot
    calculation: BillingCalculation
    capacity: OrganizationCapacity
    trial: TrialStatus
    promo: PromoStatus
    evaluated_at: datetime


def get_usage_snapshot(org: Organization) -> UsageSnapshot:
    """Count the organization's active locations and team members right now."""
    return UsageSnapshot(
        location_count=org.locations.filter(is_active=True).count(),
        user_count=org.team_members.filter(is_active=True).count(),
    )


def list_active_plans():
    return SubscriptionPlan.objects.filter(is_active=True).order_by("display_order")


class BillingService:
    """
    Service for organization billing.

    Usage:
        service = BillingService()
        summary = service.get_summary(org)
        summary.calculation.first_invoice_amount

        service.upsert_billing(org, plan=team_plan, billing_cycle="annual")
    """

    def get_billing(self, org: Organization) -> OrganizationBilling | None:
        return (
            OrganizationBilling.objects.select_related("plan", "pending_plan")
            .filter(org=org)
            .first()
        )

    def get_default_plan(self) -> SubscriptionPlan | None:
        """Plan assumed for organizations with no billing record yet."""
        return (
            SubscriptionPlan.objects.filter(
                tier=settings.BILLING_DEFAULT_PLAN_TIER,
                is_active=True,
            ).first()
        )

    def get_summary(
        self,
        org: Organization,
        now: datetime | None = None,
    ) -> BillingSummary:
        """
        Load billing data for ``org`` and run every calculator over it.

        All three calculations are evaluated against the same ``now``.
        """
        now = now or timezone.now()
        billing = self.get_billing(org)
        plan = billing.plan if billing is not None else self.get_default_plan()
        usage = get_usage_snapshot(org)

        calculation = compute_billing(
            billing,
            plan,
            usage.location_count,
            usage.user_count,
            now=now,
        )
        capacity = compute_capacity(
            billing,
            plan,
            usage,
            near_limit_threshold=settings.BILLING_NEAR_LIMIT_THRESHOLD,
        )
        trial = compute_trial_status(org, billing, calculation, now=now)
        promo = compute_promo_status(billing, now=now)

        return BillingSummary(
            billing=billing,
            plan=plan,
            usage=usage,
            calculation=calculation,
            capacity=capacity,
            trial=trial,
            promo=promo,
            evaluated_at=now,
        )

    @transaction.atomic
    def upsert_billing(self, org: Organization, **fields) -> OrganizationBilling:
        """
        Create or update the billing record for ``org``.

        Only EDITABLE_FIELDS are accepted. The base price is captured from the
        plan and contract dates are derived from the contract start.

        Raises:
            ValueError: If an unknown field is passed
            ValidationError: If the resulting record is invalid
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            msg = f"Unknown billing fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        billing, created = OrganizationBilling.objects.select_for_update().get_or_create(
            org=org,
            defaults={
                "billing_cycle": settings.BILLING_DEFAULT_CYCLE,
                "trial_days": settings.BILLING_DEFAULT_TRIAL_DAYS,
            },
        )

        for field_name, value in fields.items():
            setattr(billing, field_name, value)

        if billing.plan is not None:
            billing.base_price = billing.plan.price_monthly
        billing.apply_contract_schedule()

        billing.full_clean()
        billing.save()

        logger.info(
            "%s billing for org %s: plan=%s cycle=%s fields=%s",
            "Created" if created else "Updated",
            org.name,
            billing.plan.tier if billing.plan else None,
            billing.billing_cycle,
            sorted(fields),
        )
        return billing

    def preview_change(
        self,
        org: Organization,
        new_plan: SubscriptionPlan,
        timing: PlanChangeTiming | str = PlanChangeTiming.IMMEDIATELY,
        days_remaining_in_cycle: int = DEFAULT_DAYS_REMAINING_IN_CYCLE,
        now: datetime | None = None,
    ) -> PlanChangePreview:
        summary = self.get_summary(org, now=now)
        return preview_plan_change(
            summary.plan,
            new_plan,
            current_monthly_amount=summary.calculation.effective_monthly_amount,
            days_remaining_in_cycle=days_remaining_in_cycle,
            timing=timing,
        )

    @transaction.atomic
    def change_plan(
        self,
        org: Organization,
        new_plan: SubscriptionPlan,
        timing: PlanChangeTiming | str = PlanChangeTiming.IMMEDIATELY,
        days_remaining_in_cycle: int = DEFAULT_DAYS_REMAINING_IN_CYCLE,
        now: datetime | None = None,
    ) -> PlanChangePreview:
        """
        Move ``org`` onto ``new_plan``.

        Immediate changes switch the plan now; next-cycle changes are stored
        as the pending plan and leave the current plan in place.
        """
        preview = self.preview_change(
            org,
            new_plan,
            timing=timing,
            days_remaining_in_cycle=days_remaining_in_cycle,
            now=now,
        )

        if preview.timing == PlanChangeTiming.IMMEDIATELY:
            billing = self.upsert_billing(org, plan=new_plan)
            if billing.pending_plan_id:
                billing.pending_plan = None
                billing.save(update_fields=["pending_plan", "modified"])
        else:
            billing = self.get_billing(org) or self.upsert_billing(org)
            billing.pending_plan = new_plan
            billing.save(update_fields=["pending_plan", "modified"])

        logger.info(
            "Plan change (%s, %s) for org %s: %s -> %s",
            preview.change_type.value,
            preview.timing.value,
            org.name,
            preview.current_plan.tier if preview.current_plan else None,
            new_plan.tier,
        )
        return preview
