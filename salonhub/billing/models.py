"""
Billing models for the salonhub pricing system.

Key design decisions:
- SubscriptionPlan is a catalog table (Starter ... Enterprise), read-only to
  the calculators
- OrganizationBilling is 1:1 with Organization and has an FK to the plan
- Per-tenant overrides (custom price, discounts, promo, trial, seat
  allowances) are nullable fields on OrganizationBilling; null means "use the
  plan default"
- Limit fields use -1 for unlimited

Relationship: Organization ──1:1── OrganizationBilling ──N:1── SubscriptionPlan
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _
from model_utils.models import TimeStampedModel

from salonhub.billing import schedule
from salonhub.billing.constants import DEFAULT_CONTRACT_LENGTH_MONTHS
from salonhub.billing.constants import UNLIMITED
from salonhub.billing.constants import BillingCycle
from salonhub.billing.constants import DiscountType
from salonhub.billing.constants import PlanTier

NON_NEGATIVE = [MinValueValidator(Decimal("0"))]
LIMIT_VALIDATORS = [MinValueValidator(UNLIMITED)]
MAX_PERCENTAGE = 100


class SubscriptionPlan(models.Model):
    """
    Catalog tier with default price and resource limits.

    This is the single source of truth for plan defaults. Organizations
    point at a plan through OrganizationBilling and may override its price
    and allowances there.

    Populated via ``manage.py seed_plans``.
    """

    tier = models.CharField(
        max_length=20,
        choices=PlanTier.choices,
        unique=True,
        help_text="Unique plan identifier.",
    )
    name = models.CharField(max_length=50, help_text="Display name for the plan.")
    description = models.TextField(blank=True)

    price_monthly = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=NON_NEGATIVE,
    )
    price_annually = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=NON_NEGATIVE,
    )

    # Limits (-1 = unlimited)
    max_users = models.IntegerField(
        default=UNLIMITED,
        validators=LIMIT_VALIDATORS,
        help_text="Maximum active team members. -1 = unlimited.",
    )
    max_locations = models.IntegerField(
        default=UNLIMITED,
        validators=LIMIT_VALIDATORS,
        help_text="Maximum active locations. -1 = unlimited.",
    )

    features = models.JSONField(
        default=list,
        blank=True,
        help_text="Feature keys included in the plan.",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive plans cannot be chosen for new billing records.",
    )
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order"]

    def __str__(self) -> str:
        return self.name

    @property
    def has_unlimited_users(self) -> bool:
        return self.max_users == UNLIMITED

    @property
    def has_unlimited_locations(self) -> bool:
        return self.max_locations == UNLIMITED


class OrganizationBilling(TimeStampedModel):
    """
    Per-tenant billing configuration.

    Holds the plan an organization is on plus everything negotiated on top
    of it. Records are created and updated by platform billing admins via
    BillingService.upsert_billing(); they are never deleted.

    Usage:
        calculation = compute_billing(org.billing, org.billing.plan, 3, 12)
    """

    org = models.OneToOneField(
        "organizations.Organization",
        on_delete=models.CASCADE,
        related_name="billing",
    )
    plan = models.ForeignKey(
        SubscriptionPlan,
        on_delete=models.PROTECT,  # Never delete a plan with billing records
        null=True,
        blank=True,
        related_name="billing_records",
    )
    pending_plan = models.ForeignKey(
        SubscriptionPlan,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pending_billing_records",
        help_text="Plan scheduled to take over at the start of the next cycle.",
    )
    billing_cycle = models.CharField(
        max_length=20,
        choices=BillingCycle.choices,
        default=BillingCycle.MONTHLY,
    )

    # Contract terms
    contract_length_months = models.PositiveIntegerField(
        default=DEFAULT_CONTRACT_LENGTH_MONTHS,
    )
    contract_start_date = models.DateField(null=True, blank=True)
    contract_end_date = models.DateField(
        null=True,
        blank=True,
        help_text="Derived from the start date and contract length.",
    )
    auto_renewal = models.BooleanField(default=True)
    billing_starts_at = models.DateField(null=True, blank=True)

    # Pricing overrides (null = use plan price)
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=NON_NEGATIVE,
        help_text="Plan list price captured when the record was saved.",
    )
    custom_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=NON_NEGATIVE,
        help_text="Negotiated monthly price. Overrides the base price.",
    )
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        null=True,
        blank=True,
    )
    discount_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=NON_NEGATIVE,
    )
    discount_reason = models.CharField(max_length=255, blank=True)

    # Promotional pricing
    promo_months = models.PositiveIntegerField(null=True, blank=True)
    promo_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=NON_NEGATIVE,
    )
    promo_ends_at = models.DateTimeField(null=True, blank=True)

    # Trial
    trial_days = models.PositiveIntegerField(default=0)
    trial_ends_at = models.DateTimeField(null=True, blank=True)

    # Fees
    setup_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=NON_NEGATIVE,
    )
    setup_fee_paid = models.BooleanField(default=False)
    per_location_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=NON_NEGATIVE,
        help_text="Monthly fee per add-on or overage location.",
    )
    per_user_fee = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0"),
        validators=NON_NEGATIVE,
        help_text="Monthly fee per add-on or overage user.",
    )

    # Seat allowances (null = plan default, -1 = unlimited)
    included_locations = models.IntegerField(
        null=True,
        blank=True,
        validators=LIMIT_VALIDATORS,
    )
    included_users = models.IntegerField(
        null=True,
        blank=True,
        validators=LIMIT_VALIDATORS,
    )
    additional_locations_purchased = models.PositiveIntegerField(default=0)
    additional_users_purchased = models.PositiveIntegerField(default=0)

    notes = models.TextField(blank=True)

    class Meta:
        verbose_name = "organization billing"
        verbose_name_plural = "organization billing"

    def __str__(self) -> str:
        plan_name = self.plan.name if self.plan else "No plan"
        return f"{self.org.name} - {plan_name} ({self.billing_cycle})"

    @property
    def has_custom_pricing(self) -> bool:
        """True if any negotiated price or discount is set."""
        return self.custom_price is not None or self.discount_type is not None

    def clean(self):
        super().clean()
        errors = {}
        if self.discount_type and self.discount_value is None:
            errors["discount_value"] = _("A discount type needs a discount value.")
        if (
            self.discount_type == DiscountType.PERCENTAGE
            and self.discount_value is not None
            and self.discount_value > MAX_PERCENTAGE
        ):
            errors["discount_value"] = _(
                "Percentage discounts must be between 0 and 100.",
            )
        if self.promo_price is not None and not self.promo_months:
            errors["promo_months"] = _("A promo price needs a promo length.")
        if errors:
            raise ValidationError(errors)

    def apply_contract_schedule(self) -> None:
        """
        Derive stored dates from the contract start.

        Leaves the stored dates alone when no start date is set.
        """
        start = self.contract_start_date
        if not start:
            return
        self.contract_end_date = schedule.contract_end_date(
            start,
            self.contract_length_months,
        )
        self.promo_ends_at = schedule.promo_ends_at(start, self.promo_months)
        self.trial_ends_at = schedule.trial_ends_at(start, self.trial_days)
        self.billing_starts_at = start
