"""
Billing constants for the pricing system.

These enums define the plan tiers, billing cycles, discount kinds and
subscription lifecycle states used throughout the billing module, plus the
fixed tables the pricing and trial calculators read from.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class PlanTier(models.TextChoices):
    """
    Catalog tiers, used as the natural key for SubscriptionPlan.
    """

    STARTER = "starter", _("Starter")
    STANDARD = "standard", _("Standard")
    PROFESSIONAL = "professional", _("Professional")
    ENTERPRISE = "enterprise", _("Enterprise")


class BillingCycle(models.TextChoices):
    MONTHLY = "monthly", _("Monthly")
    QUARTERLY = "quarterly", _("Quarterly")
    SEMI_ANNUAL = "semi_annual", _("Semi-Annual")
    ANNUAL = "annual", _("Annual")


class DiscountType(models.TextChoices):
    """
    Kinds of negotiated discount on an organization's billing record.

    Only PERCENTAGE and FIXED_AMOUNT change the computed price. PROMOTIONAL
    labels a discount that is expressed through the promo window instead.
    """

    PERCENTAGE = "percentage", _("Percentage")
    FIXED_AMOUNT = "fixed_amount", _("Fixed Amount")
    PROMOTIONAL = "promotional", _("Promotional")


class SubscriptionStatus(models.TextChoices):
    """
    Subscription lifecycle states stored on the organization.

    Typical flow:
        TRIALING → ACTIVE (on first payment)
        ACTIVE → PAST_DUE (payment failed) → CANCELLED
        INACTIVE is the state of an organization with no subscription yet.
    """

    ACTIVE = "active", _("Active")
    TRIALING = "trialing", _("Trialing")
    PAST_DUE = "past_due", _("Past Due")
    CANCELLED = "cancelled", _("Cancelled")
    INACTIVE = "inactive", _("Inactive")


# Platform lists surface problem accounts first.
SUBSCRIPTION_STATUS_PRIORITY = {
    SubscriptionStatus.PAST_DUE: 0,
    SubscriptionStatus.ACTIVE: 1,
    SubscriptionStatus.TRIALING: 2,
    SubscriptionStatus.INACTIVE: 3,
    SubscriptionStatus.CANCELLED: 4,
}


class UrgencyLevel(models.TextChoices):
    NORMAL = "normal", _("Normal")
    WARNING = "warning", _("Warning")
    CRITICAL = "critical", _("Critical")
    EXPIRED = "expired", _("Expired")


# Months billed per invoice for each cycle.
CYCLE_MULTIPLIERS = {
    BillingCycle.MONTHLY: 1,
    BillingCycle.QUARTERLY: 3,
    BillingCycle.SEMI_ANNUAL: 6,
    BillingCycle.ANNUAL: 12,
}

# Loyalty discount applied to the whole cycle invoice.
CYCLE_DISCOUNTS = {
    BillingCycle.MONTHLY: Decimal("0"),
    BillingCycle.QUARTERLY: Decimal("0.05"),
    BillingCycle.SEMI_ANNUAL: Decimal("0.10"),
    BillingCycle.ANNUAL: Decimal("0.20"),
}

# Sentinel stored in limit fields to mean "no limit".
UNLIMITED = -1

# Utilization ratio above which a resource is flagged as nearly full.
NEAR_LIMIT_THRESHOLD = 0.8

# Trial countdown thresholds, in whole days remaining.
CRITICAL_DAYS_REMAINING = 2
WARNING_DAYS_REMAINING = 7

# Proration treats every month as this many days.
PRORATION_DAYS_PER_MONTH = 30
DEFAULT_DAYS_REMAINING_IN_CYCLE = 15

DEFAULT_CONTRACT_LENGTH_MONTHS = 12
