"""
Pricing resolver for organization billing.

Given a subscription plan, an organization's billing overrides and the
current usage counts, works out what the organization pays: the effective
monthly price, the price of one billing cycle, cycle savings, add-on seat
fees and the amount of the first invoice.

Key rules:
- Price overrides resolve custom_price, then base_price, then the plan price.
- An active promo replaces the price outright and suppresses any discount.
- Discounts never push the monthly price below zero.
- Purchased add-on seats raise the included allowance AND are billed per
  seat every month. Usage beyond the raised allowance is billed as overage
  on top.
- The first invoice is zero while the organization is in trial.

compute_billing() is total: it accepts missing or partially populated
records and never raises, because it runs every time billing data is shown.

Usage:
    calculation = compute_billing(billing, plan, location_count=3, user_count=12)
    calculation.cycle_amount
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from decimal import InvalidOperation

from django.utils import timezone

from salonhub.billing.constants import CYCLE_DISCOUNTS
from salonhub.billing.constants import CYCLE_MULTIPLIERS
from salonhub.billing.constants import BillingCycle
from salonhub.billing.constants import DiscountType
from salonhub.billing.limits import Capacity
from salonhub.billing.limits import first_defined
from salonhub.billing.schedule import days_until
from salonhub.billing.schedule import is_future

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONTHS_PER_YEAR = 12


def to_money(value) -> Decimal:
    """Coerce a stored amount to Decimal; anything unusable becomes zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return ZERO
    # NaN and infinities poison comparisons.
    if not amount.is_finite():
        return ZERO
    return amount


@dataclass(frozen=True)
class BillingCalculation:
    """Result of compute_billing(). Amounts are unrounded Decimals."""

    base_monthly_amount: Decimal
    monthly_amount: Decimal
    effective_monthly_amount: Decimal
    cycle_multiplier: int
    cycle_discount: Decimal
    cycle_amount: Decimal
    annual_amount: Decimal
    savings_amount: Decimal
    savings_percentage: Decimal
    discount_amount: Decimal = ZERO
    promo_savings: Decimal = ZERO
    is_in_promo: bool = False
    days_until_promo_ends: int | None = None
    is_in_trial: bool = False
    days_until_trial_ends: int | None = None
    billable_locations: int = 0
    location_fees: Decimal = ZERO
    billable_users: int = 0
    user_fees: Decimal = ZERO
    add_on_fees: Decimal = ZERO
    setup_fee_due: Decimal = ZERO
    first_invoice_amount: Decimal = ZERO

    def as_dict(self) -> dict:
        return asdict(self)


def _unconfigured(plan) -> BillingCalculation:
    """Result for an organization with no billing record or no plan yet."""
    price = to_money(getattr(plan, "price_monthly", None)) if plan else ZERO
    return BillingCalculation(
        base_monthly_amount=price,
        monthly_amount=price,
        effective_monthly_amount=price,
        cycle_multiplier=1,
        cycle_discount=ZERO,
        cycle_amount=price,
        annual_amount=price * MONTHS_PER_YEAR,
        savings_amount=ZERO,
        savings_percentage=ZERO,
        first_invoice_amount=price,
    )


def _apply_discount(amount: Decimal, discount_type, discount_value) -> Decimal:
    if discount_type is None or discount_value is None:
        return amount
    value = to_money(discount_value)
    if discount_type == DiscountType.PERCENTAGE:
        return max(ZERO, amount * (1 - value / HUNDRED))
    if discount_type == DiscountType.FIXED_AMOUNT:
        return max(ZERO, amount - value)
    return amount


def compute_billing(
    billing,
    plan,
    location_count: int = 0,
    user_count: int = 0,
    now: datetime | None = None,
) -> BillingCalculation:
    """
    Compute prices for one organization.

    Args:
        billing: OrganizationBilling (or None if not configured yet)
        plan: SubscriptionPlan the billing record points at (or None)
        location_count: active locations right now
        user_count: active team members right now
        now: evaluation time; defaults to the current time

    Returns:
        BillingCalculation
    """
    if billing is None or plan is None:
        return _unconfigured(plan)

    now = now or timezone.now()

    base_monthly = to_money(
        first_defined(
            getattr(billing, "custom_price", None),
            getattr(billing, "base_price", None),
            getattr(plan, "price_monthly", None),
        ),
    )

    promo_end = getattr(billing, "promo_ends_at", None)
    trial_end = getattr(billing, "trial_ends_at", None)
    is_in_promo = is_future(promo_end, now)
    is_in_trial = is_future(trial_end, now)

    effective = base_monthly
    promo_savings = ZERO
    discount_amount = ZERO
    promo_price = getattr(billing, "promo_price", None)
    if is_in_promo and promo_price is not None:
        promo_savings = base_monthly - to_money(promo_price)
        effective = to_money(promo_price)
    elif not is_in_promo:
        effective = _apply_discount(
            base_monthly,
            getattr(billing, "discount_type", None),
            getattr(billing, "discount_value", None),
        )
        discount_amount = base_monthly - effective

    per_location_fee = to_money(getattr(billing, "per_location_fee", None))
    per_user_fee = to_money(getattr(billing, "per_user_fee", None))
    extra_locations = getattr(billing, "additional_locations_purchased", None) or 0
    extra_users = getattr(billing, "additional_users_purchased", None) or 0

    location_capacity = Capacity.from_raw(
        first_defined(
            getattr(billing, "included_locations", None),
            getattr(plan, "max_locations", None),
        ),
    ).plus(extra_locations)
    user_capacity = Capacity.from_raw(
        first_defined(
            getattr(billing, "included_users", None),
            getattr(plan, "max_users", None),
        ),
    ).plus(extra_users)

    billable_locations = location_capacity.overage(location_count or 0)
    billable_users = user_capacity.overage(user_count or 0)
    location_fees = billable_locations * per_location_fee
    user_fees = billable_users * per_user_fee
    add_on_fees = extra_locations * per_location_fee + extra_users * per_user_fee

    effective += location_fees + user_fees + add_on_fees

    cycle = getattr(billing, "billing_cycle", None) or BillingCycle.MONTHLY
    multiplier = CYCLE_MULTIPLIERS.get(cycle, 1)
    cycle_discount = CYCLE_DISCOUNTS.get(cycle, ZERO)

    undiscounted_cycle = effective * multiplier
    cycle_amount = undiscounted_cycle * (1 - cycle_discount)
    annual_amount = cycle_amount / multiplier * MONTHS_PER_YEAR

    setup_fee = to_money(getattr(billing, "setup_fee", None))
    setup_fee_due = (
        setup_fee
        if setup_fee > 0 and not getattr(billing, "setup_fee_paid", False)
        else ZERO
    )
    first_invoice = ZERO if is_in_trial else cycle_amount + setup_fee_due

    logger.debug(
        "Billing computed: base=%s effective=%s cycle=%s x%s promo=%s trial=%s",
        base_monthly,
        effective,
        cycle,
        multiplier,
        is_in_promo,
        is_in_trial,
    )

    return BillingCalculation(
        base_monthly_amount=base_monthly,
        monthly_amount=base_monthly,
        effective_monthly_amount=effective,
        cycle_multiplier=multiplier,
        cycle_discount=cycle_discount,
        cycle_amount=cycle_amount,
        annual_amount=annual_amount,
        savings_amount=undiscounted_cycle - cycle_amount,
        savings_percentage=cycle_discount * HUNDRED,
        discount_amount=discount_amount,
        promo_savings=promo_savings,
        is_in_promo=is_in_promo,
        days_until_promo_ends=days_until(promo_end, now),
        is_in_trial=is_in_trial,
        days_until_trial_ends=days_until(trial_end, now),
        billable_locations=billable_locations,
        location_fees=location_fees,
        billable_users=billable_users,
        user_fees=user_fees,
        add_on_fees=add_on_fees,
        setup_fee_due=setup_fee_due,
        first_invoice_amount=first_invoice,
    )
