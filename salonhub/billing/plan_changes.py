"""
Plan change previews for upgrades and downgrades.

Before a platform admin moves an organization to a different plan, this
module works out:
- whether the move is an upgrade, downgrade or lateral change
- how each resource limit moves (more, fewer or the same seats)
- the prorated credit and charge when the change applies immediately

Proration uses a flat 30-day month: the unused days of the current price are
credited and the same days at the new price are charged. Changes scheduled
for the next cycle carry no proration.

Usage:
    preview = preview_plan_change(
        current_plan,
        new_plan,
        current_monthly_amount=calculation.effective_monthly_amount,
        days_remaining_in_cycle=12,
    )
    preview.proration.net
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from decimal import Decimal
from enum import Enum

from salonhub.billing.constants import DEFAULT_DAYS_REMAINING_IN_CYCLE
from salonhub.billing.constants import PRORATION_DAYS_PER_MONTH
from salonhub.billing.formatting import format_currency
from salonhub.billing.limits import Capacity
from salonhub.billing.pricing import to_money


class PlanChangeType(str, Enum):
    """Types of plan changes."""

    UPGRADE = "upgrade"  # Moving to a higher-priced plan
    DOWNGRADE = "downgrade"  # Moving to a lower-priced plan
    LATERAL = "lateral"  # Same price


class PlanChangeTiming(str, Enum):
    IMMEDIATELY = "immediately"
    NEXT_CYCLE = "next_cycle"


class LimitChange(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    SAME = "same"


@dataclass(frozen=True)
class Proration:
    """Credit for the old price and charge for the new one, same days."""

    credit: Decimal
    charge: Decimal
    net: Decimal

    @property
    def is_credit(self) -> bool:
        return self.net < 0


@dataclass
class PlanChangePreview:
    """What would happen if the plan were changed."""

    change_type: PlanChangeType
    current_plan: object | None
    new_plan: object
    timing: PlanChangeTiming
    limit_changes: dict[str, LimitChange] = field(default_factory=dict)
    proration: Proration | None = None
    days_remaining_in_cycle: int = 0
    message: str = ""


def get_change_type(current_plan, new_plan) -> PlanChangeType:
    """
    Determine if this is an upgrade, downgrade, or lateral move.

    Based on monthly list price - higher price = upgrade. Moving onto a plan
    from no plan at all is an upgrade.
    """
    if current_plan is None:
        return PlanChangeType.UPGRADE
    current_price = to_money(current_plan.price_monthly)
    new_price = to_money(new_plan.price_monthly)
    if new_price > current_price:
        return PlanChangeType.UPGRADE
    if new_price < current_price:
        return PlanChangeType.DOWNGRADE
    return PlanChangeType.LATERAL


def calculate_proration(current_amount, new_amount, days_remaining: int) -> Proration:
    days = max(0, days_remaining or 0)
    credit = to_money(current_amount) / PRORATION_DAYS_PER_MONTH * days
    charge = to_money(new_amount) / PRORATION_DAYS_PER_MONTH * days
    return Proration(credit=credit, charge=charge, net=charge - credit)


def _compare(current: Capacity, new: Capacity) -> LimitChange:
    # Unlimited ranks above any finite limit.
    if new.as_number() > current.as_number():
        return LimitChange.INCREASE
    if new.as_number() < current.as_number():
        return LimitChange.DECREASE
    return LimitChange.SAME


def compare_limits(current_plan, new_plan) -> dict[str, LimitChange]:
    """Direction each resource limit moves when going to ``new_plan``."""
    if current_plan is None:
        return {}
    return {
        "locations": _compare(
            Capacity.from_raw(current_plan.max_locations),
            Capacity.from_raw(new_plan.max_locations),
        ),
        "users": _compare(
            Capacity.from_raw(current_plan.max_users),
            Capacity.from_raw(new_plan.max_users),
        ),
    }


def preview_plan_change(
    current_plan,
    new_plan,
    current_monthly_amount=0,
    days_remaining_in_cycle: int = DEFAULT_DAYS_REMAINING_IN_CYCLE,
    timing: PlanChangeTiming | str = PlanChangeTiming.IMMEDIATELY,
) -> PlanChangePreview:
    """
    Preview a plan change without applying it.

    Args:
        current_plan: The plan the organization is on now (or None)
        new_plan: The plan being switched to
        current_monthly_amount: What the organization pays per month today
        days_remaining_in_cycle: Days left in the current billing cycle
        timing: Apply immediately (prorated) or at the next cycle

    Returns:
        PlanChangePreview
    """
    timing = PlanChangeTiming(timing)
    change_type = get_change_type(current_plan, new_plan)

    proration = None
    if timing == PlanChangeTiming.IMMEDIATELY:
        proration = calculate_proration(
            current_monthly_amount,
            new_plan.price_monthly,
            days_remaining_in_cycle,
        )
        if proration.net > 0:
            message = (
                f"{new_plan.name} takes effect immediately. "
                f"A prorated {format_currency(proration.net)} will be charged."
            )
        else:
            message = (
                f"{new_plan.name} takes effect immediately. "
                f"Credit: {format_currency(abs(proration.net))}."
            )
    else:
        message = f"{new_plan.name} takes effect at the start of the next cycle."

    return PlanChangePreview(
        change_type=change_type,
        current_plan=current_plan,
        new_plan=new_plan,
        timing=timing,
        limit_changes=compare_limits(current_plan, new_plan),
        proration=proration,
        days_remaining_in_cycle=days_remaining_in_cycle,
        message=message,
    )
