"""
Capacity evaluator for plan limits and add-on seats.

Reports, per resource (locations and team members), how much of the
organization's allowance is in use, how much is left, and what the
purchased add-on seats cost each month.

Internally an unlimited total is ``math.inf``; ``as_dict()`` translates
unlimited totals and remainders to the ``-1`` sentinel used everywhere else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from salonhub.billing.constants import NEAR_LIMIT_THRESHOLD
from salonhub.billing.constants import UNLIMITED
from salonhub.billing.limits import Capacity
from salonhub.billing.limits import first_defined
from salonhub.billing.pricing import ZERO
from salonhub.billing.pricing import to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsageSnapshot:
    """Counts of active rows for an organization at query time."""

    location_count: int = 0
    user_count: int = 0


@dataclass(frozen=True)
class ResourceCapacity:
    used: int
    base: int | None
    purchased: int
    total: float | int
    remaining: int
    utilization: float
    is_unlimited: bool
    is_over_limit: bool
    is_near_limit: bool
    cost_per_month: Decimal

    @classmethod
    def unlimited(cls, used: int) -> ResourceCapacity:
        return cls(
            used=used,
            base=None,
            purchased=0,
            total=Capacity.unlimited().as_number(),
            remaining=UNLIMITED,
            utilization=0.0,
            is_unlimited=True,
            is_over_limit=False,
            is_near_limit=False,
            cost_per_month=ZERO,
        )

    def as_dict(self) -> dict:
        return {
            "used": self.used,
            "base": self.base,
            "purchased": self.purchased,
            "total": UNLIMITED if self.is_unlimited else self.total,
            "remaining": self.remaining,
            "utilization": self.utilization,
            "is_unlimited": self.is_unlimited,
            "is_over_limit": self.is_over_limit,
            "is_near_limit": self.is_near_limit,
            "cost_per_month": self.cost_per_month,
        }


@dataclass(frozen=True)
class OrganizationCapacity:
    locations: ResourceCapacity
    users: ResourceCapacity

    @property
    def is_over_limit(self) -> bool:
        return self.locations.is_over_limit or self.users.is_over_limit

    @property
    def is_near_limit(self) -> bool:
        return self.locations.is_near_limit or self.users.is_near_limit

    @property
    def total_add_on_cost(self) -> Decimal:
        return self.locations.cost_per_month + self.users.cost_per_month

    def as_dict(self) -> dict:
        return {
            "locations": self.locations.as_dict(),
            "users": self.users.as_dict(),
            "is_over_limit": self.is_over_limit,
            "is_near_limit": self.is_near_limit,
            "total_add_on_cost": self.total_add_on_cost,
        }


def _evaluate(
    *,
    used: int,
    base: int | None,
    purchased: int,
    fee,
    near_limit_threshold: float,
) -> ResourceCapacity:
    capacity = Capacity.from_raw(base).plus(purchased)
    utilization = capacity.utilization(used)
    return ResourceCapacity(
        used=used,
        base=base,
        purchased=purchased,
        total=capacity.as_number(),
        remaining=capacity.remaining(used),
        utilization=utilization,
        is_unlimited=capacity.is_unlimited,
        is_over_limit=capacity.is_exceeded_by(used),
        is_near_limit=utilization > near_limit_threshold,
        cost_per_month=purchased * to_money(fee),
    )


def compute_capacity(
    billing,
    plan,
    usage: UsageSnapshot | None = None,
    near_limit_threshold: float = NEAR_LIMIT_THRESHOLD,
) -> OrganizationCapacity:
    """
    Evaluate location and user capacity for one organization.

    With no plan the organization is treated as unlimited with no add-on
    cost (onboarding and demo accounts). Never raises.
    """
    usage = usage or UsageSnapshot()
    location_count = usage.location_count or 0
    user_count = usage.user_count or 0

    if plan is None:
        return OrganizationCapacity(
            locations=ResourceCapacity.unlimited(location_count),
            users=ResourceCapacity.unlimited(user_count),
        )

    capacity = OrganizationCapacity(
        locations=_evaluate(
            used=location_count,
            base=first_defined(
                getattr(billing, "included_locations", None),
                getattr(plan, "max_locations", None),
            ),
            purchased=getattr(billing, "additional_locations_purchased", None) or 0,
            fee=getattr(billing, "per_location_fee", None),
            near_limit_threshold=near_limit_threshold,
        ),
        users=_evaluate(
            used=user_count,
            base=first_defined(
                getattr(billing, "included_users", None),
                getattr(plan, "max_users", None),
            ),
            purchased=getattr(billing, "additional_users_purchased", None) or 0,
            fee=getattr(billing, "per_user_fee", None),
            near_limit_threshold=near_limit_threshold,
        ),
    )

    logger.debug(
        "Capacity computed: locations=%s/%s users=%s/%s",
        location_count,
        capacity.locations.total,
        user_count,
        capacity.users.total,
    )
    return capacity
