"""
Helpers for plan limits and override resolution.

Limit fields on plans and billing records use ``-1`` (and sometimes null) to
mean "unlimited". ``Capacity`` normalizes both into one value at the boundary
so the calculators never do arithmetic against the sentinel.

Usage:
    base = first_defined(billing.included_locations, plan.max_locations)
    capacity = Capacity.from_raw(base).plus(billing.additional_locations_purchased)
    capacity.overage(location_count)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from salonhub.billing.constants import UNLIMITED


def first_defined(*values):
    """Return the first value that is not None, or None if all are."""
    for value in values:
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class Capacity:
    """
    A resource limit: either unlimited, or a fixed number of units.

    ``limit`` is None for unlimited.
    """

    limit: int | None = None

    @classmethod
    def unlimited(cls) -> Capacity:
        return cls(limit=None)

    @classmethod
    def limited(cls, units: int) -> Capacity:
        return cls(limit=int(units))

    @classmethod
    def from_raw(cls, value: int | None) -> Capacity:
        """Map a stored limit (``-1``/None for unlimited) to a Capacity."""
        if value is None or value == UNLIMITED:
            return cls.unlimited()
        return cls.limited(value)

    @property
    def is_unlimited(self) -> bool:
        return self.limit is None

    def plus(self, extra: int) -> Capacity:
        """Raise the limit by purchased units. Unlimited stays unlimited."""
        if self.is_unlimited:
            return self
        return Capacity.limited(self.limit + (extra or 0))

    def overage(self, used: int) -> int:
        """Units in use beyond the limit."""
        if self.is_unlimited:
            return 0
        return max(0, used - self.limit)

    def remaining(self, used: int) -> int:
        """Units still available, or the ``-1`` sentinel when unlimited."""
        if self.is_unlimited:
            return UNLIMITED
        return max(0, self.limit - used)

    def utilization(self, used: int) -> float:
        """Used over total; 0 when unlimited or when the limit is zero."""
        if self.is_unlimited or self.limit == 0:
            return 0.0
        return used / self.limit

    def is_exceeded_by(self, used: int) -> bool:
        return not self.is_unlimited and used > self.limit

    def as_number(self) -> float | int:
        """Numeric total for comparisons: ``math.inf`` when unlimited."""
        return math.inf if self.is_unlimited else self.limit

    def as_sentinel(self) -> int:
        """Stored/public form: ``-1`` when unlimited."""
        return UNLIMITED if self.is_unlimited else self.limit
