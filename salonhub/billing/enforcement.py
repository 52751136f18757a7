"""
Capacity enforcement for plan limits.

These checks are called at enforcement points (before activating a
location, before adding a team member) to make sure the organization stays
within its plan allowance plus purchased add-on seats.

Usage:
    CapacityEnforcer().check_can_add_location(org)
    CapacityEnforcer().check_can_add_user(org)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from salonhub.billing.services import BillingService

if TYPE_CHECKING:
    from salonhub.billing.capacity import ResourceCapacity
    from salonhub.organizations.models import Organization

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class BillingError(Exception):
    """Base exception for billing-related errors."""

    def __init__(self, detail: str, code: str = "billing_error"):
        self.detail = detail
        self.code = code
        super().__init__(detail)


class LocationLimitError(BillingError):
    """Raised when adding a location would exceed the location allowance."""

    def __init__(
        self,
        detail: str = "Location limit reached. Purchase more locations or upgrade your plan.",
        limit: int | None = None,
    ):
        self.limit = limit
        super().__init__(detail, code="location_limit_exceeded")


class UserLimitError(BillingError):
    """Raised when adding a team member would exceed the user allowance."""

    def __init__(
        self,
        detail: str = "User limit reached. Purchase more seats or upgrade your plan.",
        limit: int | None = None,
    ):
        self.limit = limit
        super().__init__(detail, code="user_limit_exceeded")


# =============================================================================
# Enforcement
# =============================================================================


def _has_room(resource: ResourceCapacity) -> bool:
    return resource.is_unlimited or resource.used + 1 <= resource.total


class CapacityEnforcer:
    """
    Enforce location and user allowances.

    Allowance = plan limit (or the billing override) + purchased add-on seats.
    """

    def __init__(self, service: BillingService | None = None):
        self.service = service or BillingService()

    def check_can_add_location(self, org: Organization) -> None:
        """
        Raises:
            LocationLimitError: If the org has no location allowance left
        """
        locations = self.service.get_summary(org).capacity.locations
        if _has_room(locations):
            return

        limit = int(locations.total)
        logger.info(
            "Location limit reached for org=%s: %d/%d",
            org.name,
            locations.used,
            limit,
        )
        raise LocationLimitError(
            detail=(
                f"Your organization has reached its limit of {limit} locations. "
                "Purchase additional locations or upgrade your plan."
            ),
            limit=limit,
        )

    def check_can_add_user(self, org: Organization) -> None:
        """
        Raises:
            UserLimitError: If the org has no user allowance left
        """
        users = self.service.get_summary(org).capacity.users
        if _has_room(users):
            return

        limit = int(users.total)
        logger.info(
            "User limit reached for org=%s: %d/%d",
            org.name,
            users.used,
            limit,
        )
        raise UserLimitError(
            detail=(
                f"Your organization has reached its limit of {limit} team members. "
                "Purchase additional seats or upgrade your plan."
            ),
            limit=limit,
        )
