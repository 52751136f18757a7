"""
Date arithmetic for billing contracts.

Derives the stored promo, trial and contract end dates from the contract
start, and provides the countdown helpers the pricing and trial
calculators share. All functions are pure and return None when an input
they need is missing.
"""

from __future__ import annotations

import math
from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import time
from datetime import timedelta

from dateutil.relativedelta import relativedelta

SECONDS_PER_DAY = 86_400
SECONDS_PER_HOUR = 3_600


def add_months(value: date | datetime, months: int) -> date | datetime:
    """
    Shift a date or datetime by whole calendar months.

    The day is clamped to the last day of the target month, so Jan 31 plus
    one month is Feb 28 (or 29).
    """
    return value + relativedelta(months=months)


def start_of_day(value: date | datetime) -> datetime:
    """Midnight UTC on the given date; aware datetimes pass through."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
    return datetime.combine(value, time.min, tzinfo=UTC)


def promo_ends_at(start: date | None, promo_months: int | None) -> datetime | None:
    if not start or not promo_months:
        return None
    return add_months(start_of_day(start), promo_months)


def trial_ends_at(start: date | None, trial_days: int | None) -> datetime | None:
    if not start or not trial_days:
        return None
    return start_of_day(start) + timedelta(days=trial_days)


def contract_end_date(start: date | None, length_months: int | None) -> date | None:
    if not start or not length_months:
        return None
    if isinstance(start, datetime):
        start = start.date()
    return add_months(start, length_months)


def is_future(moment: datetime | None, now: datetime) -> bool:
    """True when ``moment`` is set and strictly after ``now``."""
    return moment is not None and moment > now


def days_until(moment: datetime | None, now: datetime) -> int | None:
    """Whole days until ``moment``, rounded up. Negative once it has passed."""
    if moment is None:
        return None
    return math.ceil((moment - now).total_seconds() / SECONDS_PER_DAY)


def hours_until(moment: datetime | None, now: datetime) -> int | None:
    """Whole hours until ``moment``, rounded up. Negative once it has passed."""
    if moment is None:
        return None
    return math.ceil((moment - now).total_seconds() / SECONDS_PER_HOUR)
