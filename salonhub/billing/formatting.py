"""Display helpers for billing amounts and limits."""

from decimal import ROUND_HALF_UP
from decimal import Decimal

from salonhub.billing.constants import UNLIMITED
from salonhub.billing.pricing import to_money

CENTS = Decimal("0.01")


def format_currency(value) -> str:
    """
    Format an amount as US dollars with up to two decimals.

    Trailing zero cents are dropped: ``$1,234``, ``$99.5``, ``$99.99``.
    """
    amount = to_money(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{sign}${text}"


def format_limit(value) -> str:
    if value is None or value == UNLIMITED:
        return "Unlimited"
    return f"{value:,}"
