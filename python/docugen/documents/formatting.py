"""Currency formatting for budget tables."""

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real

CURRENCY_SYMBOL = "$"
ZERO_CURRENCY = "$0.00"
CENT = Decimal("0.01")


def to_currency(value: Real | None) -> str:
    """
    Format a number as a 2-decimal USD amount.

    Rounds half up on the decimal value (``0.125`` -> ``$0.13``), not on
    its binary approximation. ``None`` and non-finite numbers render as the
    zero placeholder. Negative amounts put the sign before the symbol
    (``-$1,234.50``).
    """
    if value is None or not math.isfinite(value):
        return ZERO_CURRENCY

    amount = Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"
