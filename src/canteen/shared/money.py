"""Fixed-point money helpers.

All amounts inside the domain are integer minor units (cents). Conversion to
and from ``Decimal`` happens only at the edges: catalog seeding and the API.
"""

from decimal import ROUND_HALF_UP, Decimal

CURRENCY = "USD"
_CENT = Decimal("0.01")


def to_cents(amount) -> int:
    """Convert a decimal amount (``Decimal``, ``str`` or ``int``) to cents.

    Floats are rejected: their binary representation cannot hold most
    decimal prices exactly.
    """
    if isinstance(amount, float):
        raise TypeError("Monetary amounts must not be floats; use Decimal or str")
    value = Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    return int(value * 100)


def to_decimal(cents: int) -> Decimal:
    """Convert cents to a two-place ``Decimal``."""
    return (Decimal(cents) / 100).quantize(_CENT)


def format_amount(cents: int) -> str:
    """Render cents as a plain decimal string, e.g. ``1997 -> "19.97"``."""
    return str(to_decimal(cents))
