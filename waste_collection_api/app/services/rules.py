"""
Arithmetic business rules shared by the services.

All quantities are ``Decimal``; costs are rounded half-up to cents.
The product is formed exactly before that single rounding, so the
result never depends on the ambient decimal context.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, Inexact, localcontext

from ..core.errors import ValidationError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def require_positive(value: Decimal, label: str) -> None:
    """Raise ``ValidationError`` unless ``value`` is strictly positive."""
    if value <= 0:
        logger.warning("Rejected non-positive %s: %s", label, value)
        raise ValidationError(f"The {label} must be a positive value.")


def compute_cost(volume: Decimal, rate: Decimal) -> Decimal:
    """Return ``volume * rate`` rounded half-up to two decimal places.

    >>> compute_cost(Decimal("5"), Decimal("2.005"))
    Decimal('10.03')
    """
    # A product has at most as many digits as both factors together.
    digits = len(volume.as_tuple().digits) + len(rate.as_tuple().digits)
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.traps[Inexact] = True
        product = volume * rate
        ctx.traps[Inexact] = False
        # Room for every integer digit plus the two decimals.
        ctx.prec = max(digits, product.adjusted() + 3)
        return product.quantize(CENTS, rounding=ROUND_HALF_UP)
