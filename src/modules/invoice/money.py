from decimal import ROUND_HALF_UP, Decimal


def cents(amount: Decimal) -> int:
    """Convert a major-unit amount to whole cents, rounding half up."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
