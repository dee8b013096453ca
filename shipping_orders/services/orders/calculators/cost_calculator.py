"""
Shipping cost calculation.

cost = weight (lb) * distance (mi) * 0.0015, rounded half-up to cents.
"""

from decimal import ROUND_HALF_UP, Decimal

RATE_PER_POUND_MILE = Decimal("0.0015")
CENTS = Decimal("0.01")


def round2(value: Decimal | float) -> float:
    """Round half-up to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return float(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def calculate_shipping_cost(weight: float, distance: int) -> float:
    """
    Calculate the shipping cost for an order.

    Inputs are converted through their decimal string form so exact decimal
    midpoints (10.5 lb * 500 mi -> 7.875) round up as written.

    Args:
        weight: Weight in pounds (callers validate 0 < weight <= 150)
        distance: Distance in miles (callers validate 0 < distance <= 3000)

    Returns:
        float: Cost rounded to cents
    """
    return round2(Decimal(str(weight)) * Decimal(int(distance)) * RATE_PER_POUND_MILE)
