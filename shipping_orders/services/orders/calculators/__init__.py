"""
Pricing functions for shipping orders.
"""

from .cost_calculator import RATE_PER_POUND_MILE, calculate_shipping_cost, round2

__all__ = ["RATE_PER_POUND_MILE", "calculate_shipping_cost", "round2"]
