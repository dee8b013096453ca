"""
Shipping order management.

Validates order input, resolves customers and shippers by name, prices
orders by weight and distance, and keeps an in-memory view of the orders
consistent with the relational store.
"""

from shipping_orders.services.orders.calculators import calculate_shipping_cost
from shipping_orders.services.orders.manager import OrderManager

__version__ = "1.0.0"

__all__ = ["OrderManager", "calculate_shipping_cost"]
