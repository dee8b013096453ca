"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .customer import Customer
from .order import ShippingOrder
from .shipper import Shipper

__all__ = ["Customer", "Shipper", "ShippingOrder"]
