"""
Repository classes for the shipping orders database.

- BaseRepository: store access, liveness check and operation logging
- CustomerRepository: Customer lookups and creation
- ShipperRepository: Shipper lookups and creation
- OrderRepository: ShippingOrder CRUD and the joined reload
"""

from .base import BaseRepository
from .customer_repository import CustomerRepository
from .order_repository import OrderRepository
from .shipper_repository import ShipperRepository

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "OrderRepository",
    "ShipperRepository",
]
