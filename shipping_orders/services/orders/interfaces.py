"""
Interfaces/Protocols for order services.

These protocols let the OrderManager depend on behaviour rather than on the
concrete SQL-backed classes, which keeps it easy to test with fakes.
"""

from typing import Protocol

from shipping_orders.domain.models import ShippingOrder


class IEntityResolver(Protocol):
    """Protocol for customer/shipper resolution services."""

    def resolve_customer_id(self, name: str) -> int:
        """Resolve or create a customer, return its ID."""
        ...

    def resolve_shipper_id(self, name: str) -> int:
        """Resolve or create a shipper, return its ID."""
        ...


class IOrderRepository(Protocol):
    """Protocol for order persistence."""

    def insert(self, customer_id: int, shipper_id: int, weight: float, distance: int, cost: float) -> int:
        ...

    def update(self, order_id: int, weight: float, distance: int, cost: float) -> bool:
        ...

    def delete(self, order_id: int) -> bool:
        ...

    def load_all(self) -> list[ShippingOrder]:
        ...
