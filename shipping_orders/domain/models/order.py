"""
Shipping order domain model.

One entity type covers every way an order is built: from raw columns (ids
only) or from the joined reload (ids plus customer/shipper display names).
"""

from dataclasses import dataclass, field, replace
from typing import Any

from shipping_orders.services.orders.calculators import calculate_shipping_cost


@dataclass(frozen=True)
class ShippingOrder:
    """
    Immutable domain model representing a shipping order.

    The cost is always derived from weight and distance; it cannot be passed
    in or assigned. Changing measurements goes through `with_measurements`,
    which returns a new order with a re-derived cost.

    Attributes:
        id: Store-assigned order ID
        customer_id: References Customer.customer_id
        shipper_id: References Shipper.shipper_id
        weight: Weight in pounds
        distance: Distance in miles
        customer_name: Display-only, populated by the joined reload
        shipper_name: Display-only, populated by the joined reload
        cost: Derived shipping cost
    """

    id: int
    customer_id: int
    shipper_id: int
    weight: float
    distance: int
    customer_name: str | None = None
    shipper_name: str | None = None
    cost: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weight", float(self.weight))
        object.__setattr__(self, "distance", int(self.distance))
        object.__setattr__(self, "cost", calculate_shipping_cost(self.weight, self.distance))

    def with_measurements(self, weight: float, distance: int) -> "ShippingOrder":
        """Return a copy with new weight/distance and a re-derived cost."""
        return replace(self, weight=weight, distance=distance)

    @property
    def customer_label(self) -> str:
        return self.customer_name if self.customer_name is not None else str(self.customer_id)

    @property
    def shipper_label(self) -> str:
        return self.shipper_name if self.shipper_name is not None else str(self.shipper_id)

    def display_line(self) -> str:
        """Render the order as a single line for lists and logs."""
        return (
            f"Order ID: {self.id}, Customer: {self.customer_label}, Shipper: {self.shipper_label}, "
            f"Weight: {self.weight} lb, Distance: {self.distance} mi, Cost: ${self.cost:.2f}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert order to dictionary for presentation."""
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "shipper_id": self.shipper_id,
            "customer_name": self.customer_name,
            "shipper_name": self.shipper_name,
            "weight": self.weight,
            "distance": self.distance,
            "cost": self.cost,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ShippingOrder":
        """
        Build an order from a ShippingOrder row, optionally joined with names.

        Any stored shipping_cost column is ignored; the cost is recomputed.
        """
        return cls(
            id=int(row["order_id"]),
            customer_id=int(row["customer_id"]),
            shipper_id=int(row["shipper_id"]),
            weight=row["weight_in_pounds"],
            distance=row["distance_in_miles"],
            customer_name=row.get("customer_name"),
            shipper_name=row.get("shipper_name"),
        )

    def __str__(self) -> str:
        return self.display_line()
