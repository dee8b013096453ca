"""
Customer domain model.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Customer:
    """
    Domain model representing a customer.

    Customers are created on demand the first time an order names them, so
    contact fields start empty.

    Attributes:
        id: Store-assigned customer ID
        name: Display name (unique by exact match)
        email: Email address, may be empty
        phone: Phone number, may be empty
    """

    id: int
    name: str
    email: str = ""
    phone: str = ""

    def __post_init__(self) -> None:
        """Validate customer data after initialization."""
        if not self.name:
            raise ValueError("Customer name is required")
        self.email = self.email or ""
        self.phone = self.phone or ""

    def to_dict(self) -> dict[str, Any]:
        """Convert customer to dictionary for presentation."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Customer":
        """Create a customer from a Customer table row."""
        return cls(
            id=int(row["customer_id"]),
            name=row["name"],
            email=row.get("email") or "",
            phone=row.get("phone") or "",
        )

    def __str__(self) -> str:
        return self.name
