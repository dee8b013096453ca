"""
Shipper domain model.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Shipper:
    """
    Domain model representing a shipping company.

    Attributes:
        id: Store-assigned shipper ID
        name: Display name (unique by exact match)
        phone: Phone number, may be empty
    """

    id: int
    name: str
    phone: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Shipper name is required")
        self.phone = self.phone or ""

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "phone": self.phone}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Shipper":
        """Create a shipper from a Shipper table row."""
        return cls(id=int(row["shipper_id"]), name=row["name"], phone=row.get("phone") or "")

    def __str__(self) -> str:
        return self.name
