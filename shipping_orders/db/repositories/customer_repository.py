"""
CustomerRepository: customer lookup, creation and listing.
"""

import logging
from typing import List, Optional

from sqlalchemy import insert

from shipping_orders.db.repositories.base import BaseRepository, log_operation
from shipping_orders.db.schema import customer_table
from shipping_orders.domain.models import Customer

logger = logging.getLogger(__name__)


class CustomerRepository(BaseRepository):
    """Repository for the Customer table."""

    @log_operation()
    def find_id_by_name(self, name: str) -> Optional[int]:
        """Return the ID of the customer with exactly this name, or None."""
        rows = self._query(
            "SELECT customer_id FROM Customer WHERE name = :name ORDER BY customer_id LIMIT 1",
            {"name": name},
        )
        return int(rows[0]["customer_id"]) if rows else None

    @log_operation()
    def create(self, name: str, email: str = "", phone: str = "") -> int:
        """Insert a customer and return the generated ID."""
        customer_id = self._insert(insert(customer_table).values(name=name, email=email, phone=phone))
        logger.info(f"Created customer {customer_id} ({name})")
        return customer_id

    @log_operation()
    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        rows = self._query(
            "SELECT customer_id, name, email, phone FROM Customer WHERE customer_id = :id",
            {"id": customer_id},
        )
        return Customer.from_row(rows[0]) if rows else None

    @log_operation()
    def list_all(self) -> List[Customer]:
        rows = self._query("SELECT customer_id, name, email, phone FROM Customer ORDER BY customer_id")
        return [Customer.from_row(row) for row in rows]

    def count(self) -> int:
        rows = self._query("SELECT COUNT(*) AS total FROM Customer")
        return int(rows[0]["total"])
