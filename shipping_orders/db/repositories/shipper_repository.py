"""
ShipperRepository: shipper lookup, creation and listing.
"""

import logging
from typing import List, Optional

from sqlalchemy import insert

from shipping_orders.db.repositories.base import BaseRepository, log_operation
from shipping_orders.db.schema import shipper_table
from shipping_orders.domain.models import Shipper

logger = logging.getLogger(__name__)


class ShipperRepository(BaseRepository):
    """Repository for the Shipper table."""

    @log_operation()
    def find_id_by_name(self, name: str) -> Optional[int]:
        """Return the ID of the shipper with exactly this name, or None."""
        rows = self._query(
            "SELECT shipper_id FROM Shipper WHERE name = :name ORDER BY shipper_id LIMIT 1",
            {"name": name},
        )
        return int(rows[0]["shipper_id"]) if rows else None

    @log_operation()
    def create(self, name: str, phone: str = "") -> int:
        """Insert a shipper and return the generated ID."""
        shipper_id = self._insert(insert(shipper_table).values(name=name, phone=phone))
        logger.info(f"Created shipper {shipper_id} ({name})")
        return shipper_id

    @log_operation()
    def get_by_id(self, shipper_id: int) -> Optional[Shipper]:
        rows = self._query(
            "SELECT shipper_id, name, phone FROM Shipper WHERE shipper_id = :id",
            {"id": shipper_id},
        )
        return Shipper.from_row(rows[0]) if rows else None

    @log_operation()
    def list_all(self) -> List[Shipper]:
        rows = self._query("SELECT shipper_id, name, phone FROM Shipper ORDER BY shipper_id")
        return [Shipper.from_row(row) for row in rows]

    def count(self) -> int:
        rows = self._query("SELECT COUNT(*) AS total FROM Shipper")
        return int(rows[0]["total"])
