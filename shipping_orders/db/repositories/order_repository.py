"""
OrderRepository: ShippingOrder rows and the joined reload.

Not-found is a negative result (False), not an error. Persistence failures
raise StoreException.
"""

import logging
from typing import List

from sqlalchemy import insert

from shipping_orders.db.repositories.base import BaseRepository, log_operation
from shipping_orders.db.schema import shipping_order_table
from shipping_orders.domain.models import ShippingOrder

logger = logging.getLogger(__name__)


class OrderRepository(BaseRepository):
    """Repository for the ShippingOrder table."""

    LOAD_ALL_QUERY = """
        SELECT
            o.order_id,
            o.customer_id,
            o.shipper_id,
            o.weight_in_pounds,
            o.distance_in_miles,
            c.name AS customer_name,
            s.name AS shipper_name
        FROM ShippingOrder o
        JOIN Customer c ON o.customer_id = c.customer_id
        JOIN Shipper s ON o.shipper_id = s.shipper_id
        ORDER BY o.order_id
    """

    @log_operation()
    def insert(self, customer_id: int, shipper_id: int, weight: float, distance: int, cost: float) -> int:
        """Insert an order and return its generated ID."""
        order_id = self._insert(
            insert(shipping_order_table).values(
                customer_id=customer_id,
                shipper_id=shipper_id,
                weight_in_pounds=weight,
                distance_in_miles=distance,
                shipping_cost=cost,
            )
        )
        logger.info(f"Created order {order_id} (customer={customer_id}, shipper={shipper_id}, cost={cost:.2f})")
        return order_id

    @log_operation()
    def update(self, order_id: int, weight: float, distance: int, cost: float) -> bool:
        """Overwrite weight, distance and cost. False when no row matched."""
        affected = self._execute(
            """
            UPDATE ShippingOrder
            SET weight_in_pounds = :weight, distance_in_miles = :distance, shipping_cost = :cost
            WHERE order_id = :order_id
            """,
            {"order_id": order_id, "weight": weight, "distance": distance, "cost": cost},
        )
        if affected == 0:
            logger.info(f"Update matched no order with ID {order_id}")
        return affected > 0

    @log_operation()
    def delete(self, order_id: int) -> bool:
        """Delete an order. False when no row matched."""
        affected = self._execute("DELETE FROM ShippingOrder WHERE order_id = :order_id", {"order_id": order_id})
        if affected == 0:
            logger.info(f"Delete matched no order with ID {order_id}")
        return affected > 0

    @log_operation()
    def load_all(self) -> List[ShippingOrder]:
        """
        Load every order joined with its customer and shipper names.

        The stored shipping_cost is not read: each order's cost is recomputed
        from weight and distance, so rows written with an older formula are
        corrected on the way in.
        """
        rows = self._query(self.LOAD_ALL_QUERY)
        orders = [ShippingOrder.from_row(row) for row in rows]
        logger.debug(f"Loaded {len(orders)} orders")
        return orders

    def count(self) -> int:
        rows = self._query("SELECT COUNT(*) AS total FROM ShippingOrder")
        return int(rows[0]["total"])
