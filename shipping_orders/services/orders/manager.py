"""
OrderManager - entry point used by the presentation layer.

Coordinates validation, name resolution, pricing and persistence, and owns
the in-memory order cache. The cache is a disposable projection of the
store: every successful mutation is followed by a full reload, so the cache
seen by the next call always matches the store.

Nothing here raises to the caller for expected failures. Operations return
False/None/an empty list and leave the reason in `last_error`.
"""

import logging
from pathlib import Path
from typing import List, Optional

from shipping_orders.core.config import get_settings
from shipping_orders.core.logging_config import LogContext, log_order_operation
from shipping_orders.db.repositories import CustomerRepository, OrderRepository, ShipperRepository
from shipping_orders.db.store import Store
from shipping_orders.domain.models import Customer, Shipper, ShippingOrder
from shipping_orders.services.orders.bulk_report import BulkLoadReport
from shipping_orders.services.orders.calculators import calculate_shipping_cost
from shipping_orders.services.orders.converters import iter_order_file, parse_order_line
from shipping_orders.services.orders.interfaces import IEntityResolver, IOrderRepository
from shipping_orders.services.orders.resolvers import EntityResolver
from shipping_orders.services.orders.validators import OrderValidator
from shipping_orders.utils.error_handler import (
    AppException,
    ErrorAggregator,
    NotFoundException,
    ValidationException,
    log_error,
)

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_REASON = "Store connection is absent or closed"


class OrderManager:
    """
    Orchestrates order operations against an injected store.

    Each public operation runs to completion, including its store round trips
    and the cache reload, before returning.
    """

    def __init__(
        self,
        store: Optional[Store],
        resolver: Optional[IEntityResolver] = None,
        repository: Optional[IOrderRepository] = None,
        validator: Optional[OrderValidator] = None,
        customer_repo: Optional[CustomerRepository] = None,
        shipper_repo: Optional[ShipperRepository] = None,
    ):
        """
        Initialize the manager and load the cache from the store.

        Args:
            store: Live store handle owned by the caller (may be None; every
                operation then fails closed)
            resolver: Customer/shipper resolution service
            repository: Order persistence
            validator: Input validation rules
            customer_repo: Customer listing/lookup
            shipper_repo: Shipper listing/lookup
        """
        self.store = store
        self.customer_repo = customer_repo or CustomerRepository(store)
        self.shipper_repo = shipper_repo or ShipperRepository(store)
        self.resolver = resolver or EntityResolver(self.customer_repo, self.shipper_repo)
        self.repository = repository or OrderRepository(store)
        self.validator = validator or OrderValidator()

        self._orders: List[ShippingOrder] = []
        self.last_error: Optional[str] = None

        self.refresh()

    # ------------------------- Mutations -------------------------
    def add_order(self, customer_name: str, shipper_name: str, weight: float, distance: int) -> bool:
        """
        Create an order, resolving (or creating) its customer and shipper.

        Returns:
            bool: True if the order was stored
        """
        try:
            self.validator.validate_new_order(customer_name, shipper_name, weight, distance)
        except ValidationException as e:
            return self._fail("add", e.message, customer=customer_name, shipper=shipper_name)

        if not self._store_is_live():
            return self._fail("add", STORE_UNAVAILABLE_REASON)

        try:
            customer_id = self.resolver.resolve_customer_id(customer_name)
            shipper_id = self.resolver.resolve_shipper_id(shipper_name)
            cost = calculate_shipping_cost(weight, distance)
            order_id = self.repository.insert(customer_id, shipper_id, weight, distance, cost)
        except AppException as e:
            log_error(e, {"operation": "add_order", "customer": customer_name, "shipper": shipper_name})
            return self._fail("add", f"Could not add order: {e.message}")

        self.refresh()
        self._succeed("add", order_id=order_id, cost=cost)
        return True

    def update_order(self, order_id: int, weight: float, distance: int) -> bool:
        """
        Change weight and distance of a cached order; the cost is re-derived.

        Returns:
            bool: The repository's result (False when no row matched)
        """
        try:
            self.validator.validate_measurements(weight, distance)
        except ValidationException as e:
            return self._fail("update", e.message, order_id=order_id)

        if self.find_order(order_id) is None:
            not_found = NotFoundException(f"Order {order_id} not found", entity="ShippingOrder", entity_id=order_id)
            log_error(not_found, {"operation": "update_order"}, level=logging.INFO)
            return self._fail("update", not_found.message, order_id=order_id)

        if not self._store_is_live():
            return self._fail("update", STORE_UNAVAILABLE_REASON, order_id=order_id)

        cost = calculate_shipping_cost(weight, distance)
        try:
            updated = self.repository.update(order_id, weight, distance, cost)
        except AppException as e:
            log_error(e, {"operation": "update_order", "order_id": order_id})
            return self._fail("update", f"Could not update order {order_id}: {e.message}", order_id=order_id)

        self.refresh()
        if not updated:
            return self._fail("update", f"Order {order_id} not found", order_id=order_id)

        self._succeed("update", order_id=order_id, cost=cost)
        return True

    def delete_order(self, order_id: int) -> bool:
        """
        Delete an order. The cache is reloaded only when a row was removed.

        Returns:
            bool: The repository's result (False when no row matched)
        """
        if not self._store_is_live():
            return self._fail("delete", STORE_UNAVAILABLE_REASON, order_id=order_id)

        try:
            deleted = self.repository.delete(order_id)
        except AppException as e:
            log_error(e, {"operation": "delete_order", "order_id": order_id})
            return self._fail("delete", f"Could not delete order {order_id}: {e.message}", order_id=order_id)

        if not deleted:
            return self._fail("delete", f"Order {order_id} not found", order_id=order_id)

        self.refresh()
        self._succeed("delete", order_id=order_id)
        return True

    # ------------------------- Queries -------------------------
    def find_order(self, order_id: int) -> Optional[ShippingOrder]:
        """Look an order up in the cache. Never touches the store."""
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def get_all_orders(self) -> List[ShippingOrder]:
        """
        Return the current cache.

        The list is replaced, not modified, on reload: a reference kept by the
        caller does not see later changes.
        """
        return self._orders

    def list_customers(self) -> List[Customer]:
        try:
            return self.customer_repo.list_all()
        except AppException as e:
            log_error(e, {"operation": "list_customers"})
            self.last_error = e.message
            return []

    def list_shippers(self) -> List[Shipper]:
        try:
            return self.shipper_repo.list_all()
        except AppException as e:
            log_error(e, {"operation": "list_shippers"})
            self.last_error = e.message
            return []

    # ------------------------- Cache -------------------------
    def refresh(self) -> bool:
        """
        Rebuild the cache from the store.

        On failure the previous cache is kept as is and False is returned.
        """
        if not self._store_is_live():
            logger.warning(f"Cache reload skipped: {STORE_UNAVAILABLE_REASON}")
            return False

        try:
            orders = self.repository.load_all()
        except AppException as e:
            log_error(e, {"operation": "refresh"}, level=logging.WARNING)
            return False

        self._orders = orders
        logger.debug(f"Cache reloaded with {len(orders)} orders")
        return True

    # ------------------------- Bulk load -------------------------
    def load_orders_from_file(self, path: str | Path) -> BulkLoadReport:
        """
        Add every order listed in a pipe-delimited file.

        Bad lines are reported and skipped; they never stop the load.

        Returns:
            BulkLoadReport: Per-line tally and issues
        """
        settings = get_settings()
        report = BulkLoadReport(path=str(path))
        aggregator = ErrorAggregator()

        with LogContext(bulk_file=str(path)):
            logger.info(f"Bulk load started: {path}")
            try:
                for line_number, line in iter_order_file(path, encoding=settings.BULK_LOAD_ENCODING):
                    report.total_lines += 1
                    if not line.strip():
                        report.skipped_blank += 1
                        continue

                    aggregator.increment_processed()
                    try:
                        parsed = parse_order_line(line, line_number)
                    except ValidationException as e:
                        logger.warning(f"Skipping line {line_number}: {e.message}")
                        aggregator.add_error(e, {"line_number": line_number})
                        report.record_issue(line_number, line, e.message)
                        continue

                    if self.add_order(parsed.customer_name, parsed.shipper_name, parsed.weight, parsed.distance):
                        report.loaded += 1
                    else:
                        reason = self.last_error or "Order rejected"
                        logger.warning(f"Line {line_number} rejected: {reason}")
                        report.record_issue(line_number, line, reason)
            except (OSError, UnicodeDecodeError) as e:
                log_error(e, {"operation": "load_orders_from_file", "path": str(path)})
                report.file_error = str(e)

            report.error_summary = aggregator.get_summary()
            logger.info(f"Bulk load finished: {report.summary()}")

        self.last_error = None if report.succeeded else report.summary()
        log_order_operation(
            "bulk_load", report.succeeded, path=str(path), loaded=report.loaded, failed=report.failed
        )
        return report

    # ------------------------- Helpers -------------------------
    def _store_is_live(self) -> bool:
        return self.store is not None and self.store.is_live()

    def _fail(self, operation: str, reason: str, **context) -> bool:
        self.last_error = reason
        log_order_operation(operation, False, reason=reason, **context)
        return False

    def _succeed(self, operation: str, **context) -> None:
        self.last_error = None
        log_order_operation(operation, True, **context)

    def __repr__(self) -> str:
        return f"<OrderManager(orders={len(self._orders)}, live={self._store_is_live()})>"
