"""
End-to-end order management against an in-memory SQLite store.

Exercises OrderManager with the real repositories, resolver and schema.
"""

import string

import pytest

from shipping_orders.db.repositories import CustomerRepository, ShipperRepository
from shipping_orders.services.orders.manager import OrderManager
from shipping_orders.services.orders.resolvers import EntityResolver


class TestAddOrder:
    def test_first_order_in_empty_store(self, manager):
        assert manager.add_order("John Smith", "UPS", 2.0, 100) is True

        order = manager.find_order(1)
        assert order is not None
        assert order.cost == 0.30
        assert order.customer_name == "John Smith"
        assert order.shipper_name == "UPS"

    def test_cost_is_rounded_half_up(self, manager):
        manager.add_order("Alice", "Bob", 10.5, 500)

        assert manager.get_all_orders()[0].cost == 7.88

    def test_success_grows_cache_by_one(self, manager):
        manager.add_order("Alice", "Bob", 1.0, 10)
        before = len(manager.get_all_orders())

        assert manager.add_order("Carol", "Bob", 1.0, 10) is True
        assert len(manager.get_all_orders()) == before + 1

    def test_rejection_leaves_cache_and_store_unchanged(self, manager, store):
        manager.add_order("Alice", "Bob", 1.0, 10)
        before = manager.get_all_orders()

        assert manager.add_order("Alice", "Bob", 151, 10) is False
        assert manager.add_order("Agent 47", "Bob", 1.0, 10) is False

        assert manager.get_all_orders() == before
        assert store.query("SELECT COUNT(*) AS total FROM ShippingOrder") == [{"total": 1}]
        assert store.query("SELECT COUNT(*) AS total FROM Customer") == [{"total": 1}]

    def test_customer_and_shipper_are_reused(self, manager, store):
        manager.add_order("Alice", "Bob", 1.0, 10)
        manager.add_order("Alice", "Bob", 2.0, 20)

        first, second = manager.get_all_orders()
        assert first.customer_id == second.customer_id
        assert first.shipper_id == second.shipper_id
        assert [c.name for c in manager.list_customers()] == ["Alice"]
        assert [s.name for s in manager.list_shippers()] == ["Bob"]

    def test_closed_store_fails_closed(self, manager, store):
        store.close()

        assert manager.add_order("Alice", "Bob", 1.0, 10) is False
        assert manager.last_error


class TestUpdateAndDelete:
    def test_update_rederives_cost_in_store(self, manager, store):
        manager.add_order("Alice", "Bob", 1.0, 10)

        assert manager.update_order(1, 10.5, 500) is True

        assert manager.find_order(1).cost == 7.88
        assert store.query("SELECT shipping_cost FROM ShippingOrder WHERE order_id = 1") == [
            {"shipping_cost": 7.88}
        ]

    def test_update_unknown_order(self, manager):
        assert manager.update_order(42, 1.0, 10) is False
        assert manager.last_error == "Order 42 not found"

    def test_delete_then_find(self, manager):
        manager.add_order("Alice", "Bob", 1.0, 10)

        assert manager.delete_order(1) is True
        assert manager.find_order(1) is None
        assert manager.delete_order(1) is False

    def test_ids_are_not_reused_after_delete(self, manager):
        manager.add_order("Alice", "Bob", 1.0, 10)
        manager.add_order("Alice", "Bob", 1.0, 10)
        manager.delete_order(2)
        manager.add_order("Alice", "Bob", 1.0, 10)

        assert [o.id for o in manager.get_all_orders()] == [1, 3]


class TestResolver:
    def test_resolving_twice_returns_same_id(self, store):
        resolver = EntityResolver(CustomerRepository(store), ShipperRepository(store))

        first = resolver.resolve_customer_id("Alice")
        second = resolver.resolve_customer_id("Alice")

        assert first == second
        assert resolver.resolve_shipper_id("Alice") is not None


class TestReload:
    def test_stored_cost_is_recomputed_on_load(self, store):
        store.execute("INSERT INTO Customer (name) VALUES ('Alice')")
        store.execute("INSERT INTO Shipper (name) VALUES ('Bob')")
        store.execute(
            "INSERT INTO ShippingOrder (customer_id, shipper_id, weight_in_pounds, distance_in_miles, shipping_cost) "
            "VALUES (1, 1, 10.5, 500, 123.45)"
        )

        manager = OrderManager(store)

        assert manager.find_order(1).cost == 7.88

    def test_second_manager_sees_first_managers_orders(self, store):
        OrderManager(store).add_order("Alice", "Bob", 1.0, 10)

        assert len(OrderManager(store).get_all_orders()) == 1


class TestBulkLoad:
    def test_one_malformed_line_among_twenty(self, manager, write_orders_file):
        lines = [f"{i}|Customer {string.ascii_uppercase[i]}|Shipper|1.5|{100 + i}" for i in range(19)]
        lines.insert(7, "x|Broken|Line|1.0")
        path = write_orders_file(lines)

        report = manager.load_orders_from_file(path)

        assert report.loaded == 19
        assert report.failed == 1
        assert report.issues[0].line_number == 8
        assert len(manager.get_all_orders()) == 19

    def test_rejected_records_are_reported(self, manager, write_orders_file):
        path = write_orders_file(
            [
                "1|Alice|UPS|2.0|100",
                "",
                "2|Bob 2|UPS|2.0|100",
                "3|Carol|UPS|200|100",
                "4|Dave|UPS|2.0|100",
            ]
        )

        report = manager.load_orders_from_file(path)

        assert report.loaded == 2
        assert report.skipped_blank == 1
        assert [issue.line_number for issue in report.issues] == [3, 4]
        assert report.error_summary["total_processed"] == 4
        assert [o.customer_name for o in manager.get_all_orders()] == ["Alice", "Dave"]

    def test_unreadable_file(self, manager, tmp_path):
        report = manager.load_orders_from_file(tmp_path / "nope.txt")

        assert report.file_error
        assert manager.get_all_orders() == []
        assert manager.last_error == report.summary()


@pytest.mark.parametrize("weight, distance, cost", [(150, 3000, 675.00), (0.1, 1, 0.00), (1.0, 3000, 4.50)])
def test_boundary_orders_are_accepted(manager, weight, distance, cost):
    assert manager.add_order("Alice", "Bob", weight, distance) is True
    assert manager.get_all_orders()[-1].cost == cost
