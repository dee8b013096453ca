"""
Unit tests for OrderManager with mocked store, resolver and repository.

The integration suite covers the same operations against SQLite; these tests
pin down the call sequence and the failure paths that are hard to provoke
with a real database.
"""

from unittest.mock import MagicMock

import pytest

from shipping_orders.domain.models import ShippingOrder
from shipping_orders.services.orders.manager import STORE_UNAVAILABLE_REASON, OrderManager
from shipping_orders.utils.error_handler import StoreException


def make_order(order_id, weight=2.0, distance=100):
    return ShippingOrder(
        id=order_id,
        customer_id=1,
        shipper_id=1,
        weight=weight,
        distance=distance,
        customer_name="Alice",
        shipper_name="Bob",
    )


@pytest.fixture
def mock_store():
    store = MagicMock()
    store.is_live = MagicMock(return_value=True)
    return store


@pytest.fixture
def mock_resolver():
    resolver = MagicMock()
    resolver.resolve_customer_id = MagicMock(return_value=1)
    resolver.resolve_shipper_id = MagicMock(return_value=2)
    return resolver


@pytest.fixture
def mock_repository():
    repository = MagicMock()
    repository.load_all = MagicMock(return_value=[])
    repository.insert = MagicMock(return_value=1)
    repository.update = MagicMock(return_value=True)
    repository.delete = MagicMock(return_value=True)
    return repository


@pytest.fixture
def manager(mock_store, mock_resolver, mock_repository):
    return OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)


class TestConstruction:
    def test_loads_cache_on_start(self, mock_store, mock_resolver, mock_repository):
        mock_repository.load_all.return_value = [make_order(1), make_order(2)]

        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)

        assert [o.id for o in manager.get_all_orders()] == [1, 2]
        assert manager.last_error is None

    def test_without_store_starts_empty(self, mock_resolver, mock_repository):
        manager = OrderManager(None, resolver=mock_resolver, repository=mock_repository)

        assert manager.get_all_orders() == []
        mock_repository.load_all.assert_not_called()


class TestAddOrder:
    def test_success_inserts_with_derived_cost_and_reloads(self, manager, mock_resolver, mock_repository):
        """A stored order triggers a second load_all (the first one ran at construction)."""
        mock_repository.load_all.return_value = [make_order(1, 10.5, 500)]

        assert manager.add_order("Alice", "Bob", 10.5, 500) is True

        mock_resolver.resolve_customer_id.assert_called_once_with("Alice")
        mock_resolver.resolve_shipper_id.assert_called_once_with("Bob")
        mock_repository.insert.assert_called_once_with(1, 2, 10.5, 500, 7.88)
        assert mock_repository.load_all.call_count == 2
        assert len(manager.get_all_orders()) == 1
        assert manager.last_error is None

    def test_invalid_name_never_reaches_resolver(self, manager, mock_resolver, mock_repository):
        assert manager.add_order("R2D2", "Bob", 1.0, 10) is False

        mock_resolver.resolve_customer_id.assert_not_called()
        mock_repository.insert.assert_not_called()
        assert "customer_name" in manager.last_error

    @pytest.mark.parametrize("weight, distance", [(0, 10), (151, 10), (1.0, 0), (1.0, 3001), (1.0, 10.5)])
    def test_out_of_range_is_rejected(self, manager, mock_repository, weight, distance):
        assert manager.add_order("Alice", "Bob", weight, distance) is False

        mock_repository.insert.assert_not_called()
        assert manager.last_error

    def test_store_not_live(self, manager, mock_store, mock_resolver):
        mock_store.is_live.return_value = False

        assert manager.add_order("Alice", "Bob", 1.0, 10) is False
        assert manager.last_error == STORE_UNAVAILABLE_REASON
        mock_resolver.resolve_customer_id.assert_not_called()

    def test_store_failure_leaves_cache_unchanged(self, mock_store, mock_resolver, mock_repository):
        existing = [make_order(1)]
        mock_repository.load_all.return_value = existing
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)
        mock_repository.insert.side_effect = StoreException("disk I/O error")

        assert manager.add_order("Alice", "Bob", 1.0, 10) is False

        assert manager.get_all_orders() is existing
        assert mock_repository.load_all.call_count == 1
        assert "disk I/O error" in manager.last_error

    def test_resolver_failure_is_reported(self, manager, mock_resolver, mock_repository):
        mock_resolver.resolve_shipper_id.side_effect = StoreException("locked")

        assert manager.add_order("Alice", "Bob", 1.0, 10) is False
        mock_repository.insert.assert_not_called()

    def test_reload_failure_after_insert_keeps_result(self, mock_store, mock_resolver, mock_repository):
        """The insert committed, so the call succeeds even if the reload fails."""
        existing = [make_order(1)]
        mock_repository.load_all.return_value = existing
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)
        mock_repository.load_all.side_effect = StoreException("connection lost")

        assert manager.add_order("Alice", "Bob", 1.0, 10) is True
        assert manager.get_all_orders() is existing


class TestUpdateOrder:
    def test_unknown_id_never_reaches_store(self, manager, mock_repository):
        assert manager.update_order(99, 1.0, 10) is False

        mock_repository.update.assert_not_called()
        assert manager.last_error == "Order 99 not found"

    def test_success_updates_with_new_cost(self, mock_store, mock_resolver, mock_repository):
        mock_repository.load_all.return_value = [make_order(4)]
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)

        assert manager.update_order(4, 10.5, 500) is True

        mock_repository.update.assert_called_once_with(4, 10.5, 500, 7.88)
        assert mock_repository.load_all.call_count == 2

    def test_invalid_measurements(self, mock_store, mock_resolver, mock_repository):
        mock_repository.load_all.return_value = [make_order(4)]
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)

        assert manager.update_order(4, 200, 10) is False
        mock_repository.update.assert_not_called()

    def test_row_vanished_in_store(self, mock_store, mock_resolver, mock_repository):
        mock_repository.load_all.return_value = [make_order(4)]
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)
        mock_repository.update.return_value = False

        assert manager.update_order(4, 1.0, 10) is False
        assert manager.last_error == "Order 4 not found"


class TestDeleteOrder:
    def test_success_reloads(self, manager, mock_repository):
        assert manager.delete_order(1) is True

        mock_repository.delete.assert_called_once_with(1)
        assert mock_repository.load_all.call_count == 2

    def test_nothing_deleted_skips_reload(self, manager, mock_repository):
        mock_repository.delete.return_value = False

        assert manager.delete_order(1) is False
        assert mock_repository.load_all.call_count == 1

    def test_store_failure(self, manager, mock_repository):
        mock_repository.delete.side_effect = StoreException("locked")

        assert manager.delete_order(1) is False
        assert "locked" in manager.last_error

    def test_without_store(self, mock_resolver, mock_repository):
        manager = OrderManager(None, resolver=mock_resolver, repository=mock_repository)

        assert manager.delete_order(1) is False
        mock_repository.delete.assert_not_called()


class TestQueries:
    def test_find_order_uses_cache_only(self, mock_store, mock_resolver, mock_repository):
        mock_repository.load_all.return_value = [make_order(1), make_order(2)]
        manager = OrderManager(mock_store, resolver=mock_resolver, repository=mock_repository)
        mock_store.reset_mock()

        assert manager.find_order(2).id == 2
        assert manager.find_order(3) is None
        mock_store.query.assert_not_called()

    def test_refresh_replaces_list(self, manager, mock_repository):
        before = manager.get_all_orders()
        mock_repository.load_all.return_value = [make_order(1)]

        assert manager.refresh() is True
        assert before == []
        assert len(manager.get_all_orders()) == 1

    def test_list_customers_failure_returns_empty(self, mock_store, mock_resolver, mock_repository):
        customer_repo = MagicMock()
        customer_repo.list_all.side_effect = StoreException("gone")
        manager = OrderManager(
            mock_store, resolver=mock_resolver, repository=mock_repository, customer_repo=customer_repo
        )

        assert manager.list_customers() == []
        assert manager.last_error == "gone"


class TestBulkLoad:
    def test_counts_loaded_failed_and_blank(self, manager, mock_repository, tmp_path):
        path = tmp_path / "orders.txt"
        path.write_text("1|Alice|Bob|1.0|10\n\n2|Alice|Bob|x|10\n3|Alice 9|Bob|1.0|10\n", encoding="utf-8")

        report = manager.load_orders_from_file(path)

        assert report.total_lines == 4
        assert report.skipped_blank == 1
        assert report.loaded == 1
        assert report.failed == 2
        assert [issue.line_number for issue in report.issues] == [3, 4]
        assert mock_repository.insert.call_count == 1
        assert manager.last_error == report.summary()

    def test_missing_file_is_reported(self, manager, tmp_path):
        report = manager.load_orders_from_file(tmp_path / "missing.txt")

        assert report.file_error is not None
        assert report.loaded == 0
        assert report.succeeded is False

    def test_clean_file_clears_last_error(self, manager, tmp_path):
        path = tmp_path / "orders.txt"
        path.write_text("1|Alice|Bob|1.0|10\n", encoding="utf-8")
        manager.last_error = "stale"

        report = manager.load_orders_from_file(path)

        assert report.succeeded is True
        assert manager.last_error is None
