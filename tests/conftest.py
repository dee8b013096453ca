"""Shared fixtures: an in-memory SQLite store with the order schema."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from shipping_orders.db import SQLAlchemyStore, create_schema
from shipping_orders.db.connection import enable_sqlite_foreign_keys
from shipping_orders.services.orders.manager import OrderManager


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created and foreign keys enforced."""
    engine = enable_sqlite_foreign_keys(
        create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    """Live store over the in-memory engine."""
    store = SQLAlchemyStore(engine)
    yield store
    store.close()


@pytest.fixture
def manager(store):
    """OrderManager wired to the real repositories."""
    return OrderManager(store)


@pytest.fixture
def write_orders_file(tmp_path):
    """Write lines to a bulk-load file and return its path."""

    def _write(lines, name="orders.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
