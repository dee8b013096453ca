"""
Database access for the shipping orders system.

- Store: protocol consumed by repositories
- SQLAlchemyStore: Store over a single SQLAlchemy connection
- schema: table definitions and creation
"""

from shipping_orders.db.connection import SQLAlchemyStore, create_store_engine
from shipping_orders.db.schema import create_schema
from shipping_orders.db.store import Store

__all__ = ["SQLAlchemyStore", "Store", "create_schema", "create_store_engine"]
