"""
Table definitions for Customer, Shipper and ShippingOrder.

Repositories issue plain SQL through the Store; these definitions exist so a
fresh database can be created with the exact column names they expect.
"""

import logging

from sqlalchemy import Column, Float, ForeignKey, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

metadata = MetaData()

customer_table = Table(
    "Customer",
    metadata,
    Column("customer_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(30), nullable=False),
    Column("email", String(100), nullable=False, server_default=""),
    Column("phone", String(20), nullable=False, server_default=""),
    sqlite_autoincrement=True,
)

shipper_table = Table(
    "Shipper",
    metadata,
    Column("shipper_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(30), nullable=False),
    Column("phone", String(20), nullable=False, server_default=""),
    sqlite_autoincrement=True,
)

shipping_order_table = Table(
    "ShippingOrder",
    metadata,
    Column("order_id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("Customer.customer_id"), nullable=False),
    Column("shipper_id", Integer, ForeignKey("Shipper.shipper_id"), nullable=False),
    Column("weight_in_pounds", Float, nullable=False),
    Column("distance_in_miles", Integer, nullable=False),
    Column("shipping_cost", Float, nullable=False),
    sqlite_autoincrement=True,
)


def create_schema(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    metadata.create_all(engine, checkfirst=True)
    logger.info(f"Schema ready: {', '.join(metadata.tables)}")
