#!/usr/bin/env python3
"""
Bulk-load shipping orders from a pipe-delimited file.

Each line holds five fields: <ignored>|<customer>|<shipper>|<weight>|<distance>.
Bad lines are reported and skipped; the rest of the file is still loaded.

Usage:
    # Load into the database configured by DATABASE_URL
    python scripts/load_orders.py orders.txt

    # Create missing tables first
    python scripts/load_orders.py orders.txt --create-schema

    # Print every loaded order afterwards
    python scripts/load_orders.py orders.txt --list
"""

import argparse
import logging
import sys

from shipping_orders.core.config import get_environment_info, get_settings
from shipping_orders.core.logging_config import setup_logging
from shipping_orders.db import SQLAlchemyStore, create_schema
from shipping_orders.services.orders.manager import OrderManager
from shipping_orders.utils.error_handler import StoreException

logger = logging.getLogger(__name__)


def main() -> int:
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description="Bulk-load shipping orders from a pipe-delimited file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/load_orders.py orders.txt
  python scripts/load_orders.py orders.txt --create-schema --list
        """,
    )
    parser.add_argument("path", help="File with one order per line")
    parser.add_argument("--create-schema", action="store_true", help="Create missing tables before loading")
    parser.add_argument("--list", action="store_true", help="Print all orders after loading")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings)
    logger.info(f"Environment: {get_environment_info()}")

    try:
        store = SQLAlchemyStore.from_settings(settings)
    except StoreException as e:
        logger.error(f"Cannot connect to the database: {e}")
        return 1

    with store:
        if args.create_schema:
            create_schema(store.engine)

        manager = OrderManager(store)
        report = manager.load_orders_from_file(args.path)

        print(report.summary())
        for issue in report.issues:
            print(f"  {issue}")

        if args.list:
            for order in manager.get_all_orders():
                print(order.display_line())

    if report.file_error:
        return 2
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
