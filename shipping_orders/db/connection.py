"""
SQLAlchemy implementation of the Store interface.

Wraps exactly one SQLAlchemy Connection. There is no global instance: the
caller (UI bootstrap, scripts, tests) creates the store, injects it into the
OrderManager and closes it when done.
"""

import logging
from typing import Any, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from shipping_orders.core.config import Settings, get_settings
from shipping_orders.db.store import Params, Statement
from shipping_orders.utils.error_handler import ErrorCode, StoreException

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores declared foreign keys unless the pragma is set per
    connection. Other dialects are returned unchanged.
    """
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def create_store_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Create the SQLAlchemy engine described by the settings.

    In-memory SQLite databases share a single connection through StaticPool,
    otherwise every connection would see its own empty database. SQLite
    engines enforce foreign keys.
    """
    settings = settings or get_settings()

    kwargs: dict[str, Any] = {"echo": settings.DB_ECHO, "future": True}
    if settings.is_memory_database:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True

    return enable_sqlite_foreign_keys(create_engine(settings.DATABASE_URL, **kwargs))


class SQLAlchemyStore:
    """
    Store backed by a single SQLAlchemy connection.

    Every write is committed immediately; a failed statement is rolled back
    and re-raised as StoreException.
    """

    def __init__(self, engine: Engine, connection: Optional[Connection] = None, owns_engine: bool = False):
        """
        Args:
            engine: Engine the connection belongs to
            connection: Existing connection; a new one is opened if omitted
            owns_engine: Dispose of the engine on close()
        """
        self.engine = engine
        self._owns_engine = owns_engine
        try:
            self._connection: Optional[Connection] = connection or engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Failed to open store connection: {e}")
            raise StoreException(
                message=f"Failed to open store connection: {str(e)}",
                operation="connect",
                error_code=ErrorCode.STORE_UNAVAILABLE,
            ) from e
        logger.info(f"Store connected ({engine.dialect.name})")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SQLAlchemyStore":
        """Build a store (engine included) from application settings."""
        return cls(create_store_engine(settings), owns_engine=True)

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise StoreException(
                message="Store connection is closed",
                operation="connection",
                error_code=ErrorCode.STORE_UNAVAILABLE,
            )
        return self._connection

    def is_live(self) -> bool:
        conn = self._connection
        return conn is not None and not conn.closed and not conn.invalidated

    def query(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        try:
            result = self.connection.execute(text(sql), dict(params or {}))
            rows = [dict(row) for row in result.mappings().all()]
            self.connection.commit()
            return rows
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Query failed: {e}")
            raise StoreException(message=f"Query failed: {str(e)}", operation="query") from e

    def execute(self, sql: str, params: Params = None) -> int:
        try:
            result = self.connection.execute(text(sql), dict(params or {}))
            affected = result.rowcount
            self.connection.commit()
            return affected
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Statement failed: {e}")
            raise StoreException(message=f"Statement failed: {str(e)}", operation="execute") from e

    def execute_returning_id(self, statement: Statement, params: Params = None) -> int:
        """
        Run an INSERT and return the generated primary key.

        A Core ``insert()`` construct reports its key through
        ``inserted_primary_key``, which SQLAlchemy fills per dialect
        (RETURNING, OUTPUT or the driver's last row id). Plain SQL strings can
        only rely on the driver's ``lastrowid`` (SQLite, MySQL).
        """
        try:
            if isinstance(statement, str):
                result = self.connection.execute(text(statement), dict(params or {}))
                new_id = result.lastrowid
            else:
                result = self.connection.execute(statement, dict(params) if params else None)
                new_id = result.inserted_primary_key[0]
            self.connection.commit()
        except SQLAlchemyError as e:
            self._rollback()
            logger.error(f"Insert failed: {e}")
            raise StoreException(message=f"Insert failed: {str(e)}", operation="insert") from e

        if not new_id:
            raise StoreException(message="Insert did not return a generated ID", operation="insert")
        return int(new_id)

    def _rollback(self) -> None:
        if self.is_live():
            try:
                self._connection.rollback()
            except SQLAlchemyError as e:
                logger.warning(f"Rollback failed: {e}")

    def close(self) -> None:
        """Close the connection (and the engine when owned)."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Store connection closed")
        if self._owns_engine:
            self.engine.dispose()

    def __enter__(self) -> "SQLAlchemyStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<SQLAlchemyStore(dialect={self.engine.dialect.name}, live={self.is_live()})>"
