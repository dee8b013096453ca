"""
Base repository for store operations.

Provides the shared plumbing for every repository: access to the injected
Store, the liveness check performed before each round trip and operation
logging. Repositories translate rows into domain models; they never cache.
"""

import functools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.sql import Insert

from shipping_orders.db.store import Store
from shipping_orders.utils.error_handler import AppException, ErrorCode, StoreException

logger = logging.getLogger(__name__)


def log_operation(operation_name: Optional[str] = None) -> Callable:
    """
    Decorator for logging repository operations.

    Args:
        operation_name: Optional custom name for the operation

    Returns:
        Decorated function with logging
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            op_name = operation_name or f"{self.__class__.__name__}.{func.__name__}"
            logger.debug(f"Starting operation: {op_name}")

            try:
                result = func(self, *args, **kwargs)
                logger.debug(f"Operation successful: {op_name}")
                return result
            except AppException as e:
                logger.error(f"Operation failed: {op_name} - {e}")
                raise

        return wrapper

    return decorator


class BaseRepository(ABC):
    """
    Abstract base repository.

    Subclasses implement domain operations on top of `_query`, `_execute`
    and `_insert`, which check that the store is live and wrap unexpected
    driver errors as StoreException.
    """

    def __init__(self, store: Optional[Store]):
        """
        Args:
            store: Live store handle supplied by the caller
        """
        self.store = store
        self._repository_name: str = self.__class__.__name__

    def is_available(self) -> bool:
        return self.store is not None and self.store.is_live()

    def ensure_available(self) -> Store:
        """
        Return the store if it can be used.

        Raises:
            StoreException: If the store is missing or closed
        """
        if not self.is_available():
            raise StoreException(
                message=f"{self._repository_name}: store connection is absent or closed",
                operation="liveness_check",
                error_code=ErrorCode.STORE_UNAVAILABLE,
            )
        return self.store

    @abstractmethod
    def count(self) -> int:
        """Return the number of rows in the repository's table."""

    def _query(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        store = self.ensure_available()
        return self._guard(lambda: store.query(sql, params or {}), "query")

    def _execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        store = self.ensure_available()
        return self._guard(lambda: store.execute(sql, params or {}), "execute")

    def _insert(self, statement: Insert) -> int:
        """Run a Core insert and return the generated primary key."""
        store = self.ensure_available()
        return self._guard(lambda: store.execute_returning_id(statement), "insert")

    def _guard(self, call: Callable[[], Any], operation: str) -> Any:
        """Run a store call, converting non-application errors to StoreException."""
        try:
            return call()
        except AppException:
            raise
        except Exception as e:
            raise StoreException(
                message=f"{self._repository_name} {operation} failed: {str(e)}",
                operation=operation,
            ) from e

    def __repr__(self) -> str:
        return f"<{self._repository_name}(available={self.is_available()})>"
