"""
Store interface consumed by repositories and resolvers.

The order management layer never opens connections itself; a live Store is
injected by the caller. SQL uses named bind parameters (``:name``).
"""

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from sqlalchemy.sql import Insert

Params = Optional[Mapping[str, Any]]

# Inserts are built with SQLAlchemy Core so the generated key can be read on
# every dialect; raw SQL strings are still accepted.
Statement = Union[str, Insert]


@runtime_checkable
class Store(Protocol):
    """Protocol for the relational store."""

    def query(self, sql: str, params: Params = None) -> list[dict[str, Any]]:
        """Run a SELECT and return rows as dictionaries."""
        ...

    def execute(self, sql: str, params: Params = None) -> int:
        """Run a write statement and return the affected row count."""
        ...

    def execute_returning_id(self, statement: Statement, params: Params = None) -> int:
        """Run an INSERT and return the generated primary key."""
        ...

    def is_live(self) -> bool:
        """Whether the underlying connection is open and usable."""
        ...
