from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..sql import Query, Select, Insert, Update, Delete
from .result_set import ResultSet
from .types import Id, QueryParams

if TYPE_CHECKING:
    from .transaction import Transaction


class Queryable(ABC):
    """
    Query-capable contract shared by every database backend.

    Structured queries are always lowered to raw SQL plus parameters, so the
    raw operations are the single path to the engine.
    """

    @abstractmethod
    async def execute(self, query: Query) -> Optional[Id]:
        """Run a structured write. Returns the generated id for inserts, else None."""

    @abstractmethod
    async def query(self, query: Query) -> ResultSet:
        """Run a structured read."""

    @abstractmethod
    async def query_raw(self, sql: str, params: Optional[QueryParams] = None) -> ResultSet:
        """Run raw SQL and return every resulting row."""

    @abstractmethod
    async def execute_raw(self, sql: str, params: Optional[QueryParams] = None) -> int:
        """Run raw SQL and return the number of affected rows."""

    @abstractmethod
    async def turn_off_fk_constraints(self) -> None:
        ...

    @abstractmethod
    async def turn_on_fk_constraints(self) -> None:
        ...

    @abstractmethod
    async def raw_cmd(self, cmd: str) -> None:
        """Run a batch of statements without parameters."""

    # Helpers built on the operations above
    async def select(self, query: Select) -> ResultSet:
        return await self.query(query)

    async def insert(self, query: Insert) -> Optional[Id]:
        return await self.execute(query)

    async def update(self, query: Update) -> None:
        await self.execute(query)

    async def delete(self, query: Delete) -> None:
        await self.execute(query)

    async def raw(self, sql: str, params: Optional[QueryParams] = None) -> ResultSet:
        return await self.query_raw(sql, params)


class TransactionCapable(Queryable):
    """
    Marker for backends supporting the default transaction protocol:
    ``BEGIN``, the caller's operations, then ``COMMIT`` or ``ROLLBACK``,
    all issued through the backend's own raw operations.
    """

    async def start_transaction(self) -> Transaction:
        from .transaction import Transaction
        txn = Transaction(self)
        await txn.begin()
        return txn

    def transaction(self) -> Transaction:
        """
        Transaction usable as an async context manager::

            async with connector.transaction() as txn:
                await txn.execute_raw("INSERT INTO t (v) VALUES (?)", [1])
        """
        from .transaction import Transaction
        return Transaction(self)
