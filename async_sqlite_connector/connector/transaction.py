from __future__ import annotations
from typing import Optional, Type
from logging import Logger, getLogger as logging_getLogger

from ..sql import Query
from .exceptions import TransactionError
from .queryable import Queryable
from .result_set import ResultSet
from .types import Id, QueryParams


class Transaction(Queryable):
    """
    A transaction on a `Queryable` backend.

    Every operation is forwarded to the backend, so each statement takes the
    backend's connection lock on its own. Statements from other callers of
    the same connector can run between them and become part of this
    transaction; use a dedicated connector when that matters.
    """

    def __init__(self, queryable: Queryable, logger: Optional[Logger] = None):
        if queryable is None:
            raise TransactionError("Transaction requires an existing connector instance.")
        self.queryable = queryable
        self.logger = logger or getattr(queryable, "logger", None) or logging_getLogger(__name__)
        self._state = "new"

    @property
    def state(self) -> str:
        """One of "new", "open", "committed" or "rolled back"."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == "open"

    def _ensure_open(self) -> None:
        if self._state != "open":
            raise TransactionError(f"Transaction is not open (state: {self._state}).")

    async def begin(self) -> None:
        if self._state != "new":
            raise TransactionError(f"Transaction already started (state: {self._state}).")
        try:
            await self.queryable.execute_raw("BEGIN")
        except Exception as e:
            self.logger.error(f"Failed to BEGIN transaction: {e}")
            raise TransactionError(f"Failed to begin transaction: {e}") from e
        self._state = "open"
        self.logger.info("BEGIN transaction")

    async def commit(self) -> None:
        """Commit the transaction."""
        self._ensure_open()
        try:
            await self.queryable.execute_raw("COMMIT")
        except Exception as e:
            self.logger.error(f"Failed to COMMIT transaction: {e}")
            raise TransactionError(f"Failed to commit transaction: {e}") from e
        self._state = "committed"
        self.logger.info("COMMIT transaction")

    async def rollback(self) -> None:
        """Roll back the transaction."""
        self._ensure_open()
        try:
            await self.queryable.execute_raw("ROLLBACK")
        except Exception as e:
            self.logger.error(f"Failed to ROLLBACK transaction: {e}")
            raise TransactionError(f"Failed to roll back transaction: {e}") from e
        self._state = "rolled back"
        self.logger.info("ROLLBACK transaction")

    async def __aenter__(self) -> Transaction:
        if self._state == "new":
            await self.begin()
        return self

    async def __aexit__(self, exc_type: Optional[Type[BaseException]],
                        exc_val: Optional[BaseException], exc_tb) -> None:
        if not self.is_open:
            return
        if exc_type is not None:
            self.logger.error(f"ROLLBACK transaction after error: {exc_val!r}")
            try:
                await self.rollback()
            except TransactionError as e:
                # The caller's exception propagates; the rollback failure is only logged
                self.logger.error(f"Rollback after error failed, keeping original error: {e}")
        else:
            await self.commit()

    # Queryable
    async def execute(self, query: Query) -> Optional[Id]:
        self._ensure_open()
        return await self.queryable.execute(query)

    async def query(self, query: Query) -> ResultSet:
        self._ensure_open()
        return await self.queryable.query(query)

    async def query_raw(self, sql: str, params: Optional[QueryParams] = None) -> ResultSet:
        self._ensure_open()
        return await self.queryable.query_raw(sql, params)

    async def execute_raw(self, sql: str, params: Optional[QueryParams] = None) -> int:
        self._ensure_open()
        return await self.queryable.execute_raw(sql, params)

    async def turn_off_fk_constraints(self) -> None:
        self._ensure_open()
        await self.queryable.turn_off_fk_constraints()

    async def turn_on_fk_constraints(self) -> None:
        self._ensure_open()
        await self.queryable.turn_on_fk_constraints()

    async def raw_cmd(self, cmd: str) -> None:
        self._ensure_open()
        await self.queryable.raw_cmd(cmd)
