from __future__ import annotations
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple
from logging import Logger, getLogger as logging_getLogger

import aiosqlite
from aiosqlite import Connection as AioConnection

from .. import metrics
from ..metrics import MetricsRecorder
from ..sql import Query, Insert, SqliteVisitor
from .conversion import affected_rows, column_names, to_result_row, to_sql_params
from .exceptions import ConnectionError, QueryError
from .params import SqliteParams
from .queryable import TransactionCapable
from .result_set import ResultSet
from .types import Id, IntId, QueryParams

# Text that cannot be encoded as UTF-8 fails inside the driver with a UnicodeEncodeError
ENGINE_ERRORS = (aiosqlite.Error, UnicodeEncodeError)


class Sqlite(TransactionCapable):
    """
    Asynchronous connector over a single SQLite connection.

    The connection is opened on an in-memory database; the file named in the
    connection string is attached on demand with `attach_database`, so one
    session can hold the file under several logical names.

    One `asyncio.Lock` guards the connection. Every operation holds it for its
    whole prepare, bind, execute and fetch sequence, so statements from
    concurrent callers never interleave. The blocking engine calls run on
    aiosqlite's worker thread and cannot be interrupted once started: a
    caller that stops awaiting does not cancel the statement.

    Public API:

        conn = await Sqlite.new("file:dev.db?db_name=dev")
        await conn.attach_database("dev")
        rows = await conn.query_raw("SELECT * FROM dev.users WHERE id = ?", [1])
        await conn.close()
    """

    def __init__(
        self,
        params: SqliteParams,
        connection: AioConnection,
        *,
        logger: Optional[Logger] = None,
        log_queries: bool = False,
        recorder: Optional[MetricsRecorder] = None,
    ) -> None:
        self.params = params
        self.log_queries = log_queries
        self.recorder = recorder
        self.logger = logger or logging_getLogger(__name__)
        self._connection: Optional[AioConnection] = connection
        self._lock = asyncio.Lock()

    # Construction
    @classmethod
    async def new(cls, url: str, **options) -> Sqlite:
        """
        Parse `url` and open a connector for it.

        Keyword options are passed to the constructor: ``logger``,
        ``log_queries`` and ``recorder``.

        Raises:
            DatabaseUrlIsInvalid, InvalidConnectionArguments: Bad connection string.
            ConnectionError: The engine connection could not be opened.
        """
        return await cls.from_params(SqliteParams.parse(url), **options)

    @classmethod
    async def from_params(cls, params: SqliteParams, **options) -> Sqlite:
        try:
            connection = await aiosqlite.connect(
                ":memory:",
                isolation_level=None,
                cached_statements=params.statement_cache_size,
            )
        except ENGINE_ERRORS as e:
            raise ConnectionError(f"Failed to open connection for {params.file_path}: {e}") from e
        return cls(params, connection, **options)

    async def close(self) -> None:
        """Close the native connection. Safe to call more than once."""
        async with self._lock:
            if self._connection is None:
                return
            connection, self._connection = self._connection, None
            await connection.close()
        self.logger.info(f"Closed connection for {self.file_path}")

    async def __aenter__(self) -> Sqlite:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # Properties
    @property
    def file_path(self) -> str:
        return self.params.file_path

    @property
    def db_name(self) -> Optional[str]:
        return self.params.db_name

    @property
    def closed(self) -> bool:
        return self._connection is None

    def __repr__(self) -> str:
        return f"Sqlite(file_path={self.file_path!r}, closed={self.closed})"

    # Connection access
    @asynccontextmanager
    async def _guarded(self) -> AsyncIterator[AioConnection]:
        async with self._lock:
            if self._connection is None:
                raise ConnectionError(f"Connection for {self.file_path} is closed.")
            yield self._connection

    def _engine_error(self, error: Exception, sql: str) -> QueryError:
        self.logger.error(f"SQLite error during query: {error} | {sql}")
        return QueryError(f"{type(error).__name__}: {error}", sql=sql)

    def _log_statement(self, sql: str, params) -> None:
        if self.log_queries:
            self.logger.info(f"{sql} | {list(params)}")

    async def attach_database(self, db_name: str) -> None:
        """
        Attach the connector's file under `db_name`, unless already attached,
        and enable foreign key enforcement.
        """
        async with self._guarded() as conn:
            statement = "PRAGMA database_list"
            try:
                async with conn.execute(statement) as cursor:
                    databases = {row[1] for row in await cursor.fetchall()}

                if db_name not in databases:
                    statement = "ATTACH DATABASE ? AS ?"
                    self._log_statement(statement, (self.file_path, db_name))
                    await conn.execute(statement, (self.file_path, db_name))

                statement = "PRAGMA foreign_keys = ON"
                await conn.execute(statement)
            except ENGINE_ERRORS as e:
                raise self._engine_error(e, statement) from e

    # Queryable
    async def execute(self, query: Query) -> Optional[Id]:
        sql, params = SqliteVisitor.build(query)
        _, last_id = await self._execute(sql, params)
        if isinstance(query, Insert) and last_id is not None:
            return IntId(last_id)
        return None

    async def query(self, query: Query) -> ResultSet:
        sql, params = SqliteVisitor.build(query)
        return await self.query_raw(sql, params)

    async def query_raw(self, sql: str, params: Optional[QueryParams] = None) -> ResultSet:
        values = to_sql_params(params)

        async def run() -> ResultSet:
            async with self._guarded() as conn:
                self._log_statement(sql, values)
                try:
                    async with conn.execute(sql, values) as cursor:
                        columns = column_names(cursor.description)
                        rows = await cursor.fetchall()
                except ENGINE_ERRORS as e:
                    raise self._engine_error(e, sql) from e
            return ResultSet(columns, [to_result_row(row, columns) for row in rows])

        return await metrics.query("sqlite.query_raw", sql, values, run, recorder=self.recorder)

    async def execute_raw(self, sql: str, params: Optional[QueryParams] = None) -> int:
        changes, _ = await self._execute(sql, params)
        return changes

    async def _execute(self, sql: str, params: Optional[QueryParams]) -> Tuple[int, Optional[int]]:
        """
        Run a statement and return ``(affected rows, last inserted rowid)``.

        The rowid is read from the same cursor while the lock is still held,
        so it always belongs to this statement.
        """
        values = to_sql_params(params)

        async def run() -> Tuple[int, Optional[int]]:
            async with self._guarded() as conn:
                self._log_statement(sql, values)
                try:
                    async with conn.execute(sql, values) as cursor:
                        return affected_rows(cursor.rowcount), cursor.lastrowid
                except ENGINE_ERRORS as e:
                    raise self._engine_error(e, sql) from e

        return await metrics.query("sqlite.execute_raw", sql, values, run, recorder=self.recorder)

    async def turn_off_fk_constraints(self) -> None:
        await self.query_raw("PRAGMA foreign_keys = OFF")

    async def turn_on_fk_constraints(self) -> None:
        await self.query_raw("PRAGMA foreign_keys = ON")

    async def raw_cmd(self, cmd: str) -> None:
        async def run() -> None:
            async with self._guarded() as conn:
                self._log_statement(cmd, ())
                try:
                    await conn.executescript(cmd)
                except ENGINE_ERRORS as e:
                    raise self._engine_error(e, cmd) from e

        await metrics.query("sqlite.raw_cmd", cmd, (), run, recorder=self.recorder)
