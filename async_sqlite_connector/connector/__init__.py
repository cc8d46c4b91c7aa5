"""
Asynchronous SQLite connector.

    from async_sqlite_connector import Sqlite

    conn = await Sqlite.new("file:example.db?db_name=example")
    await conn.attach_database("example")
    rows = await conn.query_raw("SELECT 1 AS one")

    async with conn.transaction() as txn:
        await txn.execute_raw("INSERT INTO example.t (value) VALUES (?)", [42])
"""

from .sqlite import Sqlite
from .params import SqliteParams, default_connection_limit
from .queryable import Queryable, TransactionCapable
from .transaction import Transaction
from .result_set import ResultSet, ResultRow
from .types import Id, IntId, QueryParams

from .exceptions import (
    ConnectorError,
    DatabaseUrlIsInvalid,
    InvalidConnectionArguments,
    ConnectionError,
    QueryError,
    ConversionError,
    TransactionError,
    ConnectorInvariantError,
)

__all__ = [
    # Main entry points
    "Sqlite",
    "SqliteParams",
    "Transaction",

    # Contract
    "Queryable",
    "TransactionCapable",

    # Results
    "ResultSet",
    "ResultRow",
    "Id",
    "IntId",

    # Exceptions
    "ConnectorError",
    "DatabaseUrlIsInvalid",
    "InvalidConnectionArguments",
    "ConnectionError",
    "QueryError",
    "ConversionError",
    "TransactionError",
    "ConnectorInvariantError",

    # Typing helpers and defaults
    "QueryParams",
    "default_connection_limit",
]
