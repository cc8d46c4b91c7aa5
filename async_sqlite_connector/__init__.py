from .connector import (
    Sqlite,
    SqliteParams,
    Transaction,
    Queryable,
    TransactionCapable,
    ResultSet,
    ResultRow,
    Id,
    IntId,
    ConnectorError,
    DatabaseUrlIsInvalid,
    InvalidConnectionArguments,
    QueryError,
    ConversionError,
    TransactionError,
    ConnectorInvariantError,
)
from .sql import Query, Select, Insert, Update, Delete, SqliteVisitor
from .metrics import MetricsRecorder, MetricsDump

__all__ = (
    "Sqlite",
    "SqliteParams",
    "Transaction",
    "Queryable",
    "TransactionCapable",
    "ResultSet",
    "ResultRow",
    "Id",
    "IntId",
    "ConnectorError",
    "DatabaseUrlIsInvalid",
    "InvalidConnectionArguments",
    "QueryError",
    "ConversionError",
    "TransactionError",
    "ConnectorInvariantError",
    "Query",
    "Select",
    "Insert",
    "Update",
    "Delete",
    "SqliteVisitor",
    "MetricsRecorder",
    "MetricsDump",
)
