from typing import Optional


class ConnectorError(Exception):
    """Base exception for the SQLite connector."""
    pass

class DatabaseUrlIsInvalid(ConnectorError):
    """Raised when the path part of a connection string cannot be used."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Database url is invalid: {path!r}")

class InvalidConnectionArguments(ConnectorError):
    """Raised when the query part of a connection string is malformed."""
    pass

class ConnectionError(ConnectorError):
    """Raised when the engine connection cannot be opened or is already closed."""
    pass

class QueryError(ConnectorError):
    """Wraps an engine error raised while preparing, binding or executing SQL."""

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)

class ConversionError(ConnectorError):
    """Raised when a parameter cannot be bound to a statement."""
    pass

class TransactionError(ConnectorError):
    """Raised when transaction operations fail."""
    pass

class ConnectorInvariantError(ConnectorError):
    """Raised when an internal invariant is violated. Not recoverable."""
    pass
