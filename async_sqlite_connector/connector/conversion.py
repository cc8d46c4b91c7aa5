"""
Conversion between Python values and SQLite storage classes.

Outgoing parameters are normalized to the five types the engine stores
natively (NULL, INTEGER, REAL, TEXT, BLOB) before a statement is bound.
Incoming rows are passed through untouched: SQLite already hands back
`int`, `float`, `str`, `bytes` and `None`, and any coercion here would be
lossy (a TEXT column holding ``'007'`` must stay a string).
"""
from __future__ import annotations
import uuid
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from ..utils import is_iterable
from .exceptions import ConversionError, ConnectorInvariantError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def to_sql_value(value: Any) -> Any:
    """
    Convert a single parameter to a value the engine can bind.

    Args:
        value: The Python value to bind.

    Returns:
        The value as one of ``None``, ``int``, ``float``, ``str`` or ``bytes``.

    Raises:
        ConversionError: The value has no SQLite representation.

    Examples:
        >>> to_sql_value(True)
        1
        >>> to_sql_value(datetime(2020, 1, 2, 3, 4, 5))
        '2020-01-02T03:04:05'
    """
    if value is None or isinstance(value, float):
        return value
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ConversionError(f"Text is not valid UTF-8: {e}") from e
        return value
    # bool is a subclass of int; check it first
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ConversionError(f"Integer out of 64-bit range: {value}")
        return value
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Enum):
        return to_sql_value(value.value)
    raise ConversionError(f"Cannot bind value of type {type(value).__name__}: {value!r}")


def to_sql_params(params: Optional[Sequence[Any]]) -> Tuple[Any, ...]:
    """
    Convert a positional parameter sequence. ``None`` means no parameters.
    """
    if params is None:
        return ()
    if not is_iterable(params) or isinstance(params, (dict, set, frozenset)):
        raise ConversionError(
            f"Parameters must be a positional sequence, got {type(params).__name__}"
        )
    return tuple(to_sql_value(p) for p in params)


def column_names(description: Optional[Sequence[Tuple[Any, ...]]]) -> Tuple[str, ...]:
    """
    Column names from a cursor description.

    Statements that produce no result columns (DDL, most pragmas) have no
    description; they map to an empty tuple.
    """
    if not description:
        return ()
    return tuple(column[0] for column in description)


def to_result_row(values: Sequence[Any], columns: Tuple[str, ...]) -> Tuple[Any, ...]:
    row = tuple(values)
    if len(row) != len(columns):
        raise ConnectorInvariantError(
            f"Row has {len(row)} values but the statement reported {len(columns)} columns"
        )
    return row


def affected_rows(rowcount: int) -> int:
    """
    Normalize a cursor rowcount to a non-negative count of changed rows.

    The driver reports -1 for statements that are not INSERT, UPDATE,
    DELETE or REPLACE; those changed nothing.
    """
    if rowcount == -1:
        return 0
    if rowcount < 0:
        raise ConnectorInvariantError(f"Engine reported a negative row count: {rowcount}")
    return rowcount
