"""
Structured, backend-agnostic query descriptions.

These classes only hold data; `SqliteVisitor` turns them into SQL text and
positional parameters. Table names may be qualified with an attached
database name, e.g. ``"main.users"``.

Conditions are given as a mapping from column name to value and joined
with AND. A value of ``None`` becomes ``IS NULL``; a list or tuple becomes
``IN (...)``.
"""
from __future__ import annotations
from typing import Any, Mapping, Optional, Sequence

Conditions = Optional[Mapping[str, Any]]


class Query:
    """Base class for every structured query."""
    __slots__ = ("table",)

    def __init__(self, table: str):
        if not table:
            raise ValueError("A query needs a table name.")
        self.table = table

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields())
        return f"{type(self).__name__}({fields})"

    def __eq__(self, other):
        return type(self) is type(other) and all(
            getattr(self, name) == getattr(other, name) for name in self._fields()
        )

    __hash__ = None  # type: ignore[assignment]

    def _fields(self):
        for cls in type(self).__mro__:
            yield from getattr(cls, "__slots__", ())


class Select(Query):
    __slots__ = ("columns", "where", "order_by", "limit", "offset")

    def __init__(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        *,
        where: Conditions = None,
        order_by: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ):
        """
        Args:
            table: Table to read from.
            columns: Columns to return; all columns when omitted.
            where: Equality conditions.
            order_by: Column names; prefix with ``-`` for descending order.
            limit: Maximum number of rows.
            offset: Number of rows to skip.
        """
        super().__init__(table)
        self.columns = tuple(columns) if columns else ()
        self.where = dict(where) if where else {}
        self.order_by = tuple(order_by) if order_by else ()
        self.limit = limit
        self.offset = offset


class Insert(Query):
    __slots__ = ("values",)

    def __init__(self, table: str, values: Mapping[str, Any]):
        super().__init__(table)
        if not values:
            raise ValueError("Insert needs at least one column value.")
        self.values = dict(values)


class Update(Query):
    __slots__ = ("values", "where")

    def __init__(self, table: str, values: Mapping[str, Any], *, where: Conditions = None):
        super().__init__(table)
        if not values:
            raise ValueError("Update needs at least one column value.")
        self.values = dict(values)
        self.where = dict(where) if where else {}


class Delete(Query):
    __slots__ = ("where",)

    def __init__(self, table: str, *, where: Conditions = None):
        super().__init__(table)
        self.where = dict(where) if where else {}
