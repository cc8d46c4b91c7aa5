from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple


class ResultRow(Mapping):
    """
    A single row of a `ResultSet`.

    Behaves as a read-only mapping from column name to value, iterating in
    the order the engine reported the columns. Use `at` for positional access,
    which also covers result sets with duplicate column names.
    """
    __slots__ = ("_columns", "_values")

    def __init__(self, columns: Tuple[str, ...], values: Tuple[Any, ...]):
        self._columns = columns
        self._values = values

    def __getitem__(self, name: str) -> Any:
        try:
            return self._values[self._columns.index(name)]
        except ValueError:
            raise KeyError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def at(self, index: int) -> Any:
        return self._values[index]

    @property
    def values_tuple(self) -> Tuple[Any, ...]:
        return self._values

    def to_dict(self) -> Dict[str, Any]:
        return dict(zip(self._columns, self._values))

    def __repr__(self) -> str:
        return f"ResultRow({self.to_dict()!r})"

    def __eq__(self, other) -> bool:
        if isinstance(other, ResultRow):
            return self._columns == other._columns and self._values == other._values
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]


class ResultSet:
    """
    Fully materialized result of a query: ordered column names and rows.
    """

    def __init__(self, columns: Sequence[str], rows: Optional[List[Tuple[Any, ...]]] = None):
        self._columns: Tuple[str, ...] = tuple(columns)
        self._rows: List[Tuple[Any, ...]] = rows if rows is not None else []

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    def append(self, values: Tuple[Any, ...]) -> None:
        self._rows.append(values)

    def is_empty(self) -> bool:
        return not self._rows

    def get(self, index: int) -> Optional[ResultRow]:
        if -len(self._rows) <= index < len(self._rows):
            return self[index]
        return None

    def first(self) -> Optional[ResultRow]:
        return self.get(0)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [row.to_dict() for row in self]

    def __getitem__(self, index: int) -> ResultRow:
        return ResultRow(self._columns, self._rows[index])

    def __iter__(self) -> Iterator[ResultRow]:
        for values in self._rows:
            yield ResultRow(self._columns, values)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"ResultSet(columns={list(self._columns)!r}, rows={len(self._rows)})"

    def __eq__(self, other) -> bool:
        return (isinstance(other, ResultSet)
                and self._columns == other._columns
                and self._rows == other._rows)

    __hash__ = None  # type: ignore[assignment]
