from __future__ import annotations
from typing import Any, List, Sequence, Tuple

# Type aliases
QueryParams = Sequence[Any]
SqlAndParams = Tuple[str, List[Any]]


class Id:
    """Base class for identifiers generated by the database on insert."""
    __slots__ = ()


class IntId(Id):
    """An integer primary key (SQLite rowid)."""
    __slots__ = ("value",)

    def __init__(self, value: int):
        self.value = value

    def __repr__(self): return f"IntId({self.value})"
    def __int__(self): return self.value
    def __eq__(self, other): return isinstance(other, IntId) and self.value == other.value
    def __hash__(self): return hash(("int", self.value))
