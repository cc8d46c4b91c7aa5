from __future__ import annotations
from typing import Any, List, Mapping, Tuple

from .query import Query, Select, Insert, Update, Delete


class SqliteVisitor:
    """
    Renders a structured `Query` into SQLite SQL with ``?`` placeholders.

    Identifiers are quoted with backticks; every value goes into the
    parameter list, never into the SQL text.

    Examples:
        >>> SqliteVisitor.build(Select("users", ["id"], where={"name": "Joe"}))
        ('SELECT `id` FROM `users` WHERE `name` = ?', ['Joe'])
    """

    def __init__(self) -> None:
        self.parameters: List[Any] = []

    @classmethod
    def build(cls, query: Query) -> Tuple[str, List[Any]]:
        visitor = cls()
        method = getattr(visitor, f"visit_{type(query).__name__.lower()}", None)
        if method is None or not isinstance(query, Query):
            raise TypeError(f"Cannot render query of type {type(query).__name__}")
        sql = method(query)
        return sql, visitor.parameters

    # Helpers
    @staticmethod
    def quote(identifier: str) -> str:
        """Quote a possibly database-qualified identifier."""
        return ".".join("`" + part.replace("`", "``") + "`" for part in identifier.split("."))

    def add_parameter(self, value: Any) -> str:
        self.parameters.append(value)
        return "?"

    def visit_conditions(self, conditions: Mapping[str, Any]) -> str:
        if not conditions:
            return ""
        parts = []
        for column, value in conditions.items():
            if value is None:
                parts.append(f"{self.quote(column)} IS NULL")
            elif isinstance(value, (list, tuple)):
                if not value:
                    # IN () is not valid SQLite; nothing can match
                    parts.append("1 = 0")
                    continue
                placeholders = ", ".join(self.add_parameter(v) for v in value)
                parts.append(f"{self.quote(column)} IN ({placeholders})")
            else:
                parts.append(f"{self.quote(column)} = {self.add_parameter(value)}")
        return " WHERE " + " AND ".join(parts)

    # Query types
    def visit_select(self, query: Select) -> str:
        columns = ", ".join(self.quote(c) for c in query.columns) if query.columns else "*"
        sql = f"SELECT {columns} FROM {self.quote(query.table)}"
        sql += self.visit_conditions(query.where)

        if query.order_by:
            ordering = []
            for column in query.order_by:
                if column.startswith("-"):
                    ordering.append(f"{self.quote(column[1:])} DESC")
                else:
                    ordering.append(f"{self.quote(column)} ASC")
            sql += " ORDER BY " + ", ".join(ordering)

        if query.limit is not None or query.offset is not None:
            # SQLite only accepts OFFSET after a LIMIT; -1 means no limit
            limit = query.limit if query.limit is not None else -1
            sql += f" LIMIT {self.add_parameter(limit)}"
            if query.offset is not None:
                sql += f" OFFSET {self.add_parameter(query.offset)}"
        return sql

    def visit_insert(self, query: Insert) -> str:
        columns = ", ".join(self.quote(c) for c in query.values)
        values = ", ".join(self.add_parameter(v) for v in query.values.values())
        return f"INSERT INTO {self.quote(query.table)} ({columns}) VALUES ({values})"

    def visit_update(self, query: Update) -> str:
        assignments = ", ".join(
            f"{self.quote(column)} = {self.add_parameter(value)}"
            for column, value in query.values.items()
        )
        sql = f"UPDATE {self.quote(query.table)} SET {assignments}"
        return sql + self.visit_conditions(query.where)

    def visit_delete(self, query: Delete) -> str:
        return f"DELETE FROM {self.quote(query.table)}" + self.visit_conditions(query.where)
