from .query import Query, Select, Insert, Update, Delete
from .visitor import SqliteVisitor

__all__ = ("Query", "Select", "Insert", "Update", "Delete", "SqliteVisitor")
