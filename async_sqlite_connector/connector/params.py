from __future__ import annotations
import os
from typing import Optional
from logging import getLogger as logging_getLogger

from ..utils import is_decimal_digits, physical_cpu_count
from .exceptions import DatabaseUrlIsInvalid, InvalidConnectionArguments

logger = logging_getLogger(__name__)

SCHEME_PREFIX = "file:"
DEFAULT_STATEMENT_CACHE_SIZE = 128


def default_connection_limit() -> int:
    return physical_cpu_count() * 2 + 1


class SqliteParams:
    """
    Typed configuration parsed from a SQLite connection string.

    The accepted format is::

        [file:]<path>[?key=value[&key=value...]]

    Recognized keys are ``connection_limit``, ``db_name`` and
    ``statement_cache_size``. Other keys are dropped so that options meant
    for other layers can share the same string.

    `file_path` stays a `str` rather than a `Path`: it is later bound into an
    ``ATTACH DATABASE`` statement, which needs valid UTF-8 text.
    """
    __slots__ = ("_file_path", "_db_name", "_connection_limit", "_statement_cache_size")

    def __init__(
        self,
        file_path: str,
        db_name: Optional[str] = None,
        connection_limit: Optional[int] = None,
        statement_cache_size: int = DEFAULT_STATEMENT_CACHE_SIZE,
    ) -> None:
        self._file_path = _validate_path(file_path)
        self._db_name = db_name
        if connection_limit is None:
            connection_limit = default_connection_limit()
        if connection_limit < 1:
            raise InvalidConnectionArguments(f"connection_limit must be positive, got {connection_limit}")
        if statement_cache_size < 0:
            raise InvalidConnectionArguments(
                f"statement_cache_size must be non-negative, got {statement_cache_size}"
            )
        self._connection_limit = connection_limit
        self._statement_cache_size = statement_cache_size

    @classmethod
    def parse(cls, url: str) -> SqliteParams:
        """
        Parse a connection string.

        Raises:
            DatabaseUrlIsInvalid: The path is empty, not UTF-8 or a directory.
            InvalidConnectionArguments: A query parameter is malformed.
        """
        if url.startswith(SCHEME_PREFIX):
            url = url[len(SCHEME_PREFIX):]
        path, _, query = url.partition("?")
        path = _validate_path(path)

        options = {}
        for pair in query.split("&"):
            if not pair:
                continue
            key, sep, value = pair.partition("=")
            if not sep:
                raise InvalidConnectionArguments(f"Expected key=value, got {pair!r}")

            if key == "connection_limit":
                if not is_decimal_digits(value) or int(value) < 1:
                    raise InvalidConnectionArguments(f"Invalid connection_limit: {value!r}")
                options["connection_limit"] = int(value)
            elif key == "statement_cache_size":
                if not is_decimal_digits(value):
                    raise InvalidConnectionArguments(f"Invalid statement_cache_size: {value!r}")
                options["statement_cache_size"] = int(value)
            elif key == "db_name":
                options["db_name"] = value
            else:
                logger.debug(f"Discarding connection string param: {key}")

        return cls(path, **options)

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def db_name(self) -> Optional[str]:
        return self._db_name

    @property
    def connection_limit(self) -> int:
        return self._connection_limit

    @property
    def statement_cache_size(self) -> int:
        return self._statement_cache_size

    def __repr__(self) -> str:
        return (f"SqliteParams(file_path={self.file_path!r}, db_name={self.db_name!r}, "
                f"connection_limit={self.connection_limit}, "
                f"statement_cache_size={self.statement_cache_size})")

    def __eq__(self, other) -> bool:
        if not isinstance(other, SqliteParams):
            return False
        return (
            self.file_path == other.file_path and
            self.db_name == other.db_name and
            self.connection_limit == other.connection_limit and
            self.statement_cache_size == other.statement_cache_size
        )

    def __hash__(self) -> int:
        return hash((self.file_path, self.db_name, self.connection_limit, self.statement_cache_size))


def _validate_path(path: str) -> str:
    if not path:
        raise DatabaseUrlIsInvalid(path)
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        raise DatabaseUrlIsInvalid(path) from None
    if os.path.isdir(path):
        raise DatabaseUrlIsInvalid(path)
    return path
