from typing import Any, Optional, Sequence


class QueryLog:
    """One wrapped engine operation: what ran, how long it took, how it ended."""
    __slots__ = ("name", "sql", "params", "elapsed_ms", "success", "error")

    def __init__(
        self,
        name: str,
        sql: str,
        params: Sequence[Any],
        elapsed_ms: float,
        success: bool = True,
        error: Optional[str] = None,
    ):
        self.name = name
        self.sql = sql
        self.params = tuple(params)
        self.elapsed_ms = elapsed_ms
        self.success = success
        self.error = error

    def __repr__(self):
        return (f"QueryLog({self.name!r}, {self.sql!r}, {self.params!r}, "
                f"{self.elapsed_ms!r}, {self.success!r}, {self.error!r})")

    def __str__(self):
        outcome = "ok" if self.success else f"failed: {self.error}"
        return f"{self.name} [{self.elapsed_ms:.3f} ms] {self.sql} | {list(self.params)} -> {outcome}"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sql": self.sql,
            "params": [p if isinstance(p, (int, float, str, type(None))) else repr(p) for p in self.params],
            "elapsed_ms": self.elapsed_ms,
            "success": self.success,
            "error": self.error,
        }

    def __eq__(self, other):
        if not isinstance(other, QueryLog):
            return False
        return (
            self.name == other.name and
            self.sql == other.sql and
            self.params == other.params and
            self.elapsed_ms == other.elapsed_ms and
            self.success == other.success and
            self.error == other.error
        )

    def __hash__(self):
        return hash((self.name, self.sql, self.params, self.elapsed_ms, self.success, self.error))
