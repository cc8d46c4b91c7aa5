from __future__ import annotations
from typing import Optional, Dict, List
from ..log import QueryLog
from .dump import MetricsDump
import asyncio


class OperationStats:
    """Running counters for one operation name."""
    __slots__ = ("calls", "failures", "total_ms", "max_ms")

    def __init__(self) -> None:
        self.calls = 0
        self.failures = 0
        self.total_ms = 0.0
        self.max_ms = 0.0

    def add(self, entry: QueryLog) -> None:
        self.calls += 1
        if not entry.success:
            self.failures += 1
        self.total_ms += entry.elapsed_ms
        self.max_ms = max(self.max_ms, entry.elapsed_ms)

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.calls if self.calls else 0.0

    def to_dict(self) -> dict:
        return {
            "calls": self.calls,
            "failures": self.failures,
            "total_ms": self.total_ms,
            "mean_ms": self.mean_ms,
            "max_ms": self.max_ms,
        }


class MetricsRecorder:
    """
    Collects `QueryLog` entries from the metrics wrapper.

    Keeps per-operation counters for the lifetime of the recorder and buffers
    the raw entries. When a dump is configured the buffer is written out each
    time it reaches `buffer_length` entries; without one, the buffer keeps only
    the most recent `buffer_length` entries.
    """

    def __init__(
        self,
        buffer_length: int = 10,
        dump: Optional[MetricsDump] = None,
    ) -> None:
        self.buffer_length = self._validate_positive_int(buffer_length)
        self.dump = dump
        self._entries: List[QueryLog] = []
        self._stats: Dict[str, OperationStats] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _validate_positive_int(value: int) -> int:
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError("buffer_length must be a positive integer")
        return value

    async def record(self, entry: QueryLog) -> None:
        """Add an entry, flushing to the dump when the buffer is full."""
        async with self._lock:
            self._stats.setdefault(entry.name, OperationStats()).add(entry)
            self._entries.append(entry)
            if len(self._entries) < self.buffer_length:
                return
            if self.dump is None:
                del self._entries[:-self.buffer_length]
                return
            pending, self._entries = self._entries, []
        await self.dump.write_many(e.to_dict() for e in pending)

    async def flush(self) -> None:
        """Write all buffered entries to the dump, if one is configured."""
        if self.dump is None:
            return
        async with self._lock:
            pending, self._entries = self._entries, []
        if pending:
            await self.dump.write_many(e.to_dict() for e in pending)

    @property
    def entries(self) -> List[QueryLog]:
        return list(self._entries)

    def stats(self, name: str) -> Optional[OperationStats]:
        return self._stats.get(name)

    def summary(self) -> Dict[str, dict]:
        return {name: stats.to_dict() for name, stats in self._stats.items()}
