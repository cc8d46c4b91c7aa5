from __future__ import annotations
import time
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from ..log import QueryLog
from .recorder import MetricsRecorder

T = TypeVar("T")

_logger = logging.getLogger(__name__)


async def query(
    name: str,
    sql: str,
    params: Sequence[Any],
    thunk: Callable[[], Awaitable[T]],
    *,
    recorder: Optional[MetricsRecorder] = None,
    logger: logging.Logger = _logger,
) -> T:
    """
    Await `thunk()` and record how it went.

    The result, or the exception, of the thunk is passed through unchanged.
    Timing covers the whole thunk, including time spent waiting for the
    connection lock.

    Args:
        name (str): Operation name, e.g. ``"sqlite.query_raw"``.
        sql (str): The statement text being run.
        params: The bound parameters.
        thunk: Zero-argument coroutine function doing the actual work.
        recorder (MetricsRecorder, optional): Where to record the outcome.
        logger (logging.Logger, optional): Receives one DEBUG line per call.
    """
    start = time.perf_counter()
    try:
        result = await thunk()
    except Exception as e:
        entry = QueryLog(name, sql, params, _elapsed_ms(start), success=False, error=str(e))
        logger.debug(str(entry))
        await _record(recorder, entry, logger)
        raise

    entry = QueryLog(name, sql, params, _elapsed_ms(start))
    logger.debug(str(entry))
    await _record(recorder, entry, logger)
    return result


async def _record(recorder: Optional[MetricsRecorder], entry: QueryLog, logger: logging.Logger) -> None:
    # A broken sink must not change the outcome of the wrapped operation
    if recorder is None:
        return
    try:
        await recorder.record(entry)
    except Exception as e:
        logger.error(f"Failed to record metrics for {entry.name}: {e}")


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0
