"""Process-wide thread pool shared by discovery and history lookups."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, TypeVar

T = TypeVar("T")
R = TypeVar("R")

_lock = threading.Lock()
_executor: Optional[ThreadPoolExecutor] = None
_max_workers: Optional[int] = None


def configure(max_workers: Optional[int]) -> None:
    """Set the pool size. Replaces an already running pool."""
    global _executor, _max_workers
    with _lock:
        _max_workers = max_workers
        if _executor is not None:
            _executor.shutdown(wait=True)
            _executor = None


def get_executor() -> ThreadPoolExecutor:
    """Return the shared executor, creating it on first use."""
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=_max_workers, thread_name_prefix="hotspots"
            )
        return _executor


def parallel_map(fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
    """Run ``fn`` over a bounded batch of items and wait for all of them.

    Results come back in input order. The first exception raised by ``fn`` is
    re-raised once the whole batch has been submitted.
    """
    batch = list(items)
    if not batch:
        return []
    executor = get_executor()
    futures = [executor.submit(fn, item) for item in batch]
    return [future.result() for future in futures]


def shutdown() -> None:
    global _executor
    with _lock:
        if _executor is not None:
            _executor.shutdown(wait=True)
            _executor = None


__all__ = ["configure", "get_executor", "parallel_map", "shutdown"]
