"""Progress reporting for long running pipeline stages."""

from __future__ import annotations

import sys
import threading
from typing import Optional, Protocol, TextIO

from tqdm import tqdm


class ProgressSink(Protocol):
    """Receives progress updates; the owner decides how to show them."""

    def increment_total(self, n: int) -> None: ...

    def increment_done(self, n: int) -> None: ...

    def close(self) -> None: ...


class NullProgress:
    """Progress sink that only keeps counters."""

    def __init__(self) -> None:
        self.total = 0
        self.done = 0
        self._lock = threading.Lock()

    def increment_total(self, n: int) -> None:
        with self._lock:
            self.total = max(0, self.total + n)

    def increment_done(self, n: int) -> None:
        with self._lock:
            self.done += n

    def close(self) -> None:
        return None


class BarProgress:
    """Progress sink that draws a tqdm bar whose total grows as work is found."""

    def __init__(self, stream: Optional[TextIO] = None, *, disable: Optional[bool] = None) -> None:
        stream = stream if stream is not None else sys.stderr
        if disable is None:
            disable = not getattr(stream, "isatty", lambda: False)()
        self._lock = threading.Lock()
        self._total = 0
        self._done = 0
        self._bar = tqdm(total=0, file=stream, disable=disable, unit="func", leave=False)

    @property
    def total(self) -> int:
        return self._total

    @property
    def done(self) -> int:
        return self._done

    def increment_total(self, n: int) -> None:
        with self._lock:
            self._total = max(0, self._total + n)
            self._bar.total = self._total
            self._bar.refresh()

    def increment_done(self, n: int) -> None:
        with self._lock:
            self._done += n
            self._bar.update(n)

    def close(self) -> None:
        with self._lock:
            self._bar.close()


__all__ = ["BarProgress", "NullProgress", "ProgressSink"]
