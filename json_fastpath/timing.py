"""Monotonic timing helpers for the benchmark runner."""

import time
from collections.abc import Generator
from contextlib import contextmanager


class Timer:
    """Lightweight timer that tracks elapsed milliseconds.

    Examples
    --------
    >>> with stopwatch() as t:
    ...     pass  # do work
    >>> assert t.duration_ms >= 0
    """

    __slots__ = ("_start", "_stop")

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._stop: float | None = None

    def stop(self) -> float:
        """Freeze the timer and return the elapsed milliseconds."""
        if self._stop is None:
            self._stop = time.perf_counter()
        return self.duration_ms

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, up to ``stop()`` if the timer was stopped."""
        end = self._stop if self._stop is not None else time.perf_counter()
        return (end - self._start) * 1000


@contextmanager
def stopwatch() -> Generator[Timer, None, None]:
    """Time a block; the yielded ``Timer`` is stopped when the block exits.

    Examples
    --------
    >>> with stopwatch() as t:
    ...     sum(range(100))
    4950
    >>> t.duration_ms == t.duration_ms
    True
    """
    timer = Timer()
    try:
        yield timer
    finally:
        timer.stop()
