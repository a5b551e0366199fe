"""Call-once memoized producer."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Once(Generic[T]):
    """Runs a zero-argument producer at most once and caches the outcome.

    The first caller runs the producer while holding the lock; concurrent
    callers block until it finishes. Afterwards every call returns the
    cached value or re-raises the cached exception instance.
    """

    __slots__ = ("_producer", "_lock", "_done", "_value", "_error")

    def __init__(self, producer: Callable[[], T]) -> None:
        self._producer: Optional[Callable[[], T]] = producer
        self._lock = threading.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None

    def __call__(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    self._run()
        if self._error is not None:
            raise self._error.with_traceback(None)
        return self._value  # type: ignore[return-value]

    def _run(self) -> None:
        producer = self._producer
        try:
            self._value = producer()  # type: ignore[misc]
        except Exception as exc:
            self._error = exc
        # Drop the closure so whatever it captured can be collected.
        self._producer = None
        self._done = True

    @property
    def done(self) -> bool:
        return self._done

    def __repr__(self) -> str:
        if not self._done:
            state = "pending"
        elif self._error is not None:
            state = f"failed: {self._error!r}"
        else:
            state = f"value: {self._value!r}"
        return f"<Once {state}>"
