"""
Once-initialized shared state with a memoized outcome.

`SingleFlight` runs an async initializer at most once. Callers that arrive while the
initializer is in flight wait on the internal lock and then observe the same outcome;
callers that arrive later read the memoized value or re-raise the memoized error.
A cancelled initializer does not count as an outcome: the next caller runs it again.
"""

import asyncio
from types import TracebackType
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Single-flight, memoized async initializer."""

    def __init__(self, name: str):
        self.name = name
        self.attempts = 0
        self._lock = asyncio.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[BaseException] = None
        self._traceback: Optional[TracebackType] = None

    @property
    def done(self) -> bool:
        return self._done

    @property
    def failed(self) -> bool:
        return self._done and self._error is not None

    async def run(self, initializer: Callable[[], Awaitable[T]]) -> T:
        """Return the memoized result, running `initializer` if nobody has yet."""
        if not self._done:
            async with self._lock:
                if not self._done:
                    self.attempts += 1
                    try:
                        self._value = await initializer()
                    except Exception as e:
                        self._error = e
                        self._traceback = e.__traceback__
                    self._done = True

        if self._error is not None:
            # Every raise starts from the traceback captured at failure time
            raise self._error.with_traceback(self._traceback)
        return self._value
