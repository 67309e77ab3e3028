"""Readers-writer lock guarding the active flat table.

Lookups (resolve, get_variants) take the shared side; language switches,
reloads and overrides take the exclusive side, so a concurrent lookup
never observes a half-installed table.

- Multiple concurrent readers
- One exclusive writer, with writer preference to prevent starvation
- Reentrant reads on the same thread
- Optional acquisition timeout (raises TimeoutError)

Upgrades (read then write), downgrades (write then read) and nested writes
on one thread raise RuntimeError instead of deadlocking. Subscriber
notification therefore always runs with the lock released.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write(timeout=1.0):
        ...     pass
    """

    __slots__ = (
        "_active_readers",
        "_active_writer",
        "_condition",
        "_reader_threads",
        "_waiting_writers",
    )

    def __init__(self) -> None:
        """Initialize readers-writer lock."""
        self._condition = threading.Condition(threading.Lock())
        self._active_readers: int = 0
        self._active_writer: int | None = None
        self._waiting_writers: int = 0
        # thread id -> reentrant read depth
        self._reader_threads: dict[int, int] = {}

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Acquire the shared side.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely.

        Raises:
            RuntimeError: If this thread holds the write lock.
            TimeoutError: If the lock cannot be acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Acquire the exclusive side.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely.

        Raises:
            RuntimeError: If this thread already holds either side.
            TimeoutError: If the lock cannot be acquired within timeout.
            ValueError: If timeout is negative.
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait(self, deadline: float | None, side: str) -> None:
        if deadline is None:
            self._condition.wait()
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            msg = f"Timed out waiting for {side} lock"
            raise TimeoutError(msg)
        self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._reader_threads:
                self._reader_threads[me] += 1
                return
            if self._active_writer == me:
                msg = (
                    "Cannot acquire read lock while holding write lock. "
                    "Release the write lock first."
                )
                raise RuntimeError(msg)

            while self._active_writer is not None or self._waiting_writers > 0:
                self._wait(deadline, "read")

            self._active_readers += 1
            self._reader_threads[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()

        with self._condition:
            if me not in self._reader_threads:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)

            self._reader_threads[me] -= 1
            if self._reader_threads[me] == 0:
                del self._reader_threads[me]
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._reader_threads:
                msg = (
                    "Cannot upgrade read lock to write lock. "
                    "Release the read lock first."
                )
                raise RuntimeError(msg)
            if self._active_writer == me:
                msg = "Cannot acquire write lock: already holding write lock"
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                while self._active_readers > 0 or self._active_writer is not None:
                    self._wait(deadline, "write")
                self._active_writer = me
            finally:
                # Readers spin on _waiting_writers; wake them on success and timeout.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        me = threading.get_ident()

        with self._condition:
            if self._active_writer != me:
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._active_writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the shared side."""
        with self._condition:
            return self._active_readers

    @property
    def writer_active(self) -> bool:
        """True if any thread currently holds the exclusive side."""
        with self._condition:
            return self._active_writer is not None
