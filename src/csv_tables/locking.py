"""Shared/exclusive access lock for table stores."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

from csv_tables.errors import AccessConflictError


class AccessLock:
    """Readers-writer lock with same-thread conflict detection.

    Any number of shared holders, or exactly one exclusive holder. Other
    threads wait for a conflicting holder to release. A thread that asks for
    access conflicting with a handle it already holds gets an
    AccessConflictError, since waiting on itself would never return.

    Holds are tracked per thread: access must be released by the thread
    that acquired it.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers: dict[int, int] = {}  # thread ident -> hold count
        self._writer: int | None = None

    @property
    def is_exclusive(self) -> bool:
        return self._writer is not None

    @property
    def shared_count(self) -> int:
        return sum(self._readers.values())

    def acquire_shared(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                raise AccessConflictError("Store is held exclusively by an open editor in this thread")
            while self._writer is not None:
                self._cond.wait()
            self._readers[me] = self._readers.get(me, 0) + 1

    def release_shared(self) -> None:
        me = threading.get_ident()
        with self._cond:
            count = self._readers.get(me, 0)
            if count == 0:
                raise RuntimeError("Shared access released without being held")
            if count == 1:
                del self._readers[me]
            else:
                self._readers[me] = count - 1
            if not self._readers:
                self._cond.notify_all()

    def acquire_exclusive(self) -> None:
        me = threading.get_ident()
        with self._cond:
            if self._writer == me:
                raise AccessConflictError("An editor is already open on this store")
            if self._readers.get(me):
                raise AccessConflictError("Store has an open read-only view in this thread")
            while self._writer is not None or self._readers:
                self._cond.wait()
            self._writer = me

    def release_exclusive(self) -> None:
        with self._cond:
            if self._writer != threading.get_ident():
                raise RuntimeError("Exclusive access released by a thread that does not hold it")
            self._writer = None
            self._cond.notify_all()

    @contextmanager
    def shared(self) -> Iterator[None]:
        self.acquire_shared()
        try:
            yield
        finally:
            self.release_shared()

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        self.acquire_exclusive()
        try:
            yield
        finally:
            self.release_exclusive()
