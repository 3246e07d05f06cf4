"""Locking primitives for the in-memory data store.

Classes:
    ReadWriteLock:
        Many concurrent readers OR one writer. Waiting writers block new readers.

Functions:
    read_locked(method) / write_locked(method):
        Decorators running a DAO method under `self.lock`.

Example:
    >>> class Store:
    ...     def __init__(self):
    ...         self.lock = ReadWriteLock()
    ...         self.data = {}
    ...
    ...     @write_locked
    ...     def put(self, key, value):
    ...         self.data[key] = value
    ...
    ...     @read_locked
    ...     def fetch(self, key):
    ...         return self.data[key]
"""

import functools
import threading
from typing import Any
from collections.abc import Callable, Iterator
from contextlib import contextmanager


__all__ = ['ReadWriteLock', 'read_locked', 'write_locked']


class ReadWriteLock:
    """Writer-preferring reader/writer lock built on a single condition variable.

    Not reentrant: a thread holding the write lock must not acquire it (or the
    read lock) again.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


def read_locked[F: Callable[..., Any]](method: F) -> F:
    """Run a DAO method while holding the shared (read) side of `self.lock`"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock.read():
            return method(self, *args, **kwargs)

    return wrapper


def write_locked[F: Callable[..., Any]](method: F) -> F:
    """Run a DAO method while holding the exclusive (write) side of `self.lock`"""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock.write():
            return method(self, *args, **kwargs)

    return wrapper
