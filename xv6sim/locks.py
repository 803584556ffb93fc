"""Mutual-exclusion locks: spin locks held by a thread and sleep locks held by a process."""

from __future__ import annotations

import threading
from typing import Optional


class LockError(RuntimeError):
    """A lock was acquired twice or released by a thread that does not hold it."""


class SpinLock:
    """A lock owned by the thread that acquired it."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._lock = threading.Lock()
        self.owner: Optional[int] = None  # thread holding the lock

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def acquire(self) -> None:
        if self.holding():
            raise LockError(f"acquire: {self.name}")
        self._lock.acquire()
        self.owner = threading.get_ident()

    def release(self) -> None:
        if not self.holding():
            raise LockError(f"release: {self.name}")
        self.owner = None
        self._lock.release()

    def holding(self) -> bool:
        """Whether the calling thread holds the lock."""
        return self._lock.locked() and self.owner == threading.get_ident()

    def __enter__(self) -> "SpinLock":
        self.acquire()
        return self

    def __exit__(self, *exc) -> None:
        self.release()


class SleepLock:
    """A long-term lock; waiters sleep instead of spinning."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.lk = SpinLock("sleep lock")
        self.locked = False
        self.pid = 0
        self._wakeup = threading.Condition(self.lk._lock)

    def _sleep(self) -> None:
        self.lk.owner = None
        self._wakeup.wait()
        self.lk.owner = threading.get_ident()

    def acquire(self, pid: int) -> None:
        """Wait until the lock is free, then take it on behalf of process ``pid``."""
        with self.lk:
            while self.locked:
                self._sleep()
            self.locked = True
            self.pid = pid

    def release(self) -> None:
        with self.lk:
            self.locked = False
            self.pid = 0
            self._wakeup.notify_all()

    def holding(self) -> bool:
        """Whether anyone holds the lock."""
        with self.lk:
            return self.locked