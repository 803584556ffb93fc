import threading

import pytest

from xv6sim.locks import LockError, SleepLock, SpinLock


def test_spinlock_acquire_release():
    lock = SpinLock("t")
    assert not lock.holding()
    lock.acquire()
    assert lock.holding()
    assert lock.locked
    lock.release()
    assert not lock.holding()
    assert not lock.locked


def test_spinlock_context_manager():
    lock = SpinLock("ctx")
    with lock:
        assert lock.holding()
    assert not lock.locked


def test_spinlock_double_acquire_raises():
    lock = SpinLock("twice")
    lock.acquire()
    with pytest.raises(LockError):
        lock.acquire()
    lock.release()


def test_spinlock_release_unheld_raises():
    with pytest.raises(LockError):
        SpinLock("free").release()


def test_spinlock_other_thread_does_not_hold():
    lock = SpinLock("t")
    lock.acquire()
    seen = {}

    def other():
        seen["holding"] = lock.holding()
        try:
            lock.release()
        except LockError:
            seen["error"] = True

    worker = threading.Thread(target=other)
    worker.start()
    worker.join()
    assert seen == {"holding": False, "error": True}
    assert lock.holding()
    lock.release()


def test_sleeplock_records_pid():
    lock = SleepLock("s")
    assert not lock.holding()
    lock.acquire(5)
    assert lock.holding()
    assert lock.pid == 5
    lock.release()
    assert not lock.holding()
    assert lock.pid == 0


def test_sleeplock_holding_seen_from_other_thread():
    lock = SleepLock("s")
    lock.acquire(1)
    seen = {}

    def observer():
        seen["holding"] = lock.holding()

    worker = threading.Thread(target=observer)
    worker.start()
    worker.join()
    assert seen["holding"] is True
    assert lock.holding() is True
    lock.release()
    assert lock.holding() is False


def test_sleeplock_waiter_blocks_until_release():
    lock = SleepLock("s")
    lock.acquire(1)
    acquired = threading.Event()

    def waiter():
        lock.acquire(2)
        acquired.set()

    worker = threading.Thread(target=waiter, daemon=True)
    worker.start()
    assert not acquired.wait(0.1)
    assert lock.pid == 1
    lock.release()
    assert acquired.wait(5)
    assert lock.pid == 2
    lock.release()
    worker.join(5)
    assert not worker.is_alive()