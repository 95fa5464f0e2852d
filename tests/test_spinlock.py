import threading

import pytest

from oslab.spinlock import SpinLock


def test_basic_lock_unlock():
    lock = SpinLock(0)
    lock.lock()
    lock.data = 42
    lock.unlock()
    assert lock.lock() == 42
    lock.unlock()


def test_try_lock():
    lock = SpinLock(0)
    assert lock.try_lock() == 0
    lock.unlock()


def test_try_lock_when_busy():
    lock = SpinLock([1])
    lock.lock()
    assert lock.try_lock() is None
    lock.unlock()
    assert lock.try_lock() == [1]
    lock.unlock()


def test_unlock_without_lock_raises():
    lock = SpinLock(0)
    with pytest.raises(RuntimeError):
        lock.unlock()


def test_concurrent_counter():
    lock = SpinLock(0)

    def work():
        for _ in range(1000):
            lock.lock()
            lock.data += 1
            lock.unlock()

    threads = [threading.Thread(target=work) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert lock.lock() == 10000
    lock.unlock()


def test_lock_protects_data():
    lock = SpinLock([])

    def push(i):
        lock.lock().append(i)
        lock.unlock()

    threads = [threading.Thread(target=push, args=(i,)) for i in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    data = lock.lock()
    assert sorted(data) == [0, 1, 2, 3, 4]
    lock.unlock()