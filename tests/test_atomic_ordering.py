import threading

import pytest

from oslab.atomic_ordering import FlagChannel, OnceCell


def test_flag_channel():
    ch = FlagChannel()
    results = []
    producer = threading.Thread(target=ch.produce, args=(42,))
    consumer = threading.Thread(target=lambda: results.append(ch.consume()))
    producer.start()
    consumer.start()
    producer.join()
    consumer.join(timeout=5)
    assert results == [42]
    assert ch.consume() == 42


def test_flag_channel_large_value():
    ch = FlagChannel()
    producer = threading.Thread(target=ch.produce, args=(0xDEAD_BEEF,))
    producer.start()
    val = ch.consume()
    producer.join()
    assert val == 0xDEAD_BEEF


def test_consume_waits_for_produce():
    ch = FlagChannel()
    results = []
    consumer = threading.Thread(target=lambda: results.append(ch.consume()))
    consumer.start()
    consumer.join(timeout=0.1)
    assert consumer.is_alive()
    assert results == []
    ch.produce(7)
    consumer.join(timeout=5)
    assert results == [7]


def test_reset_then_produce_again():
    ch = FlagChannel()
    ch.produce(1)
    assert ch.consume() == 1
    ch.reset()
    ch.produce(2)
    assert ch.consume() == 2


def test_produce_rejects_out_of_range():
    ch = FlagChannel()
    with pytest.raises(ValueError):
        ch.produce(1 << 32)


def test_once_cell_init_once():
    cell = OnceCell()
    assert cell.init(42) is True
    assert cell.init(100) is False
    assert cell.get() == 42


def test_once_cell_not_initialized():
    cell = OnceCell()
    assert cell.get() is None


def test_once_cell_concurrent():
    cell = OnceCell()
    results = [None] * 10

    def attempt(i):
        results[i] = cell.init(i)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
    winner = results.index(True)
    assert cell.get() == winner