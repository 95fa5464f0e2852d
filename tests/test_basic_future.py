import pytest

from oslab.basic_future import CountDown, YieldOnce


@pytest.mark.asyncio
async def test_countdown_zero():
    assert await CountDown(0) == "liftoff!"


@pytest.mark.asyncio
async def test_countdown_three():
    assert await CountDown(3) == "liftoff!"


@pytest.mark.asyncio
async def test_countdown_large():
    assert await CountDown(100) == "liftoff!"


@pytest.mark.asyncio
async def test_yield_once():
    fut = YieldOnce()
    result = await fut
    assert result is None
    assert fut.yielded is True


def test_countdown_suspends_count_times():
    cd = CountDown(3)
    steps = cd.__await__()
    suspensions = 0
    with pytest.raises(StopIteration) as stop:
        while True:
            next(steps)
            suspensions += 1
    assert suspensions == 3
    assert stop.value.value == "liftoff!"
    assert cd.count == 0


def test_countdown_decrements_per_resume():
    cd = CountDown(2)
    steps = cd.__await__()
    next(steps)
    assert cd.count == 1


def test_yield_once_suspends_once():
    fut = YieldOnce()
    steps = fut.__await__()
    next(steps)
    assert fut.yielded is True
    with pytest.raises(StopIteration) as stop:
        next(steps)
    assert stop.value.value is None


def test_countdown_rejects_negative():
    with pytest.raises(ValueError):
        CountDown(-1)