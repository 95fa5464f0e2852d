import pytest

from oslab.async_channel import fan_in, producer_consumer


@pytest.mark.asyncio
async def test_producer_consumer():
    items = ["hello", "async", "world"]
    assert await producer_consumer(list(items)) == items


@pytest.mark.asyncio
async def test_producer_consumer_empty():
    assert await producer_consumer([]) == []


@pytest.mark.asyncio
async def test_producer_consumer_keeps_order_with_many_items():
    items = [f"item {i}" for i in range(50)]
    assert await producer_consumer(items) == items


@pytest.mark.asyncio
async def test_fan_in():
    assert await fan_in(3) == [
        "producer 0: message",
        "producer 1: message",
        "producer 2: message",
    ]


@pytest.mark.asyncio
async def test_fan_in_single():
    assert await fan_in(1) == ["producer 0: message"]


@pytest.mark.asyncio
async def test_fan_in_many_is_sorted_and_complete():
    result = await fan_in(12)
    assert len(result) == 12
    assert result == sorted(result)
    assert "producer 11: message" in result


@pytest.mark.asyncio
async def test_fan_in_zero_rejected():
    with pytest.raises(ValueError):
        await fan_in(0)