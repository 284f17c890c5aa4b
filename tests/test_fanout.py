"""Tests for gather-with-fallback fan-out."""

import asyncio

import pytest

from app.core.fanout import gather_with_fallback


@pytest.mark.asyncio
async def test_results_keep_input_order():
    async def worker(n: int) -> int:
        # Later items finish first
        await asyncio.sleep(0.01 * (5 - n))
        return n * 10

    results = await gather_with_fallback([1, 2, 3, 4], worker, lambda n, e: -1)
    assert results == [10, 20, 30, 40]


@pytest.mark.asyncio
async def test_failure_uses_fallback_without_cancelling_siblings():
    finished: list[int] = []

    async def worker(n: int) -> str:
        if n == 2:
            raise RuntimeError("boom")
        await asyncio.sleep(0.01)
        finished.append(n)
        return f"ok-{n}"

    results = await gather_with_fallback([1, 2, 3], worker, lambda n, e: f"fallback-{n}-{type(e).__name__}")

    assert results == ["ok-1", "fallback-2-RuntimeError", "ok-3"]
    assert sorted(finished) == [1, 3]


@pytest.mark.asyncio
async def test_empty_input():
    async def worker(n):
        return n

    assert await gather_with_fallback([], worker, lambda n, e: None) == []


@pytest.mark.asyncio
async def test_cancellation_propagates():
    async def worker(n: int) -> int:
        raise asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await gather_with_fallback([1], worker, lambda n, e: 0)
