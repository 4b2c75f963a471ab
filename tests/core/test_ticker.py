"""Tests for the repeating ticker."""

import asyncio

import pytest

from healthwatch.core.ticker import Ticker

__all__ = []


@pytest.mark.asyncio
async def test_ticker_fires_after_interval() -> None:
    """Ticker should fire once the interval has elapsed."""
    async with Ticker(0.01) as ticker:
        await asyncio.wait_for(ticker.wait(), timeout=1)


@pytest.mark.asyncio
async def test_ticker_stays_fired_until_consumed() -> None:
    """A fired tick should remain ready until consume() re-arms the timer."""
    async with Ticker(0.01) as ticker:
        await asyncio.wait_for(ticker.wait(), timeout=1)
        assert not ticker.armed

        # Still ready, no new interval started
        await asyncio.wait_for(ticker.wait(), timeout=0.1)

        ticker.reset(60)
        assert ticker.armed
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(ticker.wait(), timeout=0.02)


@pytest.mark.asyncio
async def test_ticker_consume_arms_next_interval() -> None:
    """consume() should clear the fired tick and start a new interval."""
    async with Ticker(0.01) as ticker:
        await asyncio.wait_for(ticker.wait(), timeout=1)
        ticker.consume()
        assert ticker.armed
        await asyncio.wait_for(ticker.wait(), timeout=1)


@pytest.mark.asyncio
async def test_ticker_reset_changes_interval() -> None:
    """reset() should restart the timer with the new interval."""
    async with Ticker(60) as ticker:
        ticker.reset(0.01)
        assert ticker.interval_sec == 0.01
        await asyncio.wait_for(ticker.wait(), timeout=1)


@pytest.mark.asyncio
async def test_ticker_releases_timer_on_exit() -> None:
    """Leaving the context should cancel the pending timer."""
    ticker = Ticker(60)
    async with ticker:
        assert ticker.armed

    assert not ticker.armed


@pytest.mark.asyncio
async def test_ticker_releases_timer_on_error() -> None:
    """The pending timer should be cancelled even when the body raises."""
    ticker = Ticker(60)
    with pytest.raises(RuntimeError):
        async with ticker:
            raise RuntimeError("boom")

    assert not ticker.armed
