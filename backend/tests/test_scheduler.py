import asyncio

import pytest

from backend.app.core.scheduler import TickScheduler


def test_scheduler_ticks_until_stopped():
    ticks = []

    async def on_tick():
        ticks.append(1)

    async def run():
        scheduler = TickScheduler(on_tick, interval=0.01)
        scheduler.start()
        scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()
        assert not scheduler.running
        count = len(ticks)
        await asyncio.sleep(0.05)
        return count

    count = asyncio.run(run())
    assert count > 0
    assert len(ticks) == count


def test_scheduler_survives_failing_tick():
    calls = []

    async def on_tick():
        calls.append(1)
        raise RuntimeError("boom")

    async def run():
        async with TickScheduler(on_tick, interval=0.01) as scheduler:
            await asyncio.sleep(0.06)
            assert scheduler.running
        assert not scheduler.running

    asyncio.run(run())
    assert len(calls) >= 2


def test_stop_without_start_is_fine():
    async def on_tick():
        pass

    asyncio.run(TickScheduler(on_tick).stop())


def test_rejects_non_positive_interval():
    async def on_tick():
        pass

    with pytest.raises(ValueError):
        TickScheduler(on_tick, interval=0)


def test_stop_reraises_when_caller_is_cancelled():
    async def on_tick():
        pass

    async def run():
        scheduler = TickScheduler(on_tick, interval=10)
        scheduler.start()
        await asyncio.sleep(0)

        stopper = asyncio.create_task(scheduler.stop())
        await asyncio.sleep(0)
        stopper.cancel()
        with pytest.raises(asyncio.CancelledError):
            await stopper
        assert not scheduler.running

    asyncio.run(run())
