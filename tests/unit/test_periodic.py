from __future__ import annotations

import asyncio

import pytest

from roomsync.polling import PeriodicTask


@pytest.mark.asyncio
async def test_periodic_task_rereads_interval_each_tick() -> None:
    ticks = 0
    lookups = 0
    enough = asyncio.Event()

    async def tick() -> None:
        nonlocal ticks
        ticks += 1
        if ticks >= 3:
            enough.set()

    def interval_ms() -> float:
        nonlocal lookups
        lookups += 1
        return 1.0

    task = PeriodicTask(tick, interval_ms, name="test")
    task.start()
    await asyncio.wait_for(enough.wait(), timeout=1.0)
    task.cancel()
    await task.wait_stopped()

    assert lookups >= 2
    assert not task.running


def _fail_lookup() -> float:
    raise ZeroDivisionError("interval source broken")


@pytest.mark.asyncio
@pytest.mark.parametrize("interval_ms_fn", [lambda: 0.0, lambda: -5.0, _fail_lookup])
async def test_unusable_interval_falls_back_instead_of_spinning(interval_ms_fn) -> None:
    ticks = 0

    async def tick() -> None:
        nonlocal ticks
        ticks += 1

    task = PeriodicTask(tick, interval_ms_fn, name="test", fallback_interval_ms=1000.0)
    task.start()
    await asyncio.sleep(0.05)
    task.cancel()
    await task.wait_stopped()

    assert ticks == 1


@pytest.mark.asyncio
async def test_unusable_interval_keeps_last_good_value() -> None:
    ticks = 0
    intervals = iter([1.0, 0.0])

    async def tick() -> None:
        nonlocal ticks
        ticks += 1

    task = PeriodicTask(tick, lambda: next(intervals, 0.0), name="test", fallback_interval_ms=1000.0)
    task.start()
    await asyncio.sleep(0.05)
    task.cancel()
    await task.wait_stopped()

    # The last good 1 ms interval keeps applying after the lookup turns to 0.
    assert ticks > 2


@pytest.mark.asyncio
async def test_no_tick_after_cancel() -> None:
    ticks = 0

    async def tick() -> None:
        nonlocal ticks
        ticks += 1

    task = PeriodicTask(tick, lambda: 1.0, name="test")
    task.start()
    await asyncio.sleep(0.01)
    task.cancel()
    task.cancel()
    seen = ticks
    await asyncio.sleep(0.02)

    assert ticks == seen
    with pytest.raises(RuntimeError):
        task.start()


@pytest.mark.asyncio
async def test_failing_tick_does_not_stop_the_loop() -> None:
    calls = 0
    recovered = asyncio.Event()

    async def tick() -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("player unavailable")
        recovered.set()

    task = PeriodicTask(tick, lambda: 1.0, name="test")
    task.start()
    await asyncio.wait_for(recovered.wait(), timeout=1.0)
    task.cancel()
    await task.wait_stopped()
