from __future__ import annotations

import asyncio
from typing import Any

import pytest

from roomsync.polling import PollEngine
from roomsync.state import HostState, SessionState
from tests.fakes import FakePlayer, make_settings


class _Clock:
    def __init__(self) -> None:
        self.t = 0.0

    def __call__(self) -> float:
        return self.t


class _Emitter:
    def __init__(self, *, ok: bool = True) -> None:
        self.ok = ok
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, event: str, payload: dict[str, Any]) -> bool:
        self.calls.append((event, payload))
        return self.ok


def _engine(clock: _Clock, player: FakePlayer | None = None, **kwargs: Any) -> tuple[PollEngine, SessionState]:
    state = SessionState(uuid="client-1")
    engine = PollEngine(
        state=state,
        player=player or FakePlayer(),
        settings=make_settings().poll,
        now_fn=clock,
        **kwargs,
    )
    return engine, state


@pytest.mark.asyncio
async def test_poll_numbers_strictly_increase() -> None:
    clock = _Clock()
    engine, _ = _engine(clock)
    emit = _Emitter()
    engine._emit = emit

    numbers = [await engine.emit_poll({"time": 0.0}) for _ in range(5)]

    assert numbers == [1, 2, 3, 4, 5]
    assert [payload["commandId"] for _, payload in emit.calls] == [1, 2, 3, 4, 5]
    assert all(event == "poll" for event, _ in emit.calls)


@pytest.mark.asyncio
async def test_result_updates_srtt_and_unacked_window() -> None:
    clock = _Clock()
    engine, _ = _engine(clock)
    emit = _Emitter()
    engine._emit = emit

    await engine.emit_poll({"time": 0.0})
    clock.t = 1000.0
    await engine.emit_poll({"time": 1000.0})
    clock.t = 1200.0

    assert engine.handle_result(1) == 1200.0
    assert engine.unacked.poll_numbers() == [2]
    assert engine.srtt.value_ms == 1200.0

    clock.t = 1300.0
    await engine.emit_poll({"time": 1300.0})
    assert emit.calls[-1][1]["latency"] == 600.0


@pytest.mark.asyncio
async def test_unknown_command_id_leaves_srtt_untouched() -> None:
    clock = _Clock()
    engine, _ = _engine(clock)
    engine._emit = _Emitter()
    await engine.emit_poll({"time": 0.0})
    clock.t = 400.0
    engine.handle_result(1)

    assert engine.handle_result(1) is None
    assert engine.handle_result(77) is None
    assert engine.handle_result(None) is None
    assert engine.srtt.value_ms == 400.0
    assert engine.srtt.samples == 1


@pytest.mark.asyncio
async def test_failed_send_discards_record_and_not_started_is_noop() -> None:
    clock = _Clock()
    engine, _ = _engine(clock)
    assert await engine.emit_poll({"time": 0.0}) is None
    assert engine.poll_number == 1

    engine._emit = _Emitter(ok=False)
    assert await engine.emit_poll({"time": 0.0}) is None
    assert len(engine.unacked) == 0


@pytest.mark.asyncio
async def test_poll_tick_samples_player_and_derives_status() -> None:
    clock = _Clock()
    clock.t = 5000.0
    player = FakePlayer({"time": 10_200.0, "state": "paused", "duration": 60_000.0})
    engine, state = _engine(clock, player)
    state.host_state = HostState(time=10_000.0, state="paused", received_at_ms=4000.0)
    emit = _Emitter()
    engine._emit = emit

    await engine.poll()

    event, payload = emit.calls[0]
    assert event == "poll"
    assert payload["time"] == 10_200.0
    assert payload["state"] == "paused"
    assert payload["duration"] == 60_000.0
    assert payload["status"] == "good"
    assert payload["uuid"] == "client-1"
    assert payload["commandId"] == 1
    assert payload["latency"] == 0.0
    assert player.polls == 1


@pytest.mark.asyncio
async def test_stop_halts_periodic_polls() -> None:
    engine, _ = _engine(_Clock(), interval_ms_fn=lambda: 1.0)
    emit = _Emitter()
    engine.start(emit)
    await asyncio.sleep(0.02)
    assert engine.running
    engine.stop()
    sent = len(emit.calls)
    await asyncio.sleep(0.02)

    assert sent >= 1
    assert len(emit.calls) == sent
    assert not engine.running
