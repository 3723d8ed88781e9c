"""Named-event channel over a websocket relay connection."""

from __future__ import annotations

import random
import asyncio
import inspect
import logging
import contextlib
from typing import Any
from functools import partial
from collections.abc import Callable, Awaitable

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from roomsync.state import RelaySettings
from roomsync.errors import AckTimeoutError, RelayConnectionError
from roomsync.config.relay import (
    EVENT_CONNECT,
    FRAME_TYPE_ACK,
    FRAME_KEY_EVENT,
    EVENT_DISCONNECT,
    RELAY_RECONNECT_JITTER,
    DISCONNECT_REASON_CLIENT,
    DISCONNECT_REASON_TRANSPORT,
)

from .connection import get_ws_options
from .frames import encode_frame, build_event_frame, parse_relay_frame

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
ConnectFn = Callable[..., Awaitable[Any]]

_RESERVED_EVENTS = {EVENT_CONNECT, EVENT_DISCONNECT}


class RelayChannel:
    """At most one live websocket to a relay, exposed as named events.

    Synchronous handlers run inline in arrival order. Handlers returning an
    awaitable are run as background tasks owned by the channel and cancelled
    when it closes. An unexpected drop fires ``disconnect`` and, when enabled,
    re-dials with backoff; each successful re-dial fires ``connect``.
    """

    def __init__(self, url: str, *, settings: RelaySettings, connect_fn: ConnectFn | None = None) -> None:
        self.url = url
        self._settings = settings
        self._connect_fn = connect_fn or websockets.connect
        self._ws: Any = None
        self._listeners: dict[str, list[Handler]] = {}
        self._pending_acks: dict[int, asyncio.Future] = {}
        self._next_ack_id = 1
        self._recv_task: asyncio.Task | None = None
        self._reconnect_task: asyncio.Task | None = None
        self._handler_tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def connected(self) -> bool:
        return self._ws is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def on(self, event: str, handler: Handler) -> Handler:
        self._listeners.setdefault(event, []).append(handler)
        return handler

    def off(self, event: str, handler: Handler) -> None:
        handlers = self._listeners.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def once(self, event: str, handler: Handler) -> Handler:
        def _once(*args: Any) -> Any:
            self.off(event, _once)
            return handler(*args)

        return self.on(event, _once)

    def wait_once(self, event: str) -> asyncio.Future:
        """Return a future resolved with the args of the next ``event``.

        The listener is removed after it fires or when the future is cancelled.
        """
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def _resolve(*args: Any) -> None:
            if not future.done():
                future.set_result(args)

        listener = self.once(event, _resolve)
        future.add_done_callback(lambda _f: self.off(event, listener))
        return future

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    async def open(self) -> None:
        if self._closed:
            raise RelayConnectionError(url=self.url, reason="channel is closed")
        if self._ws is not None:
            return
        self._ws = await self._dial()
        self._start_receiving()
        logger.info("relay connected url=%s", self.url)
        self._fire(EVENT_CONNECT, ())

    async def close(self) -> None:
        """Close the connection and stop reconnecting. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True

        reconnect_task = self._reconnect_task
        if reconnect_task is not None:
            reconnect_task.cancel()
            await asyncio.wait({reconnect_task})
            self._reconnect_task = None

        ws = self._ws
        recv_task = self._recv_task
        if ws is not None:
            with contextlib.suppress(Exception):
                await ws.close()
            if recv_task is not None:
                # Ends on ConnectionClosed and fires the disconnect listeners.
                try:
                    await asyncio.wait({recv_task})
                except asyncio.CancelledError:
                    recv_task.cancel()
                    raise
            self._on_transport_closed(ws)

        self._fail_pending_acks(DISCONNECT_REASON_CLIENT)
        current = asyncio.current_task()
        for task in list(self._handler_tasks):
            if task is not current:
                task.cancel()
        self._listeners.clear()

    async def emit(self, event: str, *args: Any) -> bool:
        return await self._send(build_event_frame(event, args))

    async def call(self, event: str, *args: Any, timeout_s: float) -> tuple[Any, ...]:
        """Emit ``event`` and wait for the relay's acknowledgment arguments."""
        if self._ws is None:
            raise RelayConnectionError(url=self.url, reason="not connected")

        ack_id = self._next_ack_id
        self._next_ack_id += 1
        future: asyncio.Future = asyncio.get_running_loop().create_future()
        self._pending_acks[ack_id] = future
        try:
            if not await self._send(build_event_frame(event, args, ack_id)):
                raise RelayConnectionError(url=self.url, reason=f"could not send {event!r}")
            return await asyncio.wait_for(future, timeout=timeout_s)
        except TimeoutError as exc:
            raise AckTimeoutError(event=event, timeout_s=timeout_s) from exc
        finally:
            self._pending_acks.pop(ack_id, None)

    async def _dial(self) -> Any:
        try:
            return await asyncio.wait_for(
                self._connect_fn(self.url, **get_ws_options(self._settings)),
                timeout=self._settings.connect_timeout_s,
            )
        except (OSError, TimeoutError, WebSocketException) as exc:
            raise RelayConnectionError(url=self.url, reason=str(exc) or type(exc).__name__) from exc

    async def _send(self, frame: dict[str, Any]) -> bool:
        ws = self._ws
        if ws is None:
            logger.debug("relay not connected; dropping event %r", frame.get(FRAME_KEY_EVENT))
            return False
        try:
            await ws.send(encode_frame(frame))
        except ConnectionClosed:
            return False
        except Exception:
            logger.debug("relay send failed", exc_info=True)
            return False
        return True

    def _start_receiving(self) -> None:
        self._recv_task = asyncio.create_task(self._recv_loop(self._ws))

    async def _recv_loop(self, ws: Any) -> None:
        while True:
            try:
                raw = await ws.recv()
            except ConnectionClosed:
                break
            except Exception:
                logger.warning("relay receive failed url=%s", self.url, exc_info=True)
                break
            self._handle_raw(raw)
        self._on_transport_closed(ws)

    def _handle_raw(self, raw: str | bytes) -> None:
        try:
            frame = parse_relay_frame(raw)
        except ValueError as exc:
            logger.warning("dropping malformed relay frame: %s", exc)
            return

        if frame.type == FRAME_TYPE_ACK:
            future = self._pending_acks.pop(frame.ack_id, None)
            if future is None:
                logger.debug("ignoring stale ack id=%s", frame.ack_id)
                return
            if not future.done():
                future.set_result(frame.args)
            return

        if frame.event in _RESERVED_EVENTS:
            logger.warning("dropping relay frame using reserved event %r", frame.event)
            return
        self._fire(frame.event, frame.args)

    def _fire(self, event: str, args: tuple[Any, ...]) -> None:
        for handler in list(self._listeners.get(event, ())):
            try:
                result = handler(*args)
            except Exception:
                logger.exception("relay handler for %r failed", event)
                continue
            if inspect.isawaitable(result):
                self._spawn(result, event)

    def _spawn(self, awaitable: Awaitable[Any], event: str) -> None:
        task = asyncio.ensure_future(awaitable)
        self._handler_tasks.add(task)
        task.add_done_callback(partial(self._on_handler_done, event))

    def _on_handler_done(self, event: str, task: asyncio.Task) -> None:
        self._handler_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("relay handler for %r failed", event, exc_info=exc)

    def _on_transport_closed(self, ws: Any) -> None:
        if self._ws is not ws:
            return
        self._ws = None
        self._recv_task = None
        reason = DISCONNECT_REASON_CLIENT if self._closed else DISCONNECT_REASON_TRANSPORT
        self._fail_pending_acks(reason)
        logger.info("relay disconnected url=%s reason=%s", self.url, reason)
        self._fire(EVENT_DISCONNECT, (reason,))
        if not self._closed and self._settings.reconnect:
            self._reconnect_task = asyncio.create_task(self._reconnect_loop())

    def _fail_pending_acks(self, reason: str) -> None:
        pending = list(self._pending_acks.values())
        self._pending_acks.clear()
        for future in pending:
            if not future.done():
                future.set_exception(RelayConnectionError(url=self.url, reason=reason))

    def _backoff_delay(self, attempt: int) -> float:
        base = self._settings.reconnect_delay_s * (2 ** max(0, attempt - 1))
        delay = min(self._settings.reconnect_delay_max_s, base)
        jitter = delay * RELAY_RECONNECT_JITTER * (2 * random.random() - 1)
        return max(0.0, delay + jitter)

    async def _reconnect_loop(self) -> None:
        attempt = 0
        max_attempts = self._settings.reconnect_attempts
        while not self._closed:
            attempt += 1
            if max_attempts and attempt > max_attempts:
                logger.warning("relay reconnect gave up after %s attempts url=%s", max_attempts, self.url)
                break
            await asyncio.sleep(self._backoff_delay(attempt))
            if self._closed:
                break
            try:
                ws = await self._dial()
            except RelayConnectionError as exc:
                logger.info("relay reconnect attempt %s failed url=%s: %s", attempt, self.url, exc.reason)
                continue
            if self._closed:
                with contextlib.suppress(Exception):
                    await ws.close()
                break
            self._ws = ws
            self._reconnect_task = None
            self._start_receiving()
            logger.info("relay reconnected url=%s attempt=%s", self.url, attempt)
            self._fire(EVENT_CONNECT, ())
            return
        self._reconnect_task = None


__all__ = ["RelayChannel"]
