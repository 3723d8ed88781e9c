"""Dispatch of inbound relay events to session state and component reactions."""

from __future__ import annotations

import logging
from typing import Any
from functools import partial
from dataclasses import dataclass
from collections.abc import Callable, Awaitable

from roomsync.relay import RelayChannel
from roomsync.polling import PollEngine
from roomsync.state import SessionState
from roomsync.collaborators import Notifier
from roomsync.errors import JoinTimeoutError, JoinRejectedError, RelayConnectionError
from roomsync.relay.events import (
    parse_host_swap,
    parse_host_update,
    parse_poll_result,
    parse_poll_command_id,
    parse_chat_message,
    parse_roster_change,
    parse_party_pause_intent,
    parse_party_pausing_value,
)
from roomsync.config.relay import (
    EVENT_CONNECT,
    EVENT_HOST_SWAP,
    EVENT_USER_LEFT,
    EVENT_DISCONNECT,
    EVENT_HOST_UPDATE,
    EVENT_NEW_MESSAGE,
    EVENT_POLL_RESULT,
    EVENT_USER_JOINED,
    DISCONNECT_REASON_CLIENT,
    EVENT_PARTY_PAUSING_PAUSE,
    EVENT_PARTY_PAUSING_CHANGED,
)

from .membership import RoomMembership
from .party_pause import PartyPauseCoordinator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DispatchContext:
    state: SessionState
    membership: RoomMembership
    poller: PollEngine
    party_pause: PartyPauseCoordinator
    notifier: Notifier
    now_fn: Callable[[], float]
    channel: RelayChannel | None = None


HandlerFn = Callable[[DispatchContext, tuple[Any, ...]], Awaitable[Any] | None]


def _handle_poll_result(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    # The RTT sample is folded in even when the roster part turns out invalid.
    ctx.poller.handle_result(parse_poll_command_id(args))
    if not ctx.state.is_in_room:
        return
    result = parse_poll_result(args)
    ctx.membership.replace_roster(result.users)
    if result.me is not None:
        ctx.state.me = result.me


def _handle_party_pausing_changed(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    ctx.party_pause.handle_changed(parse_party_pausing_value(args))


def _handle_party_pausing_pause(ctx: DispatchContext, args: tuple[Any, ...]) -> Awaitable[bool]:
    return ctx.party_pause.handle_pause(parse_party_pause_intent(args))


def _handle_user_joined(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    change = parse_roster_change(args)
    ctx.membership.replace_roster(change.users)
    if change.user is not None:
        ctx.notifier.notify(f"{change.user.username or change.user.id} joined")


def _handle_user_left(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    change = parse_roster_change(args)
    ctx.membership.replace_roster(change.users)
    if change.user is not None:
        ctx.notifier.notify(f"{change.user.username or change.user.id} left the room")


def _handle_host_swap(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    user = parse_host_swap(args)
    ctx.membership.set_host(user.id)
    known = ctx.state.users.get(user.id)
    name = (known.username if known is not None else user.username) or user.id
    ctx.notifier.notify(f"{name} is now the host")


def _handle_host_update(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    ctx.state.host_state = parse_host_update(args, received_at_ms=ctx.now_fn())


def _handle_disconnect(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    reason = args[0] if args else None
    ctx.poller.stop()
    ctx.poller.reset()
    ctx.state.clear_transient()
    if reason != DISCONNECT_REASON_CLIENT:
        logger.warning("relay connection dropped reason=%s", reason)
        ctx.notifier.notify("Disconnected from the relay server")


def _handle_new_message(ctx: DispatchContext, args: tuple[Any, ...]) -> None:
    ctx.state.messages.append(parse_chat_message(args))


async def _rejoin(ctx: DispatchContext) -> bool:
    channel = ctx.channel
    room = ctx.state.room
    if channel is None or room is None or ctx.state.is_in_room:
        return False

    logger.info("relay reconnected; rejoining room=%s", room.room)
    try:
        result = await ctx.membership.join(channel, room)
    except (JoinRejectedError, JoinTimeoutError, RelayConnectionError) as exc:
        logger.warning("rejoin failed room=%s: %r", room.room, exc)
        ctx.notifier.notify(f"Failed to rejoin room: {room.room}")
        return False

    # The transport may have dropped again while the join was in flight.
    if not channel.connected:
        return False
    ctx.membership.apply_join_result(result)
    ctx.poller.reset()
    ctx.poller.start(channel.emit)
    ctx.notifier.notify(f"Rejoined room: {room.room}")
    return True


def _handle_connect(ctx: DispatchContext, args: tuple[Any, ...]) -> Awaitable[bool]:
    ctx.state.is_connected = True
    return _rejoin(ctx)


HANDLERS: dict[str, HandlerFn] = {
    EVENT_POLL_RESULT: _handle_poll_result,
    EVENT_PARTY_PAUSING_CHANGED: _handle_party_pausing_changed,
    EVENT_PARTY_PAUSING_PAUSE: _handle_party_pausing_pause,
    EVENT_USER_JOINED: _handle_user_joined,
    EVENT_USER_LEFT: _handle_user_left,
    EVENT_HOST_SWAP: _handle_host_swap,
    EVENT_HOST_UPDATE: _handle_host_update,
    EVENT_DISCONNECT: _handle_disconnect,
    EVENT_NEW_MESSAGE: _handle_new_message,
    EVENT_CONNECT: _handle_connect,
}


class EventDispatcher:
    """Registers the handler table on a channel, exactly once per channel."""

    def __init__(self, ctx: DispatchContext) -> None:
        self._ctx = ctx
        self._listeners: list[tuple[str, Callable[..., Any]]] = []

    @property
    def channel(self) -> RelayChannel | None:
        return self._ctx.channel

    def bind(self, channel: RelayChannel) -> bool:
        if self._ctx.channel is channel and self._listeners:
            return False
        self.unbind()
        self._ctx.channel = channel
        for event, handler in HANDLERS.items():
            listener = channel.on(event, partial(self._route, event, handler))
            self._listeners.append((event, listener))
        return True

    def unbind(self) -> None:
        channel = self._ctx.channel
        if channel is not None:
            for event, listener in self._listeners:
                channel.off(event, listener)
        self._listeners.clear()
        self._ctx.channel = None

    def _route(self, event: str, handler: HandlerFn, *args: Any) -> Awaitable[Any] | None:
        try:
            return handler(self._ctx, args)
        except ValueError as exc:
            logger.warning("dropping invalid %r payload: %s", event, exc)
            return None


__all__ = ["DispatchContext", "EventDispatcher", "HANDLERS"]
