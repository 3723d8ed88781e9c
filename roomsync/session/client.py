"""Room sync client facade.

`SyncClient` owns the session state and wires the relay channel, room
membership, the poll engine, party pausing and the event dispatcher together.
At most one relay connection is live at a time: any existing connection is
torn down before a new one is opened.
"""

from __future__ import annotations

import uuid
import asyncio
import logging
from collections.abc import Callable

from roomsync.polling import PollEngine
from roomsync.runtime import load_settings
from roomsync.polling.unacked import monotonic_ms
from roomsync.relay import RelayChannel, build_relay_url
from roomsync.collaborators import Notifier, PlayerClient, LoggingNotifier
from roomsync.errors import RelayConnectionError, DisconnectTimeoutError
from roomsync.config.relay import EVENT_DISCONNECT, EVENT_SEND_MESSAGE, EVENT_TRANSFER_HOST
from roomsync.state import (
    JoinResult,
    RecentRoom,
    AppSettings,
    ChatMessage,
    UserProfile,
    RoomIdentity,
    SessionState,
)

from .health import ServerHealthCache
from .membership import RoomMembership
from .party_pause import PartyPauseCoordinator
from .dispatch import EventDispatcher, DispatchContext

logger = logging.getLogger(__name__)

LOCAL_MESSAGE_USERNAME = "You"


class SyncClient:
    def __init__(
        self,
        *,
        player: PlayerClient,
        profile: UserProfile,
        settings: AppSettings | None = None,
        notifier: Notifier | None = None,
        interval_ms_fn: Callable[[], float] | None = None,
        connect_fn: Callable | None = None,
        health: ServerHealthCache | None = None,
        now_fn: Callable[[], float] | None = None,
        wall_clock_fn: Callable[[], float] | None = None,
        client_uuid: str | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.player = player
        self.profile = profile
        self.notifier = notifier or LoggingNotifier()
        self.health = health
        self.state = SessionState(uuid=client_uuid or str(uuid.uuid4()))
        self.membership = RoomMembership(
            state=self.state,
            profile=profile,
            settings=self.settings.relay,
            wall_clock_fn=wall_clock_fn,
        )
        self.party_pause = PartyPauseCoordinator(
            state=self.state,
            player=player,
            notifier=self.notifier,
            ack_timeout_s=self.settings.relay.ack_timeout_s,
        )
        self._interval_ms_fn = interval_ms_fn
        self._connect_fn = connect_fn
        self._now = now_fn or monotonic_ms
        self._channel: RelayChannel | None = None
        self._poller: PollEngine | None = None
        self._dispatcher: EventDispatcher | None = None

    @property
    def channel(self) -> RelayChannel | None:
        return self._channel

    @property
    def poller(self) -> PollEngine | None:
        return self._poller

    @property
    def dispatcher(self) -> EventDispatcher | None:
        return self._dispatcher

    async def connect(self, server: str) -> RelayChannel:
        """Open a relay connection to ``server``, replacing any existing one."""
        if self._channel is not None:
            try:
                await self.disconnect()
            except DisconnectTimeoutError as exc:
                logger.warning("previous relay connection never confirmed close: %r", exc)

        channel = RelayChannel(build_relay_url(server), settings=self.settings.relay, connect_fn=self._connect_fn)
        await channel.open()

        self._channel = channel
        self._poller = PollEngine(
            state=self.state,
            player=self.player,
            settings=self.settings.poll,
            interval_ms_fn=self._interval_ms_fn,
            now_fn=self._now,
        )
        self._dispatcher = EventDispatcher(
            DispatchContext(
                state=self.state,
                membership=self.membership,
                poller=self._poller,
                party_pause=self.party_pause,
                notifier=self.notifier,
                now_fn=self._now,
            )
        )
        self._dispatcher.bind(channel)
        self.state.is_connected = True
        return channel

    async def join_room(self) -> JoinResult:
        room = self.state.room
        if room is None:
            raise ValueError("no room identity set")
        channel = self._channel
        if channel is None or not channel.connected:
            raise RelayConnectionError(url=room.server, reason="not connected")

        result = await self.membership.join(channel, room)
        # The transport may have dropped while the join was in flight.
        if not channel.connected:
            raise RelayConnectionError(url=channel.url, reason="connection dropped during join")
        self.membership.apply_join_result(result)
        if self._poller is not None:
            self._poller.reset()
            self._poller.start(channel.emit)
        self.membership.add_recent_room(room)
        self.notifier.notify(f"Joined room: {room.room}")
        return result

    async def connect_and_join(self) -> JoinResult:
        room = self.state.room
        if room is None:
            raise ValueError("no room identity set")
        await self.connect(room.server)
        return await self.join_room()

    async def set_and_connect_and_join(self, server: str, room: str, password: str | None = None) -> JoinResult:
        self.state.room = RoomIdentity(server=server, room=room, password=password)
        return await self.connect_and_join()

    async def create_and_join_room(self) -> JoinResult:
        server = await self.health.best_server() if self.health is not None else None
        if server is None:
            raise RelayConnectionError(url="", reason="no healthy relay server available")
        room = uuid.uuid4().hex[:10]
        logger.info("creating room=%s on server=%s", room, server)
        return await self.set_and_connect_and_join(server, room)

    async def disconnect(self) -> None:
        """Leave the room and close the relay connection.

        State is cleared before the channel closes. Raises
        DisconnectTimeoutError when the close is never confirmed.
        """
        channel = self._channel
        confirmed = channel.wait_once(EVENT_DISCONNECT) if channel is not None and channel.connected else None

        if self._poller is not None:
            self._poller.stop()
            self._poller.reset()
        if self._dispatcher is not None:
            self._dispatcher.unbind()
        self.state.clear_transient()
        self._channel = None
        self._poller = None
        self._dispatcher = None

        if channel is None:
            return

        timeout_s = self.settings.relay.disconnect_timeout_s
        try:
            await asyncio.wait_for(self._close_channel(channel, confirmed), timeout=timeout_s)
        except TimeoutError as exc:
            raise DisconnectTimeoutError(url=channel.url, timeout_s=timeout_s) from exc
        finally:
            if confirmed is not None:
                confirmed.cancel()
        logger.info("relay disconnected by client url=%s", channel.url)

    async def _close_channel(self, channel: RelayChannel, confirmed: asyncio.Future | None) -> None:
        await channel.close()
        if confirmed is not None:
            await confirmed

    async def send_message(self, msg: str) -> bool:
        self.state.messages.append(
            ChatMessage(
                msg=msg,
                user={"username": LOCAL_MESSAGE_USERNAME, "thumb": self.profile.avatar_url},
                type="message",
            )
        )
        channel = self._channel
        if channel is None or not channel.connected:
            return False
        return await channel.emit(EVENT_SEND_MESSAGE, {"msg": msg, "type": "message"})

    async def transfer_host(self, username: str) -> bool:
        channel = self._channel
        if channel is None or not channel.connected:
            return False
        return await channel.emit(EVENT_TRANSFER_HOST, {"username": username})

    async def update_party_pausing(self, value: bool) -> None:
        await self.party_pause.update(self._channel, value)

    async def send_party_pause(self, is_pause: bool) -> bool:
        return await self.party_pause.send(self._channel, is_pause)

    def remove_recent_room(self, entry: RecentRoom) -> None:
        self.membership.remove_recent_room(entry)


__all__ = ["SyncClient"]
