"""Party-wide pause/resume arbitration."""

from __future__ import annotations

import logging

from roomsync.relay import RelayChannel
from roomsync.state import SessionState, PartyPauseIntent
from roomsync.collaborators import Notifier, PlayerClient
from roomsync.errors import AckTimeoutError, RelayConnectionError
from roomsync.config.relay import EVENT_PARTY_PAUSING_SEND, EVENT_PARTY_PAUSING_CHANGE

logger = logging.getLogger(__name__)


class PartyPauseCoordinator:
    """Keeps the party-pausing flag and applies pause/resume the relay confirms.

    Local intents are applied only after a truthy acknowledgment and only while
    party pausing is still enabled at the moment the ack lands.
    """

    def __init__(
        self,
        *,
        state: SessionState,
        player: PlayerClient,
        notifier: Notifier,
        ack_timeout_s: float,
    ) -> None:
        self._state = state
        self._player = player
        self._notifier = notifier
        self._ack_timeout_s = ack_timeout_s

    async def update(self, channel: RelayChannel | None, value: bool) -> None:
        self._state.party_pausing = bool(value)
        if channel is not None and channel.connected:
            await channel.emit(EVENT_PARTY_PAUSING_CHANGE, bool(value))

    def handle_changed(self, value: bool) -> None:
        # Never re-emitted: the relay already broadcast it.
        self._state.party_pausing = bool(value)

    async def send(self, channel: RelayChannel | None, is_pause: bool) -> bool:
        if channel is None or not channel.connected or not self._state.party_pausing:
            return False

        try:
            ack = await channel.call(EVENT_PARTY_PAUSING_SEND, bool(is_pause), timeout_s=self._ack_timeout_s)
        except (AckTimeoutError, RelayConnectionError) as exc:
            logger.warning("party %s request not acknowledged: %r", _action(is_pause), exc)
            return False

        accepted = bool(ack[0]) if ack else False
        if not accepted:
            logger.info("party %s request declined by relay", _action(is_pause))
            return False
        if not self._state.party_pausing:
            logger.info("party pausing disabled before ack; ignoring %s", _action(is_pause))
            return False

        await self._apply(is_pause)
        return True

    async def handle_pause(self, intent: PartyPauseIntent) -> bool:
        if not self._state.party_pausing:
            logger.debug("party pausing disabled; ignoring remote %s", _action(intent.is_pause))
            return False
        await self._apply(intent.is_pause)
        if intent.username:
            self._notifier.notify(f"{intent.username} pressed {_action(intent.is_pause)}")
        return True

    async def _apply(self, is_pause: bool) -> None:
        if is_pause:
            await self._player.press_pause()
        else:
            await self._player.press_play()


def _action(is_pause: bool) -> str:
    return "pause" if is_pause else "play"


__all__ = ["PartyPauseCoordinator"]
