from .settings import make_settings
from .player import FakePlayer, RecordingNotifier
from .relay import FakeConnector, FakeRelaySocket, reply_ack, reply_join, settle

__all__ = [
    "FakeConnector",
    "FakePlayer",
    "FakeRelaySocket",
    "RecordingNotifier",
    "make_settings",
    "reply_ack",
    "reply_join",
    "settle",
]
