"""Client session engine for synchronized media rooms over a websocket relay."""

from .session import SyncClient
from .collaborators import Notifier, HealthProbe, PlayerClient, LoggingNotifier

__all__ = ["HealthProbe", "LoggingNotifier", "Notifier", "PlayerClient", "SyncClient"]
