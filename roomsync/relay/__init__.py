from .channel import RelayChannel
from .connection import get_ws_options, build_relay_url
from .frames import RelayFrame, encode_frame, build_event_frame, parse_relay_frame

__all__ = [
    "RelayChannel",
    "RelayFrame",
    "build_event_frame",
    "build_relay_url",
    "encode_frame",
    "get_ws_options",
    "parse_relay_frame",
]
