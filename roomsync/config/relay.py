"""Relay protocol configuration and constants."""

from __future__ import annotations

# Frame keys
FRAME_KEY_TYPE = "type"
FRAME_KEY_EVENT = "event"
FRAME_KEY_ARGS = "args"
FRAME_KEY_ACK_ID = "ack_id"

FRAME_TYPE_EVENT = "event"
FRAME_TYPE_ACK = "ack"

# Outbound events
EVENT_JOIN = "join"
EVENT_POLL = "poll"
EVENT_SEND_MESSAGE = "send_message"
EVENT_TRANSFER_HOST = "transfer_host"
EVENT_PARTY_PAUSING_CHANGE = "party_pausing_change"
EVENT_PARTY_PAUSING_SEND = "party_pausing_send"

# Inbound events
EVENT_CONNECT = "connect"
EVENT_DISCONNECT = "disconnect"
EVENT_JOIN_RESULT = "join-result"
EVENT_POLL_RESULT = "poll-result"
EVENT_PARTY_PAUSING_CHANGED = "party-pausing-changed"
EVENT_PARTY_PAUSING_PAUSE = "party-pausing-pause"
EVENT_USER_JOINED = "user-joined"
EVENT_USER_LEFT = "user-left"
EVENT_HOST_SWAP = "host-swap"
EVENT_HOST_UPDATE = "host-update"
EVENT_NEW_MESSAGE = "new_message"

# Disconnect reasons
DISCONNECT_REASON_CLIENT = "io client disconnect"
DISCONNECT_REASON_TRANSPORT = "transport close"

RELAY_ENDPOINT_PATH = "/relay"

ENV_RELAY_CONNECT_TIMEOUT_S = "RELAY_CONNECT_TIMEOUT_S"
ENV_RELAY_JOIN_TIMEOUT_S = "RELAY_JOIN_TIMEOUT_S"
ENV_RELAY_ACK_TIMEOUT_S = "RELAY_ACK_TIMEOUT_S"
ENV_RELAY_DISCONNECT_TIMEOUT_S = "RELAY_DISCONNECT_TIMEOUT_S"
ENV_RELAY_PING_INTERVAL_S = "RELAY_PING_INTERVAL_S"
ENV_RELAY_PING_TIMEOUT_S = "RELAY_PING_TIMEOUT_S"
ENV_RELAY_MAX_MESSAGE_BYTES = "RELAY_MAX_MESSAGE_BYTES"
ENV_RELAY_RECONNECT = "RELAY_RECONNECT"
ENV_RELAY_RECONNECT_ATTEMPTS = "RELAY_RECONNECT_ATTEMPTS"
ENV_RELAY_RECONNECT_DELAY_S = "RELAY_RECONNECT_DELAY_S"
ENV_RELAY_RECONNECT_DELAY_MAX_S = "RELAY_RECONNECT_DELAY_MAX_S"

DEFAULT_RELAY_CONNECT_TIMEOUT_S = 10.0
DEFAULT_RELAY_JOIN_TIMEOUT_S = 10.0
DEFAULT_RELAY_ACK_TIMEOUT_S = 5.0
DEFAULT_RELAY_DISCONNECT_TIMEOUT_S = 5.0
DEFAULT_RELAY_PING_INTERVAL_S = 20.0
DEFAULT_RELAY_PING_TIMEOUT_S = 20.0
DEFAULT_RELAY_MAX_MESSAGE_BYTES = 1024 * 1024
DEFAULT_RELAY_RECONNECT = True
# 0 keeps retrying until the channel is closed.
DEFAULT_RELAY_RECONNECT_ATTEMPTS = 0
DEFAULT_RELAY_RECONNECT_DELAY_S = 1.0
DEFAULT_RELAY_RECONNECT_DELAY_MAX_S = 5.0
RELAY_RECONNECT_JITTER = 0.5

__all__ = [
    "FRAME_KEY_TYPE",
    "FRAME_KEY_EVENT",
    "FRAME_KEY_ARGS",
    "FRAME_KEY_ACK_ID",
    "FRAME_TYPE_EVENT",
    "FRAME_TYPE_ACK",
    "EVENT_JOIN",
    "EVENT_POLL",
    "EVENT_SEND_MESSAGE",
    "EVENT_TRANSFER_HOST",
    "EVENT_PARTY_PAUSING_CHANGE",
    "EVENT_PARTY_PAUSING_SEND",
    "EVENT_CONNECT",
    "EVENT_DISCONNECT",
    "EVENT_JOIN_RESULT",
    "EVENT_POLL_RESULT",
    "EVENT_PARTY_PAUSING_CHANGED",
    "EVENT_PARTY_PAUSING_PAUSE",
    "EVENT_USER_JOINED",
    "EVENT_USER_LEFT",
    "EVENT_HOST_SWAP",
    "EVENT_HOST_UPDATE",
    "EVENT_NEW_MESSAGE",
    "DISCONNECT_REASON_CLIENT",
    "DISCONNECT_REASON_TRANSPORT",
    "RELAY_ENDPOINT_PATH",
    "ENV_RELAY_CONNECT_TIMEOUT_S",
    "ENV_RELAY_JOIN_TIMEOUT_S",
    "ENV_RELAY_ACK_TIMEOUT_S",
    "ENV_RELAY_DISCONNECT_TIMEOUT_S",
    "ENV_RELAY_PING_INTERVAL_S",
    "ENV_RELAY_PING_TIMEOUT_S",
    "ENV_RELAY_MAX_MESSAGE_BYTES",
    "ENV_RELAY_RECONNECT",
    "ENV_RELAY_RECONNECT_ATTEMPTS",
    "ENV_RELAY_RECONNECT_DELAY_S",
    "ENV_RELAY_RECONNECT_DELAY_MAX_S",
    "DEFAULT_RELAY_CONNECT_TIMEOUT_S",
    "DEFAULT_RELAY_JOIN_TIMEOUT_S",
    "DEFAULT_RELAY_ACK_TIMEOUT_S",
    "DEFAULT_RELAY_DISCONNECT_TIMEOUT_S",
    "DEFAULT_RELAY_PING_INTERVAL_S",
    "DEFAULT_RELAY_PING_TIMEOUT_S",
    "DEFAULT_RELAY_MAX_MESSAGE_BYTES",
    "DEFAULT_RELAY_RECONNECT",
    "DEFAULT_RELAY_RECONNECT_ATTEMPTS",
    "DEFAULT_RELAY_RECONNECT_DELAY_S",
    "DEFAULT_RELAY_RECONNECT_DELAY_MAX_S",
    "RELAY_RECONNECT_JITTER",
]
