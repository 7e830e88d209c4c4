"""Constants for the AD2 bridge protocol."""

from .bits import BIT_LABELS, COUNTER_BITS, DeviceMode, StatusBit
from .events import AD2EventType
from .protocol import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    MAX_LINE_LENGTH,
    RECONNECT_DELAY_SECONDS,
)
from .states import ConnectionState

__all__ = [
    "AD2EventType",
    "BIT_LABELS",
    "COUNTER_BITS",
    "ConnectionState",
    "DeviceMode",
    "StatusBit",
    "CONNECT_TIMEOUT_SECONDS",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MAX_LINE_LENGTH",
    "RECONNECT_DELAY_SECONDS",
]
