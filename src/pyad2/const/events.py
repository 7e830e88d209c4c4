"""Event kinds published by the AD2 client."""

from enum import Enum


class AD2EventType(str, Enum):
    """Event kinds listeners can subscribe to.

    Values are the public event names, usable in place of the enum.
    """

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ZONE_CHANGED = "zoneChanged"
    KEYPAD_MESSAGE = "keypadMessage"
    # Opt-in diagnostic for lines that look like protocol messages but do not parse
    PROTOCOL_ERROR = "protocolError"
