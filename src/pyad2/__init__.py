"""pyad2 - asyncio client for AD2 security-panel serial-to-IP bridges.

Keeps a persistent TCP connection to the bridge, decodes its line protocol
and republishes panel activity as events.

Example:
    >>> import asyncio
    >>> from pyad2 import AD2Client
    >>>
    >>> async def main():
    ...     client = AD2Client("192.168.1.50", zones={"00:07": "Garage"})
    ...     client.on_zone_changed(lambda e: print(e.zone, e.faulted))
    ...     client.on_keypad_message(lambda e: print(e.message))
    ...     async with client:
    ...         await client.enter_code("1234")
    ...         await asyncio.sleep(60)
    >>>
    >>> asyncio.run(main())
"""

from . import const, exceptions
from .client import AD2Client
from .connection import AD2Connection
from .const.bits import DeviceMode, StatusBit
from .const.events import AD2EventType
from .const.states import ConnectionState
from .events import (
    ConnectionEvent,
    EventPublisher,
    KeypadMessageEvent,
    ProtocolErrorEvent,
    ZoneChangedEvent,
)
from .framer import LineFramer
from .protocol import AD2Protocol, KeypadStatus, ZoneTransition, normalize_keypad_text
from .status import BitStatus, decode_bit_field
from .zones import ZoneConfig, ZoneMode

__version__ = "0.1.0"

__all__ = [
    # High-level API (recommended)
    "AD2Client",
    "ZoneConfig",
    "ZoneMode",
    # Events
    "AD2EventType",
    "EventPublisher",
    "ConnectionEvent",
    "ZoneChangedEvent",
    "KeypadMessageEvent",
    "ProtocolErrorEvent",
    # Status model
    "BitStatus",
    "StatusBit",
    "DeviceMode",
    "decode_bit_field",
    # Low-level API (advanced use)
    "AD2Connection",
    "ConnectionState",
    "AD2Protocol",
    "LineFramer",
    "KeypadStatus",
    "ZoneTransition",
    "normalize_keypad_text",
    # Submodules
    "const",
    "exceptions",
    # Version
    "__version__",
]
