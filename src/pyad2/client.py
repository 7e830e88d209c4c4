"""High-level async AD2 bridge client."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .connection import AD2Connection
from .const.events import AD2EventType
from .const.protocol import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    MAX_LINE_LENGTH,
    RECONNECT_DELAY_SECONDS,
)
from .const.states import ConnectionState
from .events import (
    ConnectionEvent,
    EventPublisher,
    KeypadMessageEvent,
    ProtocolErrorEvent,
    ZoneChangedEvent,
)
from .exceptions import AD2ProtocolError
from .protocol import AD2Protocol, KeypadStatus, ZoneTransition
from .status import BitStatus, BitValue
from .zones import ZoneConfig, ZoneMode

_LOGGER = logging.getLogger(__name__)


class AD2Client:
    """High-level async interface to an AD2 bridge.

    Decodes everything the bridge sends and republishes it as events::

        client = AD2Client("alarmdecoder", zones={"00:07": "Garage"})
        client.on_zone_changed(lambda event: print(event.zone, event.faulted))
        await client.start()
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        zones: ZoneConfig | Mapping[str, Any] | None = None,
        *,
        reconnect_delay: float = RECONNECT_DELAY_SECONDS,
        timeout: float = CONNECT_TIMEOUT_SECONDS,
        max_line_length: int | None = MAX_LINE_LENGTH,
        report_protocol_errors: bool = False,
    ):
        """Initialize client.

        Args:
            host: Bridge IP address or hostname (default: alarmdecoder)
            port: TCP port (default: 10000)
            zones: ZoneConfig, or a ``"<expander>:<channel>" -> zone`` table.
                None selects debug-log mode.
            reconnect_delay: Seconds between a disconnect and the next attempt
            timeout: Connection timeout in seconds
            max_line_length: Longest unterminated line accepted from the bridge
            report_protocol_errors: Emit protocolError events for malformed lines

        Raises:
            AD2ConfigError: If the zone table is invalid
        """
        if not isinstance(zones, ZoneConfig):
            zones = ZoneConfig.from_table(zones)
        if zones.mode is ZoneMode.DEBUG_LOG:
            _LOGGER.warning("No zones configured, debug mode activated (listening to zones)")

        self.zones = zones
        self.report_protocol_errors = report_protocol_errors
        self.events = EventPublisher()
        self.protocol = AD2Protocol()
        self._bits = BitStatus()
        self._connection = AD2Connection(
            host,
            port,
            publisher=self.events,
            on_line=self.handle_line,
            on_error=self._report_protocol_error,
            reconnect_delay=reconnect_delay,
            timeout=timeout,
            max_line_length=max_line_length,
        )

    @property
    def connection(self) -> AD2Connection:
        """Underlying connection manager."""
        return self._connection

    @property
    def state(self) -> ConnectionState:
        """Connection lifecycle state."""
        return self._connection.state

    @property
    def is_connected(self) -> bool:
        """Check if connected to the bridge."""
        return self._connection.is_connected

    @property
    def bit_status(self) -> BitStatus:
        """Last decoded keypad status (kept across disconnects)."""
        return self._bits

    def get_bit_status(self) -> dict[str, BitValue]:
        """Return the last decoded keypad status keyed by bit label."""
        return self._bits.as_dict()

    async def start(self) -> bool:
        """Connect to the configured bridge; reconnects run until stop()."""
        return await self._connection.connect()

    async def connect(self, host: str | None = None, port: int | None = None) -> bool:
        """(Re)connect, replacing any open socket.

        Returns:
            True if the socket was opened; on failure a reconnect is scheduled
        """
        return await self._connection.connect(host, port)

    async def stop(self) -> None:
        """Disconnect and cancel any pending reconnect."""
        await self._connection.stop()

    async def send_keys(self, keys: str | bytes) -> None:
        """Send raw keypresses to the panel.

        Raises:
            AD2ConnectionError: If not connected
        """
        _LOGGER.debug("TX > %d key(s)", len(keys))
        await self._connection.send(self.protocol.encode_keys(keys))

    async def enter_code(self, code: str) -> None:
        """Enter a user code on the keypad.

        Raises:
            AD2ConnectionError: If not connected
        """
        _LOGGER.debug("TX > #%s", "*" * len(code))
        await self._connection.send(self.protocol.encode_code(code))

    def on_connected(self, listener: Callable[[ConnectionEvent], None]) -> Callable[[], None]:
        """Subscribe to connected events."""
        return self.events.subscribe(AD2EventType.CONNECTED, listener)

    def on_disconnected(self, listener: Callable[[ConnectionEvent], None]) -> Callable[[], None]:
        """Subscribe to disconnected events."""
        return self.events.subscribe(AD2EventType.DISCONNECTED, listener)

    def on_zone_changed(self, listener: Callable[[ZoneChangedEvent], None]) -> Callable[[], None]:
        """Subscribe to zoneChanged events."""
        return self.events.subscribe(AD2EventType.ZONE_CHANGED, listener)

    def on_keypad_message(
        self, listener: Callable[[KeypadMessageEvent], None]
    ) -> Callable[[], None]:
        """Subscribe to keypadMessage events."""
        return self.events.subscribe(AD2EventType.KEYPAD_MESSAGE, listener)

    def on_protocol_error(
        self, listener: Callable[[ProtocolErrorEvent], None]
    ) -> Callable[[], None]:
        """Subscribe to protocolError events (requires report_protocol_errors)."""
        return self.events.subscribe(AD2EventType.PROTOCOL_ERROR, listener)

    def handle_line(self, line: str) -> None:
        """Decode one line from the bridge and publish the result."""
        try:
            message = self.protocol.decode_line(line)
        except AD2ProtocolError as e:
            _LOGGER.debug("Discarding malformed message: %s", e)
            self._report_protocol_error(e, line)
            return

        if message is None:
            _LOGGER.debug("Ignoring unrecognized message: %r", line)
        elif isinstance(message, ZoneTransition):
            self._handle_zone_transition(message)
        elif isinstance(message, KeypadStatus):
            self._handle_keypad_status(message)

    def _handle_zone_transition(self, transition: ZoneTransition) -> None:
        if self.zones.mode is ZoneMode.DEBUG_LOG:
            _LOGGER.info(
                "DEBUG: Zone changed: expander=%s channel=%s faulted=%d",
                transition.expander,
                transition.channel,
                transition.faulted,
            )
            return

        zone = self.zones.lookup(transition.expander, transition.channel)
        if zone is None:
            _LOGGER.debug(
                "No zone bound to %s:%s, ignoring", transition.expander, transition.channel
            )
            return

        self.events.emit(
            AD2EventType.ZONE_CHANGED, ZoneChangedEvent(zone=zone, faulted=transition.faulted)
        )

    def _handle_keypad_status(self, status: KeypadStatus) -> None:
        # Snapshot is replaced wholesale, never merged
        self._bits = status.bits
        self.events.emit(
            AD2EventType.KEYPAD_MESSAGE,
            KeypadMessageEvent(
                numeric=status.numeric,
                bits=status.bits.as_dict(),
                message=status.message,
            ),
        )

    def _report_protocol_error(self, error: AD2ProtocolError, line: str | None = None) -> None:
        if not self.report_protocol_errors:
            return
        self.events.emit(
            AD2EventType.PROTOCOL_ERROR, ProtocolErrorEvent(line=line, error=str(error))
        )

    async def __aenter__(self) -> "AD2Client":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.stop()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<AD2Client {self._connection.host}:{self._connection.port} "
            f"{self.state.value}, zones={self.zones.mode.value}>"
        )
