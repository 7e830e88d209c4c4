"""Event payloads and listener fan-out."""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .const.events import AD2EventType

_LOGGER = logging.getLogger(__name__)

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class ConnectionEvent:
    """Payload of connected/disconnected events."""

    host: str
    port: int


@dataclass(frozen=True)
class ZoneChangedEvent:
    """Payload of zoneChanged events."""

    zone: Any
    faulted: int


@dataclass(frozen=True)
class KeypadMessageEvent:
    """Payload of keypadMessage events."""

    numeric: str
    bits: dict[str, Any]
    message: str


@dataclass(frozen=True)
class ProtocolErrorEvent:
    """Payload of protocolError events."""

    line: str | None  # None when the stream itself overflowed
    error: str


class EventPublisher:
    """Fans events out to listeners in subscription order."""

    def __init__(self) -> None:
        self._listeners: dict[AD2EventType, list[Listener]] = {
            event_type: [] for event_type in AD2EventType
        }

    def subscribe(self, event_type: AD2EventType | str, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            event_type: Event kind (enum member or its string value)
            listener: Callable receiving the event payload

        Returns:
            Callable that removes the listener again
        """
        kind = AD2EventType(event_type)
        self._listeners[kind].append(listener)
        return lambda: self.unsubscribe(kind, listener)

    def unsubscribe(self, event_type: AD2EventType | str, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        listeners = self._listeners[AD2EventType(event_type)]
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: AD2EventType | str) -> int:
        """Number of listeners for an event kind."""
        return len(self._listeners[AD2EventType(event_type)])

    def emit(self, event_type: AD2EventType | str, payload: Any = None) -> None:
        """Deliver an event to every listener of its kind.

        A failing listener is logged and does not prevent delivery to the rest.
        """
        kind = AD2EventType(event_type)
        listeners = list(self._listeners[kind])
        if not listeners:
            return

        _LOGGER.debug("Emitting %s to %d listener(s)", kind.value, len(listeners))
        for listener in listeners:
            try:
                listener(payload)
            except Exception:
                _LOGGER.exception("Listener %r failed handling %s", listener, kind.value)
