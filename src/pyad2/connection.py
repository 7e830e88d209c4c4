"""Async TCP connection to an AD2 bridge with automatic reconnect."""

import asyncio
import logging
from typing import Any, Callable

from .const.events import AD2EventType
from .const.protocol import (
    CONNECT_TIMEOUT_SECONDS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    MAX_LINE_LENGTH,
    READ_CHUNK_SIZE,
    RECONNECT_DELAY_SECONDS,
)
from .const.states import ConnectionState
from .events import ConnectionEvent, EventPublisher
from .exceptions import AD2BufferOverflowError, AD2ConnectionError, AD2ProtocolError
from .framer import LineFramer

_LOGGER = logging.getLogger(__name__)


class AD2Connection:
    """Persistent TCP connection to an AD2 bridge.

    Owns the socket and the line framer. Every socket close schedules exactly
    one reconnect after ``reconnect_delay`` seconds; the loop runs until
    :meth:`stop` is called.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        publisher: EventPublisher | None = None,
        on_line: Callable[[str], None] | None = None,
        on_error: Callable[[AD2ProtocolError], None] | None = None,
        reconnect_delay: float = RECONNECT_DELAY_SECONDS,
        timeout: float = CONNECT_TIMEOUT_SECONDS,
        max_line_length: int | None = MAX_LINE_LENGTH,
    ):
        """Initialize connection.

        Args:
            host: Bridge IP address or hostname
            port: TCP port (default: 10000)
            publisher: Receives connected/disconnected events
            on_line: Called with every complete line received
            on_error: Called when the stream violates the framing rules
            reconnect_delay: Seconds to wait before reconnecting after a close
            timeout: Connection timeout in seconds
            max_line_length: Longest unterminated line accepted (None: unbounded)
        """
        if reconnect_delay < 0:
            raise ValueError("reconnect_delay must not be negative")

        self.host = host
        self.port = port
        self.publisher = publisher if publisher is not None else EventPublisher()
        self.reconnect_delay = reconnect_delay
        self.timeout = timeout

        self._on_line = on_line
        self._on_error = on_error
        self._framer = LineFramer(max_line_length)

        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._state = ConnectionState.DISCONNECTED
        self._read_task: asyncio.Task[None] | None = None
        self._reconnect_handle: asyncio.TimerHandle | None = None
        self._reconnect_task: asyncio.Task[bool] | None = None
        self._connect_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._stopped = False

        _LOGGER.debug(f"Connection initialized for {host}:{port}")

    @property
    def state(self) -> ConnectionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Check if the socket is open."""
        return (
            self._state is ConnectionState.CONNECTED
            and self._writer is not None
            and not self._writer.is_closing()
        )

    @property
    def reconnect_pending(self) -> bool:
        """Check if a reconnect attempt is scheduled."""
        return self._reconnect_handle is not None

    async def connect(self, host: str | None = None, port: int | None = None) -> bool:
        """Open the socket, replacing any existing one.

        Transient failures are not raised: they emit ``disconnected`` and
        schedule a reconnect.

        Args:
            host: New bridge host (default: keep current)
            port: New bridge port (default: keep current)

        Returns:
            True if the socket was opened
        """
        self._cancel_reconnect()
        self._cancel_reconnect_task()
        async with self._connect_lock:
            self._stopped = False
            self._cancel_reconnect()
            if host is not None:
                self.host = host
            if port is not None:
                self.port = port

            if self._writer is not None or self._read_task is not None:
                _LOGGER.debug("Destroying existing socket before connecting")
                if await self._teardown():
                    self._emit(AD2EventType.DISCONNECTED)

            self._state = ConnectionState.CONNECTING
            _LOGGER.info(f"Connecting to {self.host}:{self.port}...")
            try:
                reader, writer = await asyncio.wait_for(
                    asyncio.open_connection(self.host, self.port), timeout=self.timeout
                )
            except (OSError, asyncio.TimeoutError, ValueError, OverflowError) as e:
                # Bad hostnames raise UnicodeError (a ValueError), bad ports OverflowError
                _LOGGER.warning("Unable to connect to %s:%s: %r", self.host, self.port, e)
                self._state = ConnectionState.DISCONNECTED
                self._emit(AD2EventType.DISCONNECTED)
                self._schedule_reconnect()
                return False

            if self._stopped:
                _LOGGER.debug("Stopped while connecting; closing new socket")
                self._state = ConnectionState.DISCONNECTED
                await self._close_writer(writer)
                return False

            self._reader, self._writer = reader, writer
            self._framer.reset()
            self._state = ConnectionState.CONNECTED
            _LOGGER.info("Connection established")
            self._emit(AD2EventType.CONNECTED)
            self._read_task = asyncio.create_task(self._read_loop(reader))
            return True

    async def stop(self) -> None:
        """Close the socket and cancel any pending reconnect."""
        self._stopped = True
        self._cancel_reconnect()

        task = self._cancel_reconnect_task()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

        if await self._teardown():
            self._emit(AD2EventType.DISCONNECTED)
        _LOGGER.info("Stopped")

    async def send(self, data: bytes) -> None:
        """Write raw bytes to the bridge.

        Args:
            data: Bytes to send, unframed

        Raises:
            AD2ConnectionError: If not connected or the write fails
        """
        async with self._write_lock:
            writer = self._writer
            if not self.is_connected or writer is None:
                raise AD2ConnectionError("Not connected to bridge")

            try:
                writer.write(data)
                await writer.drain()
            except (OSError, RuntimeError) as e:
                raise AD2ConnectionError(f"Failed to send data: {e}") from e

    async def _read_loop(self, reader: asyncio.StreamReader) -> None:
        """Feed received data through the framer until the socket closes."""
        try:
            while True:
                chunk = await reader.read(READ_CHUNK_SIZE)
                if not chunk:
                    _LOGGER.warning("Connection closed by %s:%s", self.host, self.port)
                    break
                _LOGGER.debug("RX < %r", chunk)
                for line in self._framer.feed(chunk):
                    self._dispatch(line)
        except AD2BufferOverflowError as e:
            for line in e.lines:
                self._dispatch(line)
            _LOGGER.error("Closing connection after protocol violation: %s", e)
            if self._on_error is not None:
                self._on_error(e)
        except OSError as e:
            _LOGGER.warning("Connection to %s:%s lost: %r", self.host, self.port, e)

        await self._handle_close()

    def _dispatch(self, line: str) -> None:
        if self._on_line is None:
            return
        try:
            self._on_line(line)
        except Exception:
            _LOGGER.exception("Error processing line %r", line)

    async def _handle_close(self) -> None:
        # All state changes precede the first await.
        was_connected = self._state is ConnectionState.CONNECTED
        self._read_task = None
        writer = self._detach_writer()
        self._framer.reset()
        self._state = ConnectionState.DISCONNECTED
        if was_connected:
            self._emit(AD2EventType.DISCONNECTED)
        self._schedule_reconnect()
        await self._close_writer(writer)

    async def _teardown(self) -> bool:
        """Hard-close the socket without scheduling a reconnect.

        Returns:
            True if the connection was established before teardown
        """
        was_connected = self._state is ConnectionState.CONNECTED
        task = self._read_task
        self._read_task = None
        writer = self._detach_writer()
        self._framer.reset()
        self._state = ConnectionState.DISCONNECTED

        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        await self._close_writer(writer)
        return was_connected

    def _detach_writer(self) -> asyncio.StreamWriter | None:
        writer = self._writer
        self._reader = None
        self._writer = None
        return writer

    async def _close_writer(self, writer: asyncio.StreamWriter | None) -> None:
        if writer is None:
            return
        # No graceful drain: buffered outbound data is dropped.
        writer.transport.abort()
        try:
            await writer.wait_closed()
        except Exception as e:
            _LOGGER.debug(f"Error closing connection: {e}")

    def _schedule_reconnect(self) -> None:
        if self._stopped:
            return
        self._cancel_reconnect()
        loop = asyncio.get_running_loop()
        self._state = ConnectionState.RECONNECTING
        _LOGGER.info("Reconnecting to %s:%s in %.1fs", self.host, self.port, self.reconnect_delay)
        self._reconnect_handle = loop.call_later(self.reconnect_delay, self._fire_reconnect)

    def _cancel_reconnect(self) -> None:
        if self._reconnect_handle is not None:
            self._reconnect_handle.cancel()
            self._reconnect_handle = None

    def _cancel_reconnect_task(self) -> asyncio.Task[bool] | None:
        """Cancel an in-flight reconnect attempt other than the current task."""
        task = self._reconnect_task
        self._reconnect_task = None
        if task is None or task.done() or task is asyncio.current_task():
            return None
        task.cancel()
        return task

    def _fire_reconnect(self) -> None:
        self._reconnect_handle = None
        if self._stopped:
            return
        self._reconnect_task = asyncio.create_task(self.connect())

    def _emit(self, event_type: AD2EventType) -> None:
        self.publisher.emit(event_type, ConnectionEvent(host=self.host, port=self.port))

    async def __aenter__(self) -> "AD2Connection":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.stop()
