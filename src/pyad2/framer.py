"""Newline framing for the bridge's text stream."""

import codecs
import logging

from .const.protocol import LINE_TERMINATOR, MAX_LINE_LENGTH
from .exceptions import AD2BufferOverflowError

_LOGGER = logging.getLogger(__name__)


class LineFramer:
    """Accumulates received chunks and yields complete lines.

    The unterminated tail of each chunk is kept and prefixed onto the next
    one. Carriage returns are left in place for the decoder to handle.
    """

    def __init__(self, max_line_length: int | None = MAX_LINE_LENGTH):
        """Initialize framer.

        Args:
            max_line_length: Largest unterminated tail allowed before the
                stream is treated as a protocol violation (None: unbounded)
        """
        self.max_line_length = max_line_length
        self._pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, chunk: str | bytes) -> list[str]:
        """Consume a chunk and return the lines it completes.

        Args:
            chunk: Raw bytes from the socket or already-decoded text

        Returns:
            Complete lines without their terminating newline

        Raises:
            AD2BufferOverflowError: If the pending tail exceeds max_line_length.
                Lines completed by the same chunk are carried on the error.
        """
        if isinstance(chunk, bytes):
            chunk = self._decoder.decode(chunk)

        *lines, self._pending = (self._pending + chunk).split(LINE_TERMINATOR)

        if self.max_line_length is not None and len(self._pending) > self.max_line_length:
            size = len(self._pending)
            self._pending = ""
            raise AD2BufferOverflowError(
                f"Unterminated line of {size} characters exceeds limit of {self.max_line_length}",
                lines=lines,
            )

        return lines

    def reset(self) -> None:
        """Drop any partial line and decoder state."""
        if self._pending:
            _LOGGER.debug(f"Discarding {len(self._pending)} buffered characters")
        self._pending = ""
        self._decoder.reset()
