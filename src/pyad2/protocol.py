"""AD2 protocol encoder and decoder."""

import logging
import re
from dataclasses import dataclass

from .const.protocol import (
    ENTER_CODE_PREFIX,
    EXPANDER_PREFIX,
    EXPANDER_SEPARATOR,
    FIELD_DELIMITER,
    KEYPAD_PREFIX,
    QUOTE,
    ZONE_RESTORED,
)
from .exceptions import AD2ProtocolError
from .status import BitStatus, decode_bit_field

_LOGGER = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class ZoneTransition:
    """Zone expander message (!EXP)."""

    expander: str
    channel: str
    faulted: int  # 0 = restored, 1 = faulted

    @property
    def key(self) -> tuple[str, str]:
        """Binding key for this zone."""
        return (self.expander, self.channel)


@dataclass(frozen=True)
class KeypadStatus:
    """Keypad/status message."""

    bits: BitStatus
    numeric: str
    raw_data: str
    message: str
    raw: str


def normalize_keypad_text(text: str | None) -> str:
    """Clean up the quoted keypad text field.

    Trims, collapses whitespace runs, then drops the protocol quoting: the
    first ``' "'`` and every remaining ``"``. This is deliberately liberal and
    does not honour escaped quotes.
    """
    if not text:
        return ""
    text = _WHITESPACE_RUN.sub(" ", text.strip())
    text = text.replace(" " + QUOTE, "", 1)
    text = text.replace(QUOTE, "")
    return text.strip()


class AD2Protocol:
    """AD2 line decoder and keypress encoder."""

    def decode_line(self, line: str) -> ZoneTransition | KeypadStatus | None:
        """Classify and decode one complete line.

        Args:
            line: Line from the framer (carriage returns tolerated)

        Returns:
            - ZoneTransition for !EXP messages
            - KeypadStatus for keypad/status messages
            - None for anything else

        Raises:
            AD2ProtocolError: If a zone or keypad message is malformed
        """
        line = line.rstrip("\r\n")
        if not line:
            return None

        if line.startswith(EXPANDER_PREFIX):
            return self._decode_expander(line)

        if line.startswith(KEYPAD_PREFIX) and FIELD_DELIMITER in line:
            return self._decode_keypad(line)

        return None

    def _decode_expander(self, line: str) -> ZoneTransition:
        # !EXP:00,07,01
        _, sep, payload = line.strip().partition(EXPANDER_SEPARATOR)
        if not sep:
            raise AD2ProtocolError(f"Expander message without payload: {line!r}")

        parts = [p.strip() for p in payload.split(FIELD_DELIMITER)]
        if len(parts) != 3:
            raise AD2ProtocolError(
                f"Expander message needs 3 fields, got {len(parts)}: {line!r}"
            )

        expander, channel, status = parts
        return ZoneTransition(
            expander=expander,
            channel=channel,
            faulted=0 if status == ZONE_RESTORED else 1,
        )

    def _decode_keypad(self, line: str) -> KeypadStatus:
        # [10000001000000000D--],000,[000200000000000000000000],"System Is       Ready To Arm    "
        fields = line.split(FIELD_DELIMITER)
        if len(fields) < 3:
            raise AD2ProtocolError(
                f"Keypad message needs at least 3 fields, got {len(fields)}: {line!r}"
            )

        message = fields[3] if len(fields) > 3 else ""
        return KeypadStatus(
            bits=decode_bit_field(fields[0]),
            numeric=fields[1],
            raw_data=fields[2],
            message=normalize_keypad_text(message),
            raw=line,
        )

    def encode_keys(self, keys: str | bytes) -> bytes:
        """Encode raw keypresses; no framing is added."""
        if isinstance(keys, bytes):
            return keys
        return keys.encode()

    def encode_code(self, code: str) -> bytes:
        """Encode a user code entry (``#`` followed by the code)."""
        return self.encode_keys(f"{ENTER_CODE_PREFIX}{code}")
