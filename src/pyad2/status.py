"""Keypad bit-status model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Union

from .const.bits import (
    BIT_LABELS,
    COUNTER_BITS,
    DSC_MODE_CHAR,
    FLAG_SET,
    DeviceMode,
    StatusBit,
)
from .const.protocol import KEYPAD_PREFIX

_LOGGER = logging.getLogger(__name__)

BitValue = Union[bool, int, DeviceMode]


@dataclass(frozen=True)
class BitStatus:
    """Full snapshot of the 18 keypad status bits.

    Field order follows the bit positions; every field always holds a value.
    """

    ready: bool = False
    armed_away: bool = False
    armed_home: bool = False
    backlight_on: bool = False
    programming: bool = False
    beeps: int = 0
    zone_bypassed: int = 0
    ac_power: bool = False
    chime_enabled: bool = False
    alarm_occurred: bool = False
    alarm_on: bool = False
    battery_low: bool = False
    entry_delay_off: bool = False
    fire: bool = False
    system_issue: bool = False
    watching_perimeter: bool = False
    error_report: bool = False
    device_mode: DeviceMode = DeviceMode.UNKNOWN

    def get(self, bit: StatusBit | int) -> BitValue:
        """Return the value stored at a protocol bit position."""
        return getattr(self, StatusBit(bit).name.lower())

    def as_dict(self) -> dict[str, BitValue]:
        """Return the snapshot keyed by bit label, in position order."""
        return {BIT_LABELS[bit]: self.get(bit) for bit in StatusBit}


def _default_for(bit: StatusBit) -> BitValue:
    for f in fields(BitStatus):
        if f.name == bit.name.lower():
            return f.default
    raise KeyError(bit)


def _decode_char(bit: StatusBit, char: str) -> BitValue:
    if bit in COUNTER_BITS:
        if char.isdecimal():
            return int(char)
        _LOGGER.debug("Non-numeric character %r at bit %d, using 0", char, bit.value)
        return 0
    if bit is StatusBit.DEVICE_MODE:
        return DeviceMode.DSC if char == DSC_MODE_CHAR else DeviceMode.ADEMCO
    return char == FLAG_SET


def decode_bit_field(text: str) -> BitStatus:
    """Decode a positional bit field into a complete BitStatus.

    A leading ``[`` is ignored, so the first field of a keypad message can be
    passed unchanged. Positions past the end of the text keep their default
    value (False, 0, or DeviceMode.UNKNOWN).
    """
    if text.startswith(KEYPAD_PREFIX):
        text = text[len(KEYPAD_PREFIX) :]

    values: dict[str, BitValue] = {}
    for bit in StatusBit:
        if bit.value <= len(text):
            values[bit.name.lower()] = _decode_char(bit, text[bit.value - 1])
        else:
            values[bit.name.lower()] = _default_for(bit)

    return BitStatus(**values)
