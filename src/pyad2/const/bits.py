"""Keypad status bit positions.

The first field of a keypad message is a positional string where the n-th
character describes one panel flag (1-based, a leading ``[`` excluded), e.g.::

    [10000001000000000D--]
     ^      ^         ^
     Ready  AC power  Device mode
"""

from enum import Enum


class StatusBit(int, Enum):
    """Protocol bit positions (1-based)."""

    READY = 1
    ARMED_AWAY = 2
    ARMED_HOME = 3
    BACKLIGHT_ON = 4
    PROGRAMMING = 5
    BEEPS = 6
    ZONE_BYPASSED = 7
    AC_POWER = 8
    CHIME_ENABLED = 9
    ALARM_OCCURRED = 10
    ALARM_ON = 11
    BATTERY_LOW = 12
    ENTRY_DELAY_OFF = 13
    FIRE = 14
    SYSTEM_ISSUE = 15
    WATCHING_PERIMETER = 16
    ERROR_REPORT = 17
    DEVICE_MODE = 18


class DeviceMode(str, Enum):
    """Panel family reported at bit 18."""

    DSC = "DSC"
    ADEMCO = "Ademco"
    UNKNOWN = "-"


BIT_LABELS: dict[StatusBit, str] = {
    StatusBit.READY: "Ready",
    StatusBit.ARMED_AWAY: "Armed Away",
    StatusBit.ARMED_HOME: "Armed Home",
    StatusBit.BACKLIGHT_ON: "Backlight on",
    StatusBit.PROGRAMMING: "Programming",
    StatusBit.BEEPS: "Beeps",
    StatusBit.ZONE_BYPASSED: "Zone bypassed",
    StatusBit.AC_POWER: "AC power",
    StatusBit.CHIME_ENABLED: "Chime enabled",
    StatusBit.ALARM_OCCURRED: "Alarm occurred",
    StatusBit.ALARM_ON: "Alarm on",
    StatusBit.BATTERY_LOW: "Battery low",
    StatusBit.ENTRY_DELAY_OFF: "Entry delay off",
    StatusBit.FIRE: "Fire",
    StatusBit.SYSTEM_ISSUE: "System issue",
    StatusBit.WATCHING_PERIMETER: "Watching perimeter",
    StatusBit.ERROR_REPORT: "Error report",
    StatusBit.DEVICE_MODE: "Device mode",
}

# Bits carrying the digit value of their character instead of a flag
COUNTER_BITS = frozenset({StatusBit.BEEPS, StatusBit.ZONE_BYPASSED})

FLAG_SET = "1"
DSC_MODE_CHAR = "D"
