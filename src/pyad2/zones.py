"""Zone binding configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .const.protocol import EXPANDER_SEPARATOR
from .exceptions import AD2ConfigError

_LOGGER = logging.getLogger(__name__)


class ZoneMode(str, Enum):
    """How zone transitions are handled."""

    BOUND = "bound"  # emit zoneChanged for zones in the binding table
    DEBUG_LOG = "debug_log"  # log every transition, emit nothing


def _normalize_id(value: str) -> str:
    """Zero-pad numeric expander/channel ids to two digits."""
    value = value.strip()
    if value.isdecimal():
        return value.zfill(2)
    return value


def _parse_key(key: str) -> tuple[str, str]:
    expander, sep, channel = str(key).partition(EXPANDER_SEPARATOR)
    expander, channel = expander.strip(), channel.strip()
    if not sep or not expander or not channel or EXPANDER_SEPARATOR in channel:
        raise AD2ConfigError(f"Invalid zone key {key!r}, expected '<expander>:<channel>'")
    return _normalize_id(expander), _normalize_id(channel)


@dataclass(frozen=True)
class ZoneConfig:
    """Zone mode plus the (expander, channel) -> zone binding table."""

    mode: ZoneMode
    bindings: Mapping[tuple[str, str], Any] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def bound(cls, table: Mapping[str, Any]) -> "ZoneConfig":
        """Build a bound config from ``"<expander>:<channel>"`` keys.

        Raises:
            AD2ConfigError: If the table is not a mapping or a key is invalid
        """
        if not isinstance(table, Mapping):
            raise AD2ConfigError(f"Zone table must be a mapping, got {type(table).__name__}")

        bindings: dict[tuple[str, str], Any] = {}
        for key, zone in table.items():
            parsed = _parse_key(key)
            if parsed in bindings:
                raise AD2ConfigError(f"Duplicate zone key {key!r}")
            bindings[parsed] = zone

        _LOGGER.debug(f"Bound {len(bindings)} zones")
        return cls(mode=ZoneMode.BOUND, bindings=MappingProxyType(bindings))

    @classmethod
    def debug_log(cls) -> "ZoneConfig":
        """Build a config that only logs zone transitions."""
        return cls(mode=ZoneMode.DEBUG_LOG)

    @classmethod
    def from_table(cls, table: Mapping[str, Any] | None) -> "ZoneConfig":
        """Bound mode for a table, debug-log mode for None."""
        if table is None:
            return cls.debug_log()
        return cls.bound(table)

    def lookup(self, expander: str, channel: str) -> Any | None:
        """Return the zone bound to an expander channel, if any.

        Ids are normalized the same way as binding keys, so ``("0", "7")``
        finds a ``"00:07"`` binding.
        """
        return self.bindings.get((_normalize_id(expander), _normalize_id(channel)))
