"""Exceptions raised by pyad2."""

from __future__ import annotations


class AD2Error(Exception):
    """Base exception for all pyad2 errors."""


class AD2ConnectionError(AD2Error):
    """Raised when the bridge is not connected or a write fails."""


class AD2ProtocolError(AD2Error):
    """Raised when a line looks like a protocol message but cannot be decoded."""


class AD2BufferOverflowError(AD2ProtocolError):
    """Raised when the bridge sends more than the allowed line length without a newline.

    ``lines`` holds the complete lines that preceded the over-long tail in the
    same chunk; they are still valid and should be processed.
    """

    def __init__(self, message: str, lines: list[str] | None = None):
        super().__init__(message)
        self.lines = lines or []


class AD2ConfigError(AD2Error, ValueError):
    """Raised for an invalid zone binding table or client configuration."""
