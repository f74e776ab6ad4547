"""Error types surfaced by the Milton client."""

from __future__ import annotations


class MiltonError(Exception):
    """Base class for failures reported by the Milton client."""


class TransportError(MiltonError):
    """Raised when a request cannot be sent or its response cannot be parsed."""


class ProtocolError(MiltonError):
    """Raised when the device answers with a rejecting status code."""

    def __init__(self, message: str, status_code: int) -> None:
        """Store the status code alongside the message."""

        super().__init__(message)
        self.status_code = status_code


class InvalidRange(MiltonError, ValueError):
    """Raised when an LED range has its lower bound above its upper bound."""


class ConfigError(MiltonError):
    """Raised when the client configuration is invalid."""
