"""Client for the Milton device control service.

The package exposes the session resolver, the immutable LED pattern model and
the device API client. All network outcomes are returned as ``Result`` or
``Maybe`` values rather than raised.
"""

from __future__ import annotations

from .api import MiltonAPIClient
from .config import ApiConfig, load_config
from .errors import (
    ConfigError,
    InvalidRange,
    MiltonError,
    ProtocolError,
    TransportError,
)
from .pattern import Frame, LedColor, PatternState
from .result import Err, Just, Maybe, Nothing, Ok, Result, from_nullable
from .session import Available, NotAvailable, NotRequested, SessionResolver

__all__ = [
    "ApiConfig",
    "Available",
    "ConfigError",
    "Err",
    "Frame",
    "InvalidRange",
    "Just",
    "LedColor",
    "Maybe",
    "MiltonAPIClient",
    "MiltonError",
    "NotAvailable",
    "NotRequested",
    "Nothing",
    "Ok",
    "PatternState",
    "ProtocolError",
    "Result",
    "SessionResolver",
    "TransportError",
    "from_nullable",
    "load_config",
]
