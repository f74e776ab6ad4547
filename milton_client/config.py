"""Configuration loading for the Milton client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import voluptuous as vol

from .const import (
    DEFAULT_API_ROOT,
    DEFAULT_LOGIN_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SNAPSHOT_URL,
    DEFAULT_VERSION,
    ENV_API_ROOT,
    ENV_LOGIN_URL,
    ENV_REQUEST_TIMEOUT,
    ENV_SNAPSHOT_URL,
    ENV_VERSION,
)
from .errors import ConfigError


def _http_url(value: Any) -> str:
    """Validate that ``value`` is an absolute http(s) URL."""

    url = vol.Coerce(str)(value).strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise vol.Invalid(f"expected an http(s) URL, got {value!r}")
    return url


def _api_root(value: Any) -> str:
    url = _http_url(value)
    return url if url.endswith("/") else f"{url}/"


_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(ENV_API_ROOT, default=DEFAULT_API_ROOT): _api_root,
        vol.Optional(ENV_LOGIN_URL, default=DEFAULT_LOGIN_URL): _http_url,
        vol.Optional(ENV_SNAPSHOT_URL, default=DEFAULT_SNAPSHOT_URL): _http_url,
        vol.Optional(ENV_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(ENV_VERSION, default=DEFAULT_VERSION): str,
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class ApiConfig:
    """Endpoints and request settings injected into the client."""

    root_url: str = DEFAULT_API_ROOT
    login_url: str = DEFAULT_LOGIN_URL
    snapshot_url: str = DEFAULT_SNAPSHOT_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    version: str = DEFAULT_VERSION


def load_config(environ: Mapping[str, str] | None = None) -> ApiConfig:
    """Build an ``ApiConfig`` from ``MILTON_*`` environment variables.

    Empty variables fall back to their defaults. Raises ``ConfigError`` when a
    value fails validation.
    """

    source = os.environ if environ is None else environ
    raw = {key: value for key, value in source.items() if value != ""}
    try:
        data = _CONFIG_SCHEMA(raw)
    except vol.Invalid as err:
        msg = f"Invalid Milton configuration: {err}"
        raise ConfigError(msg) from err
    return ApiConfig(
        root_url=data[ENV_API_ROOT],
        login_url=data[ENV_LOGIN_URL],
        snapshot_url=data[ENV_SNAPSHOT_URL],
        request_timeout=data[ENV_REQUEST_TIMEOUT],
        version=data[ENV_VERSION],
    )
