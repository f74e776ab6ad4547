"""HTTP client for the Milton device control service.

Every operation performs a single request and converts its outcome into a
``Result``: transport failures become ``Err(TransportError)``, rejecting
status codes become ``Err(ProtocolError)``. Nothing is raised past this
module.
"""

from __future__ import annotations

import logging

import httpx

from .config import ApiConfig
from .const import CONTROL_PATH, PATTERN_PATH
from .errors import MiltonError, ProtocolError, TransportError
from .models import DeviceStatus
from .pattern import PatternState
from .result import Err, Ok, Result
from .session import SessionResolver

_LOGGER = logging.getLogger(__name__)


def _create_http_client(config: ApiConfig) -> httpx.AsyncClient:
    """Return an httpx async client rooted at the configured API URL."""

    return httpx.AsyncClient(
        base_url=config.root_url,
        timeout=config.request_timeout,
        headers={"Accept": "application/json"},
    )


class MiltonAPIClient:
    """Device status, light and pattern operations."""

    def __init__(
        self, config: ApiConfig, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """Store the configuration and an optional injected HTTP client.

        When ``http_client`` is None the client creates its own on first use
        and closes it in :meth:`async_close`.
        """

        self._config = config
        self._http_client = http_client
        self._owns_client = http_client is None
        self._session: SessionResolver | None = None

    @property
    def config(self) -> ApiConfig:
        return self._config

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating it when none was injected."""

        if self._http_client is None:
            self._http_client = _create_http_client(self._config)
        return self._http_client

    def session(self) -> SessionResolver:
        """Return the session resolver sharing this client's connection."""

        if self._session is None:
            self._session = SessionResolver(self.http_client)
        return self._session

    async def async_query(self) -> Result[MiltonError, DeviceStatus]:
        """Fetch the device status."""

        try:
            response = await self.http_client.get(CONTROL_PATH)
            status = DeviceStatus.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as err:
            _LOGGER.debug("status query failed: %s", err)
            return Err(_transport_error("unable to query device status", err))
        return Ok(status)

    async def async_toggle_light(self, desired: bool) -> Result[MiltonError, bool]:
        """Switch the device light on or off.

        The device does not report the resulting state, so success echoes
        ``desired``.
        """

        body = {"mode": "on" if desired else "off"}
        try:
            response = await self.http_client.post(CONTROL_PATH, json=body)
        except httpx.HTTPError as err:
            _LOGGER.debug("light toggle failed: %s", err)
            return Err(_transport_error("unable to toggle light", err))
        if response.status_code != 200:
            msg = f"unable to toggle light, bad response status {response.status_code}"
            return Err(ProtocolError(msg, response.status_code))
        return Ok(desired)

    async def async_write_pattern(
        self, pattern: PatternState
    ) -> Result[MiltonError, None]:
        """Send ``pattern`` to the device."""

        try:
            response = await self.http_client.post(
                PATTERN_PATH, json=pattern.as_payload()
            )
        except httpx.HTTPError as err:
            _LOGGER.debug("pattern write failed: %s", err)
            return Err(_transport_error("unable to write pattern", err))
        if not response.is_success:
            msg = f"unable to write pattern, bad response status {response.status_code}"
            return Err(ProtocolError(msg, response.status_code))
        return Ok(None)

    async def async_close(self) -> None:
        """Close the HTTP client when this instance created it."""

        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None
            self._session = None


def _transport_error(message: str, cause: Exception) -> TransportError:
    error = TransportError(f"{message}: {cause}")
    error.__cause__ = cause
    return error
