"""View controllers built on the session, pattern and API layers."""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from . import pattern as patterns
from .api import MiltonAPIClient
from .const import DEFAULT_LED_RANGE
from .errors import MiltonError
from .models import DeviceStatus, PrinterModel
from .pattern import LedColor, PatternState
from .result import Result
from .session import SessionResolver
from .snapshot import SnapshotPoller

_LOGGER = logging.getLogger(__name__)


class Route(enum.Enum):
    """Pages of the front end."""

    PRINTER = "printer"
    PATTERNS = "patterns"
    LOGIN = "login"
    MISSING = "missing"


PROTECTED_ROUTES = frozenset({Route.PRINTER, Route.PATTERNS})


async def async_guard(resolver: SessionResolver, route: Route) -> Route:
    """Return the route to show when ``route`` is requested.

    Protected pages send anonymous users to the login page; the login page
    sends users who already have a session to the printer page.
    """

    if route not in PROTECTED_ROUTES and route is not Route.LOGIN:
        return route
    session = await resolver.async_current()
    logged_in = session.case_of(just=lambda _user: True, nothing=lambda: False)
    if route is Route.LOGIN and logged_in:
        _LOGGER.debug("user already logged in, sending to printer")
        return Route.PRINTER
    if route in PROTECTED_ROUTES and not logged_in:
        _LOGGER.debug("no user info ready, redirecting to login")
        return Route.LOGIN
    return route


class PatternEditor:
    """Author a pattern and submit it to the device."""

    def __init__(
        self,
        api: MiltonAPIClient,
        led_range: tuple[int, int] = DEFAULT_LED_RANGE,
    ) -> None:
        self._api = api
        self._led_range = led_range
        self.state: PatternState = patterns.empty()
        self.busy = False

    @property
    def has_frames(self) -> bool:
        return patterns.has_frames(self.state)

    @property
    def disabled(self) -> bool:
        """Submission is disabled without frames or while a write is running."""

        return not self.has_frames or self.busy

    def add_frame(self) -> PatternState:
        _LOGGER.debug("adding new frame")
        self.state = patterns.add_frame(self.state, self._led_range)
        return self.state

    def set_color(self, frame_index: int, ledn: int, hex_value: str) -> PatternState:
        _LOGGER.debug(
            'setting frame[%s] led[%s] - "%s"', frame_index, ledn, hex_value
        )
        self.state = patterns.set_color(
            self.state, frame_index, LedColor(ledn=ledn, hex=hex_value)
        )
        return self.state

    async def async_submit(self) -> Result[MiltonError, None]:
        """Send the current pattern; ``busy`` is cleared whatever the outcome."""

        self.busy = True
        _LOGGER.debug("submitting pattern %s", self.state.as_payload())
        try:
            result = await self._api.async_write_pattern(self.state)
        finally:
            self.busy = False
        result.case_of(
            ok=lambda _: _LOGGER.debug("pattern written"),
            err=lambda error: _LOGGER.warning("unable to write pattern - %s", error),
        )
        return result


class PrinterView:
    """Printer status, light switch and live snapshot."""

    def __init__(self, api: MiltonAPIClient) -> None:
        self._api = api
        self._poller: SnapshotPoller | None = None

    async def async_load(self) -> Result[MiltonError, PrinterModel]:
        """Load the status and pair it with the snapshot URL."""

        _LOGGER.debug("loading printer model")
        snapshot = self._api.config.snapshot_url
        result = await self._api.async_query()
        return result.map(lambda status: _printer_model(status, snapshot))

    async def async_toggle_light(self, state: bool) -> Result[MiltonError, bool]:
        _LOGGER.debug('toggling light "%s"', state)
        result = await self._api.async_toggle_light(state)
        result.case_of(
            ok=lambda _: _LOGGER.debug("successfully toggled light"),
            err=lambda error: _LOGGER.warning("unable to toggle - %s", error),
        )
        return result

    def start_snapshot_refresh(
        self, callback: Callable[[str], Awaitable[Any] | None]
    ) -> SnapshotPoller:
        """Begin handing refreshed snapshot URLs to ``callback``."""

        self.stop()
        self._poller = SnapshotPoller(self._api.config.snapshot_url, callback)
        self._poller.start()
        return self._poller

    def stop(self) -> None:
        """Tear down the snapshot refresh timer."""

        if self._poller is not None:
            self._poller.cancel()
            self._poller = None


def _printer_model(status: DeviceStatus, snapshot_url: str) -> PrinterModel:
    return PrinterModel(status=status, snapshot_url=snapshot_url)
