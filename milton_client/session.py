"""Cached resolution of the current user session."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar, Union

import httpx

from .const import IDENTIFY_PATH
from .models import IdentifyResponse, UserInfo
from .result import Just, Maybe, Nothing, from_nullable

_LOGGER = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class NotRequested:
    """No identity check has been attempted yet."""

    def case_of(
        self,
        *,
        not_requested: Callable[[], R],
        available: Callable[[UserInfo], R],
        not_available: Callable[[], R],
    ) -> R:
        return not_requested()


@dataclass(frozen=True)
class Available:
    """An identity check found a logged-in user."""

    user: UserInfo

    def case_of(
        self,
        *,
        not_requested: Callable[[], R],
        available: Callable[[UserInfo], R],
        not_available: Callable[[], R],
    ) -> R:
        return available(self.user)


@dataclass(frozen=True)
class NotAvailable:
    """An identity check completed without a logged-in user."""

    def case_of(
        self,
        *,
        not_requested: Callable[[], R],
        available: Callable[[UserInfo], R],
        not_available: Callable[[], R],
    ) -> R:
        return not_available()


SessionState = Union[NotRequested, Available, NotAvailable]


class SessionResolver:
    """Resolve the current session at most once per resolver lifetime.

    The first call to :meth:`async_current` issues the identity check; every
    later call answers from the cached state. Callers that arrive while the
    check is still in flight await the same request instead of starting
    their own.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Bind the resolver to the HTTP client used for the identity check."""

        self._client = client
        self._state: SessionState = NotRequested()
        self._pending: asyncio.Task[Maybe[UserInfo]] | None = None

    @property
    def state(self) -> SessionState:
        """Return the cached session state."""

        return self._state

    async def async_current(self) -> Maybe[UserInfo]:
        """Return the logged-in user, or ``Nothing`` when there is none."""

        cached: Maybe[UserInfo] | None = self._state.case_of(
            not_requested=lambda: None,
            available=Just,
            not_available=Nothing,
        )
        if cached is not None:
            return cached

        if self._pending is None:
            _LOGGER.debug(
                'session not yet requested, attempting to load from "%s"',
                self._client.base_url,
            )
            self._pending = asyncio.ensure_future(self._async_identify())
        # A cancelled caller must not cancel the request other callers share.
        return await asyncio.shield(self._pending)

    async def _async_identify(self) -> Maybe[UserInfo]:
        try:
            response = await self._client.get(IDENTIFY_PATH)
            if response.status_code != 200:
                _LOGGER.debug(
                    "invalid identify response status %s, skipping",
                    response.status_code,
                )
                self._state = NotAvailable()
                return Nothing()
            payload = IdentifyResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as err:
            _LOGGER.debug("unable to request session - %s", err)
            self._state = NotAvailable()
            return Nothing()
        finally:
            self._pending = None

        user = from_nullable(payload.session)
        self._state = user.map(Available).get_or_else(NotAvailable())
        return user
