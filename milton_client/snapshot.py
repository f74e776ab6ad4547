"""Periodic refresh of the device camera snapshot URL."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Awaitable, Callable, Coroutine
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .const import SNAPSHOT_REFRESH_INTERVAL

_LOGGER = logging.getLogger(__name__)


def snapshot_url(src: str, now: datetime | None = None) -> str:
    """Return ``src`` with a cache-busting ``t`` query parameter.

    The token is the base64 encoding of the epoch milliseconds of ``now``.
    """

    if now is None:
        now = datetime.now(timezone.utc)
    millis = str(int(now.timestamp() * 1000))
    token = base64.b64encode(millis.encode("ascii")).decode("ascii")
    parts = urlsplit(src)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != "t"
    ]
    query.append(("t", token))
    return urlunsplit(parts._replace(query=urlencode(query, safe="=/")))


class SnapshotPoller:
    """Hand a fresh snapshot URL to ``callback`` every ``interval``.

    The timer runs until :meth:`cancel` is called; requests already started
    by the callback are left to finish.
    """

    def __init__(
        self,
        src: str,
        callback: Callable[[str], Awaitable[Any] | None],
        *,
        interval: timedelta = SNAPSHOT_REFRESH_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Store the snapshot source, callback and refresh interval."""

        self._src = src
        self._callback = callback
        self._interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending_tasks: set[asyncio.Task[Any]] = set()

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Emit a snapshot URL now and schedule the following ones."""

        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        _LOGGER.debug("starting snapshot polling on %s", self._src)
        self._tick()

    def cancel(self) -> None:
        """Stop scheduling further refreshes."""

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            _LOGGER.debug("stopped snapshot polling on %s", self._src)

    def _tick(self) -> None:
        assert self._loop is not None
        # Scheduled first so a cancel() issued by the callback sticks.
        self._handle = self._loop.call_later(
            self._interval.total_seconds(), self._tick
        )
        try:
            result = self._callback(snapshot_url(self._src))
        except Exception:
            _LOGGER.exception("snapshot refresh callback failed for %s", self._src)
            return
        if isinstance(result, Coroutine):
            task = self._loop.create_task(result)
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)
