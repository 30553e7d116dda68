"""Polling coordinator for the Griddy Price integration."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime
import logging
from typing import Any

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback
from homeassistant.helpers.event import async_call_later
from homeassistant.util import dt as dt_util

from .api import GriddyApiClient, GriddyApiClientError, GriddyProtocolError
from .const import DOMAIN
from .models import CachedProperty, PollConfig, PollState

_LOGGER = logging.getLogger(__name__)


class GriddyPriceCoordinator:
    """Poll the Griddy endpoint and cache the last good reading.

    A tick fetches once, updates the cache on success and always schedules
    the next tick after it finishes, so fetches never overlap. Failures keep
    the previous reading and notify nobody.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        client: GriddyApiClient,
        config: PollConfig,
        name: str = DOMAIN,
    ) -> None:
        """Initialize the coordinator."""
        self.hass = hass
        self.name = name
        self.config = config
        self.data = CachedProperty()
        self.state = PollState.IDLE
        self.last_exception: GriddyApiClientError | None = None
        self._client = client
        self._listeners: dict[CALLBACK_TYPE, tuple[CALLBACK_TYPE, Any]] = {}
        self._busy = False
        self._running = False
        self._tick_task: asyncio.Task[None] | None = None
        self._unsub_refresh: CALLBACK_TYPE | None = None

    @property
    def last_update_success(self) -> bool:
        """Return whether the most recent tick succeeded."""
        return self.last_exception is None

    @property
    def is_running(self) -> bool:
        """Return whether the polling loop is scheduled."""
        return self._running

    @callback
    def async_add_listener(
        self, update_callback: CALLBACK_TYPE, context: Any = None
    ) -> Callable[[], None]:
        """Listen for new readings. Returns a function that removes the listener."""

        @callback
        def remove_listener() -> None:
            """Remove update listener."""
            self._listeners.pop(remove_listener, None)

        self._listeners[remove_listener] = (update_callback, context)
        return remove_listener

    @callback
    def async_update_listeners(self) -> None:
        """Notify every listener of a new reading."""
        for update_callback, _ in list(self._listeners.values()):
            update_callback()

    @callback
    def async_start(self) -> None:
        """Start polling with an immediate first tick."""
        if self._running:
            return
        self._running = True
        _LOGGER.info(
            "Polling Griddy price for meter %s every %s",
            self.config.meter_id,
            self.config.poll_interval,
        )
        self._async_launch_tick()

    async def async_stop(self) -> None:
        """Stop polling: cancel the pending timer and wait for an in-flight tick."""
        self._running = False
        self._async_cancel_refresh()
        task = self._tick_task
        if task is not None and not task.done():
            try:
                await task
            except Exception:
                _LOGGER.exception("Griddy poll failed while stopping")
        self._tick_task = None
        _LOGGER.info("Stopped polling Griddy price for meter %s", self.config.meter_id)

    async def async_request_refresh(self) -> None:
        """Poll now unless a fetch is already in flight."""
        if (task := self._async_launch_tick()) is not None:
            await task

    @callback
    def _async_launch_tick(self) -> asyncio.Task[None] | None:
        """Start a tick as the tracked task, unless one is still running."""
        if self._tick_task is not None and not self._tick_task.done():
            _LOGGER.debug("Griddy poll already in progress, skipping")
            return None
        self._tick_task = self.hass.async_create_task(
            self._async_tick(), f"{self.name} poll"
        )
        return self._tick_task

    @callback
    def _async_cancel_refresh(self) -> None:
        if self._unsub_refresh is not None:
            self._unsub_refresh()
            self._unsub_refresh = None

    @callback
    def _handle_refresh_interval(self, _now: datetime) -> None:
        """Run the scheduled tick."""
        self._unsub_refresh = None
        if self._running:
            self._async_launch_tick()

    @callback
    def _async_schedule_refresh(self) -> None:
        """Schedule exactly one future tick."""
        self._async_cancel_refresh()
        if not self._running:
            return
        _LOGGER.debug("Next Griddy poll in %s", self.config.poll_interval)
        self._unsub_refresh = async_call_later(
            self.hass, self.config.poll_interval, self._handle_refresh_interval
        )

    async def _async_tick(self) -> None:
        """Fetch once, update the cache on success, then reschedule."""
        if self._busy:
            _LOGGER.debug("Griddy poll already in progress, skipping")
            return

        self._busy = True
        self.state = PollState.POLLING
        try:
            reading = await self._client.async_get_price(self.config)
        except GriddyApiClientError as err:
            self.state = PollState.FAILED
            self.last_exception = err
            if isinstance(err, GriddyProtocolError):
                _LOGGER.warning(
                    "Error getting value from Griddy, status code %s: %s",
                    err.status,
                    err.body,
                )
            else:
                _LOGGER.warning(
                    "Error getting value from Griddy (%s): %s",
                    type(err).__name__,
                    err,
                )
        else:
            self.state = PollState.UPDATED
            self.last_exception = None
            self.data.current_value = reading
            self.data.last_updated = dt_util.utcnow()
            _LOGGER.debug("Griddy price: %s", reading.formatted)
            self.async_update_listeners()
        finally:
            self._busy = False
            self.state = PollState.IDLE
            self._async_schedule_refresh()
