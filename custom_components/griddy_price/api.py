"""Client for the Griddy getnow pricing endpoint."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .const import API_CONNECT_TIMEOUT, API_REQUEST_TIMEOUT, API_URL
from .models import PollConfig, PriceReading

_LOGGER = logging.getLogger(__name__)

HTTP_OK = 200


class GriddyApiClientError(Exception):
    """Base class for a failed price fetch."""


class GriddyTransportError(GriddyApiClientError):
    """The request never produced a response (DNS, timeout, connection reset)."""

    TIMEOUT_ERROR = "Timeout fetching price after {timeout}s"
    CONNECTION_ERROR = "Error fetching price - {exception}"


class GriddyProtocolError(GriddyApiClientError):
    """The endpoint answered with a status other than 200."""

    STATUS_ERROR = "Unexpected HTTP status {status}"

    def __init__(self, status: int, body: str = "") -> None:
        """Keep the status and a short body excerpt for diagnostics."""
        super().__init__(self.STATUS_ERROR.format(status=status))
        self.status = status
        self.body = body


class GriddyFormatError(GriddyApiClientError):
    """The response body does not have the expected shape."""

    INVALID_JSON = "Response body is not valid JSON"
    MISSING_NOW = "Response has no 'now' object"
    MISSING_FIELD = "Response 'now' object has no '{field}'"


class GriddyApiClient:
    """Fetch the current price for one meter."""

    def __init__(self, session: aiohttp.ClientSession) -> None:
        """Initialize with a shared aiohttp session."""
        self._session = session
        self._timeout = aiohttp.ClientTimeout(
            total=API_REQUEST_TIMEOUT,
            connect=API_CONNECT_TIMEOUT,
        )

    async def async_get_price(self, config: PollConfig) -> PriceReading:
        """Perform one request and return the normalized reading.

        Raises:
            GriddyTransportError: The request failed before a response arrived.
            GriddyProtocolError: The status code was not 200.
            GriddyFormatError: The body is missing now.price_display or
                now.price_display_sign.

        """
        body = await self._async_post(config.as_request_body())
        return parse_price_response(body)

    async def _async_post(self, payload: dict[str, str]) -> Any:
        """POST the payload and return the decoded JSON body."""
        _LOGGER.debug("Requesting Griddy price with %s", payload)
        try:
            response = await self._session.post(
                API_URL,
                json=payload,
                timeout=self._timeout,
            )
            if response.status != HTTP_OK:
                text = await response.text()
                raise GriddyProtocolError(response.status, text[:200])
            data = await response.json(content_type=None)
        except ValueError as error:
            raise GriddyFormatError(GriddyFormatError.INVALID_JSON) from error
        except TimeoutError as error:
            raise GriddyTransportError(
                GriddyTransportError.TIMEOUT_ERROR.format(timeout=API_REQUEST_TIMEOUT)
            ) from error
        except (aiohttp.ClientError, OSError) as error:
            raise GriddyTransportError(
                GriddyTransportError.CONNECTION_ERROR.format(exception=error)
            ) from error

        _LOGGER.debug("Received Griddy response: %s", data)
        return data


def parse_price_response(body: Any) -> PriceReading:
    """Extract a PriceReading from a decoded getnow response body."""
    now = body.get("now") if isinstance(body, dict) else None
    if not isinstance(now, dict):
        raise GriddyFormatError(GriddyFormatError.MISSING_NOW)

    for field in ("price_display", "price_display_sign"):
        if now.get(field) is None:
            raise GriddyFormatError(GriddyFormatError.MISSING_FIELD.format(field=field))

    return PriceReading(
        display_value=now["price_display"],
        sign=now["price_display_sign"],
    )
