"""Tests for the Griddy API client."""

from __future__ import annotations

import socket

import aiohttp
import pytest

from custom_components.griddy_price.api import (
    GriddyApiClient,
    GriddyApiClientError,
    GriddyFormatError,
    GriddyProtocolError,
    GriddyTransportError,
    parse_price_response,
)
from custom_components.griddy_price.const import API_REQUEST_TIMEOUT, API_URL
from custom_components.griddy_price.models import PriceReading
from tests.helpers import ENTRY_DATA, make_now_body, make_session


class TestGetPrice:
    """Tests for one fetch against a mocked session."""

    async def test_success_returns_reading(self, poll_config):
        client = GriddyApiClient(make_session(json_data=make_now_body("2.34", "¢")))

        reading = await client.async_get_price(poll_config)

        assert reading == PriceReading(display_value="2.34", sign="¢")
        assert reading.formatted == "2.34¢/kWh"

    async def test_posts_identifiers_as_json(self, poll_config):
        session = make_session(json_data=make_now_body())
        client = GriddyApiClient(session)

        await client.async_get_price(poll_config)

        session.post.assert_awaited_once()
        args, kwargs = session.post.call_args
        assert args[0] == API_URL
        assert kwargs["json"] == {
            "meterID": ENTRY_DATA["meter_id"],
            "memberID": ENTRY_DATA["member_id"],
            "settlement_point": ENTRY_DATA["settlement_point"],
        }

    async def test_request_has_explicit_timeout(self, poll_config):
        session = make_session(json_data=make_now_body())
        client = GriddyApiClient(session)

        await client.async_get_price(poll_config)

        timeout = session.post.call_args.kwargs["timeout"]
        assert isinstance(timeout, aiohttp.ClientTimeout)
        assert timeout.total == API_REQUEST_TIMEOUT

    @pytest.mark.parametrize("status", [400, 404, 500, 503])
    async def test_non_200_is_protocol_error(self, poll_config, status):
        client = GriddyApiClient(make_session(status=status, text="upstream down"))

        with pytest.raises(GriddyProtocolError) as excinfo:
            await client.async_get_price(poll_config)

        assert excinfo.value.status == status
        assert excinfo.value.body == "upstream down"
        assert str(status) in str(excinfo.value)

    async def test_protocol_error_body_is_truncated(self, poll_config):
        client = GriddyApiClient(make_session(status=502, text="x" * 1000))

        with pytest.raises(GriddyProtocolError) as excinfo:
            await client.async_get_price(poll_config)

        assert len(excinfo.value.body) == 200

    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("Connection reset by peer"),
            aiohttp.ServerDisconnectedError(),
            socket.gaierror(-2, "Name or service not known"),
            OSError(101, "Network is unreachable"),
        ],
    )
    async def test_connection_failures_are_transport_errors(self, poll_config, error):
        client = GriddyApiClient(make_session(side_effect=error))

        with pytest.raises(GriddyTransportError) as excinfo:
            await client.async_get_price(poll_config)

        assert excinfo.value.__cause__ is error

    async def test_timeout_is_transport_error(self, poll_config):
        client = GriddyApiClient(make_session(side_effect=TimeoutError()))

        with pytest.raises(GriddyTransportError, match="Timeout"):
            await client.async_get_price(poll_config)

    async def test_invalid_json_is_format_error(self, poll_config):
        session = make_session()
        session.post.return_value.json.side_effect = ValueError("Expecting value")
        client = GriddyApiClient(session)

        with pytest.raises(GriddyFormatError):
            await client.async_get_price(poll_config)

    async def test_missing_now_is_format_error(self, poll_config):
        client = GriddyApiClient(make_session(json_data={"forecast": []}))

        with pytest.raises(GriddyFormatError, match="now"):
            await client.async_get_price(poll_config)

    async def test_all_errors_share_base_class(self, poll_config):
        client = GriddyApiClient(make_session(status=500))

        with pytest.raises(GriddyApiClientError):
            await client.async_get_price(poll_config)


class TestParsePriceResponse:
    """Tests for response body validation."""

    def test_numeric_price_display(self):
        reading = parse_price_response(make_now_body(price_display=2.34))
        assert reading.display_value == 2.34
        assert reading.value == pytest.approx(2.34)

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"now": None},
            {"now": "2.34"},
            {"now": []},
            [],
            None,
            "now",
        ],
    )
    def test_bad_now_object(self, body):
        with pytest.raises(GriddyFormatError):
            parse_price_response(body)

    def test_missing_price_display(self):
        body = make_now_body()
        del body["now"]["price_display"]
        with pytest.raises(GriddyFormatError, match="price_display"):
            parse_price_response(body)

    def test_missing_price_display_sign(self):
        body = make_now_body()
        del body["now"]["price_display_sign"]
        with pytest.raises(GriddyFormatError, match="price_display_sign"):
            parse_price_response(body)

    def test_null_price_display(self):
        with pytest.raises(GriddyFormatError):
            parse_price_response(make_now_body(price_display=None))
