"""Shared test helpers for Griddy Price tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

from custom_components.griddy_price.const import (
    CONF_MEMBER_ID,
    CONF_METER_ID,
    CONF_SETTLEMENT_POINT,
)

ENTRY_DATA = {
    CONF_METER_ID: "1008901023809000000000",
    CONF_MEMBER_ID: "member-42",
    CONF_SETTLEMENT_POINT: "LZ_HOUSTON",
}


def make_now_body(price_display: Any = "2.34", sign: str = "¢") -> dict:
    """Create a getnow response body.

    Args:
        price_display: Value of now.price_display.
        sign: Value of now.price_display_sign.

    Returns:
        Dict matching the getnow JSON response.
    """
    return {
        "now": {
            "date": "2026-10-19T14:30:00Z",
            "price_ckwh": "2.3400",
            "price_display": price_display,
            "price_display_sign": sign,
            "value_score": 11,
        },
        "forecast": [],
    }


def make_session(
    status: int = 200,
    json_data: Any = None,
    text: str = "",
    side_effect: BaseException | None = None,
) -> MagicMock:
    """Create a mock aiohttp session whose post() returns one response."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)
    session = MagicMock()
    session.post = AsyncMock(return_value=response, side_effect=side_effect)
    return session


def make_config_entry(entry_id="test_entry_id"):
    """Create a mock ConfigEntry for testing."""
    entry = MagicMock()
    entry.entry_id = entry_id
    entry.data = dict(ENTRY_DATA)
    entry.options = {}
    return entry
