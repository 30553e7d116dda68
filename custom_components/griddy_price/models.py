"""Data model for the Griddy Price integration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from .const import (
    CONF_MEMBER_ID,
    CONF_METER_ID,
    CONF_SETTLEMENT_POINT,
    DEFAULT_POLL_INTERVAL,
    LEGACY_CONF_SETTLEMENT_POINT,
    MIN_POLL_INTERVAL,
    NEGATIVE_SIGN,
    PRICE_UNIT_SUFFIX,
)


class GriddyConfigError(ValueError):
    """Raised when the configured identifiers cannot be used for polling."""


class PollState(StrEnum):
    """Phase of the polling loop."""

    IDLE = "idle"
    POLLING = "polling"
    UPDATED = "updated"
    FAILED = "failed"


def clamp_poll_interval(requested: timedelta) -> timedelta:
    """Return the requested interval, raised to the minimum if below it."""
    return max(requested, MIN_POLL_INTERVAL)


@dataclass(frozen=True)
class PriceReading:
    """One normalized price reading from the getnow endpoint."""

    display_value: str | float
    sign: str
    unit: str = PRICE_UNIT_SUFFIX

    @property
    def formatted(self) -> str:
        """Return the reading as shown by Griddy, e.g. '2.34¢/kWh'."""
        return f"{self.display_value}{self.sign}{self.unit}"

    @property
    def value(self) -> float | None:
        """Return the displayed price as a number, or None if it is not numeric.

        A sign of "-" makes the price negative. Any other sign, such as "¢"
        or "+", only marks the unit and leaves the value as displayed.
        """
        if isinstance(self.display_value, bool):
            return None
        try:
            value = float(self.display_value)
        except (TypeError, ValueError):
            return None
        if self.sign == NEGATIVE_SIGN:
            return -abs(value)
        return value


@dataclass
class CachedProperty:
    """Last known good reading, kept across failed polls."""

    current_value: PriceReading | None = None
    last_updated: datetime | None = None


@dataclass(frozen=True)
class PollConfig:
    """Identifiers and cadence for polling one meter.

    poll_interval is clamped to MIN_POLL_INTERVAL on construction.
    """

    meter_id: str
    member_id: str
    settlement_point: str
    poll_interval: timedelta = DEFAULT_POLL_INTERVAL

    def __post_init__(self) -> None:
        """Validate identifiers and clamp the interval."""
        for key, value in (
            (CONF_METER_ID, self.meter_id),
            (CONF_MEMBER_ID, self.member_id),
            (CONF_SETTLEMENT_POINT, self.settlement_point),
        ):
            if not isinstance(value, str) or not value.strip():
                raise GriddyConfigError(f"Missing required identifier: {key}")
        object.__setattr__(self, "poll_interval", clamp_poll_interval(self.poll_interval))

    @classmethod
    def from_entry_data(
        cls,
        data: Mapping[str, Any],
        poll_interval: timedelta = DEFAULT_POLL_INTERVAL,
    ) -> PollConfig:
        """Build a PollConfig from config entry data.

        The settlement point must be stored under CONF_SETTLEMENT_POINT. The
        legacy misspelled key is reported, not silently accepted.
        """
        if CONF_SETTLEMENT_POINT not in data and LEGACY_CONF_SETTLEMENT_POINT in data:
            raise GriddyConfigError(
                f"Found '{LEGACY_CONF_SETTLEMENT_POINT}' but expected "
                f"'{CONF_SETTLEMENT_POINT}'; reconfigure the integration"
            )
        return cls(
            meter_id=data.get(CONF_METER_ID),
            member_id=data.get(CONF_MEMBER_ID),
            settlement_point=data.get(CONF_SETTLEMENT_POINT),
            poll_interval=poll_interval,
        )

    def as_request_body(self) -> dict[str, str]:
        """Return the JSON body expected by the getnow endpoint."""
        return {
            "meterID": self.meter_id,
            "memberID": self.member_id,
            "settlement_point": self.settlement_point,
        }
