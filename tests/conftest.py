"""Shared test fixtures for Griddy Price tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from custom_components.griddy_price.models import PollConfig

from tests.helpers import ENTRY_DATA


@pytest.fixture
def poll_config() -> PollConfig:
    """Return a valid PollConfig at the default interval."""
    return PollConfig.from_entry_data(ENTRY_DATA)


@pytest.fixture
def slow_poll_config() -> PollConfig:
    """Return a PollConfig with a two minute interval."""
    return PollConfig.from_entry_data(ENTRY_DATA, poll_interval=timedelta(minutes=2))


