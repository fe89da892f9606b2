"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from rcp.checksum import ChecksumConfig
from rcp.clock import ManualClock

T0 = 1_700_000_000


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Keep logging configuration from leaking between tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def shared_secret() -> str:
    return "Shared Secret Key"


@pytest.fixture()
def sample_attributes() -> dict[str, str]:
    """Request attributes for testing."""
    return {
        "user_id": "USR-042",
        "action": "delete_item",
        "item_id": "ITM-9001",
        "reason": "duplicate entry, see ticket #12",
    }


@pytest.fixture()
def manual_clock() -> ManualClock:
    return ManualClock(T0)


@pytest.fixture()
def static_config(shared_secret: str) -> ChecksumConfig:
    """Config without time binding: checksums are pure functions of input."""
    return ChecksumConfig(shared_secret=shared_secret, use_time_component=False)


@pytest.fixture()
def timed_config(shared_secret: str, manual_clock: ManualClock) -> ChecksumConfig:
    return ChecksumConfig(
        shared_secret=shared_secret,
        use_time_component=True,
        time_delta=5,
        clock=manual_clock,
    )
