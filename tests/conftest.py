"""Test fixtures."""

from __future__ import annotations

import datetime

import pytest

from calexpand.processor import ComponentFailure


@pytest.fixture(name="tzinfo")
def mock_tzinfo() -> datetime.tzinfo:
    """Timezone used to view floating and all day values in tests."""
    return datetime.timezone.utc


@pytest.fixture(name="failures")
def mock_failures() -> list[ComponentFailure]:
    """Fixture that holds failures sent to a reporter."""
    return []
