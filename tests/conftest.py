"""Shared fixtures for flowcore tests."""

from datetime import datetime, timezone

import pytest

from flowcore.ui.console import Console, set_console


@pytest.fixture
def t0():
    """A fixed start time so durations are predictable."""
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_console():
    set_console(Console())
    yield
    set_console(Console())
