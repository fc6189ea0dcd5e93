"""Shared fixtures for cellcalc tests."""

from __future__ import annotations

import pytest

from cellcalc.logging.events import configure_sink


@pytest.fixture(autouse=True)
def _reset_event_sink():
    """Start and finish every test with event logging disabled."""
    configure_sink(None)
    yield
    configure_sink(None)
