"""Shared fixtures for groute tests."""

import pytest
from _helpers import RecordingMux


@pytest.fixture
def recording_mux() -> RecordingMux:
    return RecordingMux()


@pytest.fixture
def calls() -> list[str]:
    """Ordered log shared by tracing middleware and handlers."""
    return []
