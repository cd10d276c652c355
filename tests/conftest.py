"""Shared fixtures for the analytics tests."""

import os

import pytest

ANALYTICS_VARS = (
    "CF_ANALYTICS_URL",
    "CF_ANALYTICS_DISABLED",
    "CF_ANALYTICS_DEBUG",
    "CF_ANALYTICS_LOG_LEVEL",
)


@pytest.fixture
def clean_environment():
    """Remove CF_ANALYTICS_* variables for the duration of a test."""
    original_env = os.environ.copy()
    for name in ANALYTICS_VARS:
        os.environ.pop(name, None)

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def debug_environment(clean_environment):
    """Turn debug logging on through the environment."""
    os.environ["CF_ANALYTICS_DEBUG"] = "true"
    yield


class RecordingTransport:
    """Transport double that remembers every call."""

    def __init__(self, close_error=None, send_error=None):
        self.captured = []
        self.groups = []
        self.close_calls = 0
        self._close_error = close_error
        self._send_error = send_error

    def endpoint_url(self):
        return "https://collector.test"

    def capture(self, event, distinct_id, properties=None, groups=None):
        if self._send_error:
            raise self._send_error
        self.captured.append(
            {"event": event, "distinct_id": distinct_id, "properties": properties, "groups": groups}
        )

    def group_identify(self, group_type, group_key, traits=None, distinct_id=None):
        if self._send_error:
            raise self._send_error
        self.groups.append(
            {"group_type": group_type, "group_key": group_key, "traits": traits}
        )

    def close(self):
        self.close_calls += 1
        if self._close_error:
            raise self._close_error


@pytest.fixture
def recording_transport():
    return RecordingTransport()
