"""Tests for the analytics transports."""

from unittest.mock import MagicMock, patch

import pytest

from cf_analytics.errors import TransportConfigError, TransportError
from cf_analytics.transport import (
    BATCH_SIZE,
    FLUSH_INTERVAL,
    PUBLIC_API_KEY,
    NoopTransport,
    PostHogTransport,
)


@pytest.fixture
def callback():
    return MagicMock()


class TestPostHogTransport:
    """Tests for the PostHog-backed transport."""

    @patch("cf_analytics.transport.Posthog")
    def test_initialization(self, mock_posthog, callback):
        """Test transport initialization."""
        transport = PostHogTransport("https://collector.test", callback, verbose=True)

        args, kwargs = mock_posthog.call_args
        assert args[0] == PUBLIC_API_KEY
        assert kwargs["host"] == "https://collector.test"
        assert kwargs["debug"] is True
        assert kwargs["flush_at"] == BATCH_SIZE
        assert kwargs["flush_interval"] == FLUSH_INTERVAL
        assert callable(kwargs["on_error"])
        assert transport.endpoint_url() == "https://collector.test"

    @pytest.mark.parametrize("endpoint", ["", "not a url", "ftp://collector.test", "https://"])
    def test_invalid_endpoint(self, endpoint, callback):
        """Test that unusable endpoints are rejected."""
        with pytest.raises(TransportConfigError) as excinfo:
            PostHogTransport(endpoint, callback)
        assert excinfo.value.endpoint == endpoint

    def test_invalid_batch_size(self, callback):
        """Test that a non-positive batch size is rejected."""
        with pytest.raises(TransportConfigError):
            PostHogTransport("https://collector.test", callback, batch_size=0)

    @patch("cf_analytics.transport.Posthog", side_effect=ValueError("bad host"))
    def test_client_creation_failure(self, mock_posthog, callback):
        """Test that PostHog construction errors are wrapped."""
        with pytest.raises(TransportError):
            PostHogTransport("https://collector.test", callback)

    @patch("cf_analytics.transport.Posthog")
    def test_capture_reports_success(self, mock_posthog, callback):
        """Test that an accepted capture reports success."""
        mock_posthog.return_value.capture.return_value = "msg-1"
        transport = PostHogTransport("https://collector.test", callback)
        transport.capture("started", "anon_1", {"feature": "x"}, {"deployment": "d1"})

        mock_posthog.return_value.capture.assert_called_once_with(
            "started",
            distinct_id="anon_1",
            properties={"feature": "x"},
            groups={"deployment": "d1"},
        )
        message = callback.on_success.call_args[0][0]
        assert message["event"] == "started"
        assert message["uuid"] == "msg-1"
        callback.on_failure.assert_not_called()

    @patch("cf_analytics.transport.Posthog")
    def test_dropped_capture_reports_failure(self, mock_posthog, callback):
        """Test that a dropped capture reports failure."""
        mock_posthog.return_value.capture.return_value = None
        transport = PostHogTransport("https://collector.test", callback)
        transport.capture("started", "anon_1")

        message, error = callback.on_failure.call_args[0]
        assert message["event"] == "started"
        assert isinstance(error, TransportError)
        callback.on_success.assert_not_called()

    @patch("cf_analytics.transport.Posthog")
    def test_group_identify(self, mock_posthog, callback):
        """Test sending a group identify call."""
        mock_posthog.return_value.group_identify.return_value = "msg-2"
        transport = PostHogTransport("https://collector.test", callback)
        transport.group_identify("deployment", "d1", {"id": "d1"}, distinct_id="anon_1")

        mock_posthog.return_value.group_identify.assert_called_once_with(
            "deployment", "d1", properties={"id": "d1"}, distinct_id="anon_1"
        )
        callback.on_success.assert_called_once()

    @patch("cf_analytics.transport.Posthog")
    def test_upload_error_reported_per_message(self, mock_posthog, callback):
        """Test that a failed upload reports each message in the batch."""
        PostHogTransport("https://collector.test", callback)
        on_error = mock_posthog.call_args[1]["on_error"]

        error = RuntimeError("503")
        on_error(error, [{"event": "a"}, {"event": "b"}])

        assert callback.on_failure.call_count == 2
        callback.on_failure.assert_any_call({"event": "a"}, error)
        callback.on_failure.assert_any_call({"event": "b"}, error)

    @patch("cf_analytics.transport.Posthog")
    def test_close_shuts_down(self, mock_posthog, callback):
        """Test that close shuts PostHog down."""
        transport = PostHogTransport("https://collector.test", callback)
        transport.close()
        mock_posthog.return_value.shutdown.assert_called_once()

    @patch("cf_analytics.transport.Posthog")
    def test_close_failure_wrapped(self, mock_posthog, callback):
        """Test that shutdown errors are wrapped in TransportError."""
        mock_posthog.return_value.shutdown.side_effect = RuntimeError("flush failed")
        transport = PostHogTransport("https://collector.test", callback)
        with pytest.raises(TransportError):
            transport.close()


class TestNoopTransport:
    """Tests for the no-op transport."""

    def test_accepts_everything(self):
        """Test that the no-op transport accepts every call."""
        transport = NoopTransport()
        transport.capture("started", "anon_1", {"a": 1}, {"deployment": "d1"})
        transport.group_identify("deployment", "d1", {"id": "d1"})
        assert transport.endpoint_url() == ""
        transport.close()
        transport.close()
