"""Transports that deliver analytics events.

The client talks to exactly one transport for its whole lifetime: either the
PostHog-backed one, which batches and uploads events from background
threads, or the no-op one used when analytics are disabled or the live
transport cannot be built.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import urlparse

from posthog import Posthog

from cf_analytics.errors import TransportConfigError, TransportError

# The collector does not authenticate writes; PostHog still needs a
# non-empty project key or it silently disables itself.
PUBLIC_API_KEY = "phc_cf_analytics_public"

# Telemetry is low volume, so favour latency over throughput.
FLUSH_INTERVAL = 0.05  # seconds
BATCH_SIZE = 3


class DeliveryCallback(Protocol):
    """Receives the outcome of every send attempted by a transport."""

    def on_success(self, message: Dict[str, Any]) -> None: ...

    def on_failure(self, message: Dict[str, Any], error: BaseException) -> None: ...


class Transport(Protocol):
    """Capability every transport variant provides."""

    def endpoint_url(self) -> str: ...

    def capture(
        self,
        event: str,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None: ...

    def group_identify(
        self,
        group_type: str,
        group_key: str,
        traits: Optional[Dict[str, Any]] = None,
        distinct_id: Optional[str] = None,
    ) -> None: ...

    def close(self) -> None: ...


def _validate_endpoint(endpoint: str) -> None:
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise TransportConfigError(
            f"analytics endpoint must be an absolute http(s) URL, got {endpoint!r}",
            endpoint=endpoint,
        )


class PostHogTransport:
    """Sends events through a dedicated PostHog client instance."""

    def __init__(
        self,
        endpoint: str,
        callback: DeliveryCallback,
        verbose: bool = False,
        flush_interval: float = FLUSH_INTERVAL,
        batch_size: int = BATCH_SIZE,
    ):
        """Initialize the transport.

        Args:
            endpoint: Base URL of the collector
            callback: Notified of every delivery outcome
            verbose: Turn on PostHog's own debug logging
            flush_interval: Maximum seconds before a partial batch is uploaded
            batch_size: Number of queued events that triggers an upload

        Raises:
            TransportConfigError: If the endpoint is not a usable URL
            TransportError: If the PostHog client cannot be created
        """
        _validate_endpoint(endpoint)
        if batch_size < 1:
            raise TransportConfigError(f"batch size must be positive, got {batch_size}")

        self._endpoint = endpoint
        self._callback = callback
        try:
            self._client = Posthog(
                PUBLIC_API_KEY,
                host=endpoint,
                debug=verbose,
                on_error=self._on_error,
                flush_at=batch_size,
                flush_interval=flush_interval,
            )
        except Exception as e:
            raise TransportError(f"could not create PostHog client: {e}") from e

    def _on_error(self, error: BaseException, batch: List[Dict[str, Any]]) -> None:
        for message in batch:
            self._callback.on_failure(message, error)

    def endpoint_url(self) -> str:
        return self._endpoint

    def capture(
        self,
        event: str,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None:
        message_id = self._client.capture(
            event, distinct_id=distinct_id, properties=properties or {}, groups=groups
        )
        message = {
            "type": "capture",
            "event": event,
            "distinct_id": distinct_id,
            "properties": properties or {},
            "uuid": message_id,
        }
        if message_id is None:
            self._callback.on_failure(message, TransportError(f"event {event!r} was dropped"))
        else:
            self._callback.on_success(message)

    def group_identify(
        self,
        group_type: str,
        group_key: str,
        traits: Optional[Dict[str, Any]] = None,
        distinct_id: Optional[str] = None,
    ) -> None:
        message_id = self._client.group_identify(
            group_type, group_key, properties=traits or {}, distinct_id=distinct_id
        )
        message = {
            "type": "groupidentify",
            "group_type": group_type,
            "group_key": group_key,
            "properties": traits or {},
            "uuid": message_id,
        }
        if message_id is None:
            self._callback.on_failure(
                message, TransportError(f"group {group_type}/{group_key} was dropped")
            )
        else:
            self._callback.on_success(message)

    def close(self) -> None:
        """Flush queued events and stop the upload threads.

        Raises:
            TransportError: If the PostHog client fails to shut down
        """
        try:
            self._client.shutdown()
        except Exception as e:
            raise TransportError(f"error shutting down PostHog client: {e}") from e


class NoopTransport:
    """Accepts every call and does nothing."""

    def endpoint_url(self) -> str:
        return ""

    def capture(
        self,
        event: str,
        distinct_id: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None:
        pass

    def group_identify(
        self,
        group_type: str,
        group_key: str,
        traits: Optional[Dict[str, Any]] = None,
        distinct_id: Optional[str] = None,
    ) -> None:
        pass

    def close(self) -> None:
        pass
