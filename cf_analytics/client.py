"""Analytics client for reporting deployment usage."""

from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Dict, Optional

from cf_analytics.config import Config, debug_enabled, endpoint_or_default, env
from cf_analytics.identity import IdentitySnapshot, IdentityState
from cf_analytics.logger import get_logger
from cf_analytics.models import Deployment
from cf_analytics.observer import DebugObserver
from cf_analytics.transport import (
    BATCH_SIZE,
    FLUSH_INTERVAL,
    NoopTransport,
    PostHogTransport,
    Transport,
)

logger = get_logger()


def anonymous_id() -> str:
    """Generate a random identifier for anonymous events."""
    return "anon_" + uuid.uuid4().hex


def _debug_active(debug: Callable[[], bool]) -> bool:
    """Ask the debug provider, treating a failing provider as off."""
    try:
        return bool(debug())
    except Exception as e:
        logger.error(f"error reading debug flag: {e}")
        return False


class Client:
    """Thread-safe analytics client.

    Share one instance across the whole process. Analytics failures are
    logged and never raised, so a broken collector cannot take the host
    application down with it.
    """

    def __init__(
        self,
        transport: Transport,
        debug: Optional[Callable[[], bool]] = None,
    ):
        """Initialize the client around an already-built transport.

        Most callers want new() or Client.from_env() instead.

        Args:
            transport: The transport used for the lifetime of this client
            debug: Returns whether debug logging is active; defaults to
                   reading CF_ANALYTICS_DEBUG on every call
        """
        self._transport = transport
        self._debug = debug or debug_enabled
        self._identity = IdentityState()
        self._close_lock = threading.Lock()
        self._closed = False

        # Generates distinct ids for anonymous events; tests swap this out.
        self.uid: Callable[[], str] = anonymous_id

    @classmethod
    def from_env(cls) -> Client:
        """Create a client configured from CF_ANALYTICS_* environment variables."""
        return new(env())

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_deployment_id(self, deployment_id: str) -> None:
        """Set the deployment ID. An empty ID is ignored."""
        if deployment_id == "":
            return
        self._identity.replace_deployment_id(deployment_id)

        if _debug_active(self._debug):
            logger.info("set deployment", extra={"deployment.id": deployment_id})

    def set_deployment(self, deployment: Optional[Deployment]) -> None:
        """Set deployment information, replacing any previous deployment.

        Passing None clears it.
        """
        self._identity.replace_deployment(deployment)

        if _debug_active(self._debug):
            logger.info("set deployment", extra={"deployment": deployment})

    def identity(self) -> IdentitySnapshot:
        """Return a consistent copy of the current deployment identity."""
        return self._identity.snapshot()

    def track(
        self,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
        distinct_id: Optional[str] = None,
    ) -> None:
        """Record an event, tagged with the current deployment.

        Args:
            event: Name of the event
            properties: Event properties (must not contain sensitive data)
            distinct_id: Who the event is about; a fresh anonymous ID if omitted
        """
        if self._closed:
            return

        deployment_id, deployment = self._identity.snapshot()
        event_properties = dict(properties or {})
        if deployment_id is not None:
            event_properties["deployment_id"] = deployment_id
        groups = {"deployment": deployment.id} if deployment is not None else None

        try:
            self._transport.capture(
                event,
                distinct_id=distinct_id or self.uid(),
                properties=event_properties,
                groups=groups,
            )
        except Exception as e:
            logger.error(f"error sending event {event}: {e}")

    def group(self) -> None:
        """Send the current deployment's traits as a group identify call."""
        if self._closed:
            return

        deployment = self._identity.snapshot().deployment
        if deployment is None:
            return

        try:
            self._transport.group_identify(
                "deployment",
                deployment.id,
                traits=deployment.traits(),
                distinct_id=self.uid(),
            )
        except Exception as e:
            logger.error(f"error sending deployment group: {e}")

    def close(self) -> None:
        """Flush pending events and close the transport.

        Safe to call more than once; only the first call reaches the
        transport. Do not call while other client calls are in flight.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        if _debug_active(self._debug):
            try:
                logger.info(
                    "closing analytics client", extra={"url": self._transport.endpoint_url()}
                )
            except Exception as e:
                logger.error(f"error reading transport endpoint: {e}")

        try:
            self._transport.close()
        except Exception as e:
            logger.error(f"error closing client: {e}", extra={"error": e})

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def new(config: Config, debug: Optional[Callable[[], bool]] = None) -> Client:
    """Create an analytics client.

    Never raises: if analytics are disabled, or the transport cannot be
    built, the client is backed by a no-op transport.

    Usage:

        client = new(DEVELOPMENT)
    """
    # create a no-op client if analytics are disabled.
    if not config.enabled:
        return Client(NoopTransport(), debug=debug)

    debug = debug or debug_enabled
    try:
        transport = PostHogTransport(
            endpoint_or_default(config.endpoint),
            callback=DebugObserver(debug),
            verbose=config.verbose,
            flush_interval=FLUSH_INTERVAL,
            batch_size=BATCH_SIZE,
        )
    except Exception as e:
        logger.error(f"error setting client: {e}", extra={"error": e})
        return Client(NoopTransport(), debug=debug)

    if _debug_active(debug):
        logger.info("configured analytics client", extra={"config": config.model_dump()})

    return Client(transport, debug=debug)
