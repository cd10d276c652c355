"""Client for reporting anonymous deployment analytics.

Usage:

    from cf_analytics import new, env

    client = new(env())
    client.set_deployment_id("dep-123")
    client.track("deployment_started")
    client.close()
"""

__version__ = "0.1.0"

from cf_analytics.client import Client, anonymous_id, new
from cf_analytics.config import (
    DEFAULT,
    DEFAULT_ENDPOINT,
    DEV_ENDPOINT,
    DEVELOPMENT,
    DISABLED,
    Config,
    debug_enabled,
    endpoint_or_default,
    env,
)
from cf_analytics.errors import AnalyticsError, TransportConfigError, TransportError
from cf_analytics.logger import configure_logging, set_log_level
from cf_analytics.models import Deployment
from cf_analytics.observer import DebugObserver
from cf_analytics.transport import NoopTransport, PostHogTransport, Transport

# Keep the analytics loggers quiet unless asked otherwise.
configure_logging()

__all__ = [
    "Client",
    "new",
    "anonymous_id",
    "Config",
    "env",
    "endpoint_or_default",
    "debug_enabled",
    "DEFAULT",
    "DEFAULT_ENDPOINT",
    "DEV_ENDPOINT",
    "DEVELOPMENT",
    "DISABLED",
    "Deployment",
    "DebugObserver",
    "Transport",
    "PostHogTransport",
    "NoopTransport",
    "AnalyticsError",
    "TransportError",
    "TransportConfigError",
    "set_log_level",
]
