"""Configuration for the analytics client."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict

DEV_ENDPOINT = "https://t-dev.commonfate.io"
DEFAULT_ENDPOINT = "https://t.commonfate.io"


class Config(BaseModel):
    """Configuration for the analytics client.

    A Config passed to the client is used verbatim, apart from an empty
    endpoint which is replaced with DEFAULT_ENDPOINT when analytics are enabled.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: str = ""
    enabled: bool = True
    verbose: bool = False

    @classmethod
    def from_env(cls) -> Config:
        """Load config from environment variables.

        - endpoint is CF_ANALYTICS_URL, or DEFAULT_ENDPOINT if not provided
        - disabled if CF_ANALYTICS_DISABLED is "true" (any case)
        - verbose if CF_ANALYTICS_DEBUG is "true" (any case)
        """
        return cls(
            endpoint=endpoint_or_default(os.environ.get("CF_ANALYTICS_URL", "")),
            enabled=os.environ.get("CF_ANALYTICS_DISABLED", "").lower() != "true",
            verbose=os.environ.get("CF_ANALYTICS_DEBUG", "").lower() == "true",
        )


# Disabled disables analytics altogether.
DISABLED = Config(endpoint="", enabled=False, verbose=False)

# Development sends to DEV_ENDPOINT with verbose transport logging.
DEVELOPMENT = Config(endpoint=DEV_ENDPOINT, enabled=True, verbose=True)

DEFAULT = Config(endpoint=DEFAULT_ENDPOINT, enabled=True, verbose=False)


def endpoint_or_default(endpoint: str) -> str:
    """Return the endpoint, or DEFAULT_ENDPOINT if it is empty."""
    if not endpoint:
        return DEFAULT_ENDPOINT
    return endpoint


def env() -> Config:
    """Resolve the client configuration from the environment."""
    return Config.from_env()


def debug_enabled() -> bool:
    """Check whether debug logging is switched on.

    Read from CF_ANALYTICS_DEBUG on every call so it can be flipped without
    restarting the process.
    """
    return os.environ.get("CF_ANALYTICS_DEBUG", "").lower() == "true"
