"""Exceptions raised by the analytics transport layer."""

from typing import Optional


class AnalyticsError(Exception):
    """Base exception for all cf-analytics errors."""

    pass


class TransportError(AnalyticsError):
    """Raised when the underlying transport fails to start, send or close."""

    pass


class TransportConfigError(TransportError):
    """Raised when the transport is given settings it cannot use."""

    def __init__(self, message: str, endpoint: Optional[str] = None):
        self.endpoint = endpoint
        super().__init__(message)
