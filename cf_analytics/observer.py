"""Delivery callback that logs transport outcomes in debug mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from cf_analytics.config import debug_enabled
from cf_analytics.logger import get_logger

logger = get_logger()


class DebugObserver:
    """Logs every successful or failed send when debug mode is on.

    The transport calls this from its worker threads, so neither method may
    raise or block.
    """

    def __init__(self, debug: Optional[Callable[[], bool]] = None):
        """Initialize the observer.

        Args:
            debug: Returns whether debug logging is active. Checked on every
                   call; defaults to reading CF_ANALYTICS_DEBUG.
        """
        self._debug = debug or debug_enabled

    def on_success(self, message: Dict[str, Any]) -> None:
        try:
            if self._debug():
                logger.info("event success", extra={"event": message})
        except Exception:
            pass

    def on_failure(self, message: Dict[str, Any], error: BaseException) -> None:
        try:
            if self._debug():
                logger.error(
                    f"event failure: {error}", extra={"event": message, "error": error}
                )
        except Exception:
            pass
