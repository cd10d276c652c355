"""Lock-protected identity fields for the analytics client."""

from __future__ import annotations

import threading
from typing import NamedTuple, Optional

from cf_analytics.models import Deployment


class IdentitySnapshot(NamedTuple):
    """A consistent copy of the identity fields taken under the lock."""

    deployment_id: Optional[str]
    deployment: Optional[Deployment]


class IdentityState:
    """Holds who is running this instance.

    Every read and write goes through a single mutex. The lock is only held
    for the swap itself, never across transport I/O.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._deployment_id: Optional[str] = None
        self._deployment: Optional[Deployment] = None

    def replace_deployment_id(self, deployment_id: str) -> None:
        with self._lock:
            self._deployment_id = deployment_id

    def replace_deployment(self, deployment: Optional[Deployment]) -> None:
        with self._lock:
            self._deployment = deployment

    def snapshot(self) -> IdentitySnapshot:
        with self._lock:
            return IdentitySnapshot(self._deployment_id, self._deployment)
