"""Models for deployment identity."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class Deployment(BaseModel):
    """A Common Fate deployment identifier.

    If you add a field here, add it to traits() as well so it propagates
    to the group identify call.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    version: str = ""
    stage: str = ""  # dev, prod, uat, etc.

    def traits(self) -> Dict[str, Any]:
        """Return the traits to use for the deployment group."""
        traits: Dict[str, Any] = {
            "version": self.version,
            "groupType": "deployment",
            "id": self.id,
        }
        if self.stage:
            traits["stage"] = self.stage
        return traits
