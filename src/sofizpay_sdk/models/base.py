"""Base model for SofizPay SDK."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class SofizPayModel(BaseModel):
    """Immutable base model with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SofizPayModel":
        """Create model from dictionary."""
        return cls.model_validate(data)
