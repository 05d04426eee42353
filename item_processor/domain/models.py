"""
Domain models for the item batch processor.

Defines the item schema aligned with the `items` table. Items are immutable
values; a status transition produces a new instance via `model_copy`.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

STATUS_UNPROCESSED = "unprocessed"
STATUS_PROCESSED = "processed"


class Item(BaseModel):
    """
    Representation of a single row in the `items` table.
    """

    id: Optional[int] = Field(None, description="Primary key, assigned by the store.")
    name: str = Field("", description="Display name.")
    description: str = Field("", description="Free-form description.")
    status: str = Field(STATUS_UNPROCESSED, description="Processing status tag.")
    email: Optional[str] = Field(None, description="Contact email for the item owner.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def with_status(self, status: str) -> "Item":
        """Return a copy of this item carrying the given status."""
        return self.model_copy(update={"status": status})


__all__ = ["Item", "STATUS_PROCESSED", "STATUS_UNPROCESSED"]
