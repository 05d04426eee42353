"""Item processor exception hierarchy."""

from __future__ import annotations


class ItemProcessorError(Exception):
    """Base exception for all item processor errors."""


class StoreError(ItemProcessorError):
    """A record store operation failed."""


class StoreUnavailable(StoreError):
    """The store could not be reached; transient, the caller may retry."""


class WriteRejected(StoreError):
    """The store refused a write (constraint violation or conflicting update)."""

    def __init__(self, item_id: int | None, message: str) -> None:
        self.item_id = item_id
        super().__init__(f"Write rejected for item {item_id}: {message}")


__all__ = [
    "ItemProcessorError",
    "StoreError",
    "StoreUnavailable",
    "WriteRejected",
]
