"""
Record store interfaces for the item batch processor.

The batch processor depends only on `RecordStore` (list ids, get, put). The
CRUD service additionally needs `find_all` and `delete`, captured by
`AbstractRecordStore` for class-based backends.
"""

from __future__ import annotations

import abc
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from item_processor.domain.models import Item


@runtime_checkable
class RecordStore(Protocol):
    """
    Minimal storage contract consumed by the batch processor.

    Not found is represented as `None` from `get`, never as an exception.
    Implementations raise `StoreUnavailable` or `WriteRejected` on failure.
    """

    def list_all_ids(self) -> Sequence[int]:
        """Return the ids of every stored item."""
        ...

    def get(self, item_id: int) -> Optional[Item]:
        """
        Fetch one item by id.

        Parameters
        ----------
        item_id : int
            Primary key of the item.

        Returns
        -------
        Optional[Item]
            The stored item, or None if the id does not resolve.
        """
        ...

    def put(self, item: Item) -> Item:
        """
        Persist an item and return the stored version.

        Items without an id are inserted and come back with the store-assigned id.
        """
        ...


class AbstractRecordStore(abc.ABC):
    """
    ABC helper for full CRUD backends.

    Subclasses set `name` and implement every storage operation.
    """

    name: str

    @abc.abstractmethod
    def list_all_ids(self) -> Sequence[int]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def get(self, item_id: int) -> Optional[Item]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def put(self, item: Item) -> Item:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def find_all(self) -> List[Item]:  # pragma: no cover - interface only
        """Return every stored item ordered by id."""
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, item_id: int) -> bool:  # pragma: no cover - interface only
        """Delete an item; return whether it existed."""
        raise NotImplementedError

    def ensure_schema(self) -> None:
        """Prepare backing storage. No-op by default."""


__all__ = ["AbstractRecordStore", "RecordStore"]
