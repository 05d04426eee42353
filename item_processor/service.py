"""
Item service: CRUD passthrough plus asynchronous batch processing.

Request-handling layers call `process_items_async()`, acknowledge the request
right away, and keep the returned future as the completion signal.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import List, Optional

from item_processor.domain.models import Item
from item_processor.processor import BatchProcessor
from item_processor.store.abstract import AbstractRecordStore


class ItemService:
    def __init__(
        self,
        store: AbstractRecordStore,
        processor: Optional[BatchProcessor] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self._store = store
        self._processor = processor or BatchProcessor(store, executor=executor)

    @property
    def processor(self) -> BatchProcessor:
        return self._processor

    @property
    def processed_count(self) -> int:
        return self._processor.processed_count

    def find_all(self) -> List[Item]:
        return self._store.find_all()

    def find_by_id(self, item_id: int) -> Optional[Item]:
        return self._store.get(item_id)

    def save(self, item: Item) -> Item:
        return self._store.put(item)

    def delete_by_id(self, item_id: int) -> bool:
        """Delete if present; returns False when there was nothing to delete."""
        if self._store.get(item_id) is None:
            return False
        return self._store.delete(item_id)

    def process_items_async(self) -> "Future[List[Item]]":
        """
        Mark every stored item as processed.

        Returns immediately. The future resolves to the items that were
        transitioned; missing or failed items are silently left out.
        """
        return self._processor.process_all()


__all__ = ["ItemService"]
