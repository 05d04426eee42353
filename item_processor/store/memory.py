"""
Dict-backed record store.

Used by the CLI's default `memory` backend and throughout the unit tests. An
optional per-call latency stands in for real store I/O so that concurrent
batches actually overlap.
"""

from __future__ import annotations

import itertools
import threading
import time
from typing import Dict, Iterable, List, Optional

from item_processor.domain.models import Item
from item_processor.store.abstract import AbstractRecordStore


class InMemoryRecordStore(AbstractRecordStore):
    """
    Thread-safe in-memory store with auto-assigned ids.

    Items are immutable, so they are handed out without copying.
    """

    name: str = "memory"

    def __init__(self, items: Iterable[Item] = (), latency_seconds: float = 0.0) -> None:
        self.latency_seconds = latency_seconds
        self._items: Dict[int, Item] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        for item in items:
            self.put(item)

    def _simulate_io(self) -> None:
        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

    def list_all_ids(self) -> List[int]:
        with self._lock:
            return sorted(self._items)

    def get(self, item_id: int) -> Optional[Item]:
        self._simulate_io()
        with self._lock:
            return self._items.get(item_id)

    def put(self, item: Item) -> Item:
        self._simulate_io()
        with self._lock:
            if item.id is None:
                item_id = next(self._ids)
                while item_id in self._items:
                    item_id = next(self._ids)
                item = item.model_copy(update={"id": item_id})
            self._items[item.id] = item
            return item

    def find_all(self) -> List[Item]:
        with self._lock:
            return [self._items[item_id] for item_id in sorted(self._items)]

    def delete(self, item_id: int) -> bool:
        with self._lock:
            return self._items.pop(item_id, None) is not None


__all__ = ["InMemoryRecordStore"]
