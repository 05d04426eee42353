"""
Store package for the item batch processor.

Re-exports the storage contract and the concrete backends so downstream code
can import from `item_processor.store` directly.
"""

from item_processor.store.abstract import AbstractRecordStore, RecordStore
from item_processor.store.memory import InMemoryRecordStore
from item_processor.store.postgres import PostgresRecordStore
from item_processor.store.registry import available_backends, resolve_store

__all__ = [
    # Contracts
    "AbstractRecordStore",
    "RecordStore",
    # Backends
    "InMemoryRecordStore",
    "PostgresRecordStore",
    # Registry
    "available_backends",
    "resolve_store",
]
