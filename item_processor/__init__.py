"""
Item Batch Processor - concurrent status transitions over a record store.

Given a store of items, a batch marks every item as processed:

- Snapshot all item ids once
- Fan out one read-mutate-write unit per id onto a shared, fixed-size worker pool
- Fan in after every unit resolves, returning the successfully processed items

Per-item failures are contained to their own unit and never fail the batch.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from item_processor.config import Settings, get_settings
from item_processor.domain import (
    STATUS_PROCESSED,
    STATUS_UNPROCESSED,
    Absent,
    BatchReport,
    Failure,
    Item,
    Success,
)
from item_processor.exceptions import (
    ItemProcessorError,
    StoreError,
    StoreUnavailable,
    WriteRejected,
)
from item_processor.infrastructure.executor import get_worker_pool, shutdown_worker_pool
from item_processor.processor import BatchProcessor
from item_processor.service import ItemService
from item_processor.store import (
    AbstractRecordStore,
    InMemoryRecordStore,
    PostgresRecordStore,
    RecordStore,
)
from item_processor.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Item",
    "STATUS_PROCESSED",
    "STATUS_UNPROCESSED",
    "Absent",
    "BatchReport",
    "Failure",
    "Success",
    # Errors
    "ItemProcessorError",
    "StoreError",
    "StoreUnavailable",
    "WriteRejected",
    # Processing
    "BatchProcessor",
    "ItemService",
    "get_worker_pool",
    "shutdown_worker_pool",
    # Stores
    "AbstractRecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "RecordStore",
    # Logging
    "configure_logging",
    "get_logger",
]
