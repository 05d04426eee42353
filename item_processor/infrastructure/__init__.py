"""
Infrastructure package for the item batch processor.

Centralizes long-lived shared resources: the psycopg connection pool and the
process-wide worker pool. Keep this layer focused on I/O and resource
lifecycle, decoupled from batch logic.
"""

from item_processor.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_sync_pool,
)
from item_processor.infrastructure.executor import (
    WorkerPoolManager,
    get_worker_pool,
    shutdown_worker_pool,
)

__all__ = [
    "PoolManager",
    "build_dsn",
    "get_sync_pool",
    "WorkerPoolManager",
    "get_worker_pool",
    "shutdown_worker_pool",
]
