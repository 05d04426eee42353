"""
Process-wide worker pool for batch units of work.

One fixed-size ThreadPoolExecutor is created on first use, shared by every
batch invocation, and shut down at interpreter exit. Batches schedule into the
existing pool; they never create their own.
"""

from __future__ import annotations

import atexit
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from item_processor.config import get_settings
from item_processor.utils.logging import get_logger

log = get_logger(__name__)

THREAD_NAME_PREFIX = "item-worker"


class WorkerPoolManager:
    """
    Thread-safe singleton owning the shared worker pool.

    Shutdown waits for queued and in-flight units, so a write is never cut off
    mid-flight. A later `get_executor` call after shutdown starts a fresh pool.
    """

    _instance: Optional["WorkerPoolManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "WorkerPoolManager":
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._executor = None
                cls._instance._max_workers = 0
                atexit.register(cls._instance.shutdown)
            return cls._instance

    def get_executor(self, max_workers: Optional[int] = None) -> ThreadPoolExecutor:
        """
        Get or create the shared executor.

        Parameters
        ----------
        max_workers : int, optional
            Concurrency ceiling, used only when the pool is created. Defaults to
            settings.worker_pool_size.
        """
        with self._lock:
            if self._executor is None:
                size = max_workers or get_settings().worker_pool_size
                if size < 1:
                    raise ValueError(f"Worker pool size must be positive, got {size}")
                self._executor = ThreadPoolExecutor(
                    max_workers=size, thread_name_prefix=THREAD_NAME_PREFIX
                )
                self._max_workers = size
                log.info("Worker pool started", extra={"max_workers": size})
            return self._executor

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def shutdown(self, wait: bool = True) -> None:
        """Stop the shared executor; called automatically on exit."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
            log.info("Worker pool stopped", extra={"max_workers": self._max_workers})


def get_worker_pool(max_workers: Optional[int] = None) -> ThreadPoolExecutor:
    """Return the shared worker pool, creating it on first use."""
    return WorkerPoolManager().get_executor(max_workers=max_workers)


def shutdown_worker_pool(wait: bool = True) -> None:
    """Shut down the shared worker pool."""
    WorkerPoolManager().shutdown(wait=wait)


__all__ = [
    "THREAD_NAME_PREFIX",
    "WorkerPoolManager",
    "get_worker_pool",
    "shutdown_worker_pool",
]
