from __future__ import annotations

import pytest

from item_processor.infrastructure.executor import (
    THREAD_NAME_PREFIX,
    WorkerPoolManager,
    get_worker_pool,
    shutdown_worker_pool,
)

CONFIGURED_POOL_SIZE = 3

pytestmark = pytest.mark.usefixtures("shared_pool_cleanup")


def test_manager_is_a_singleton() -> None:
    assert WorkerPoolManager() is WorkerPoolManager()


def test_pool_is_reused_across_calls(monkeypatch) -> None:
    monkeypatch.setenv("WORKER_POOL_SIZE", str(CONFIGURED_POOL_SIZE))

    first = get_worker_pool()
    second = get_worker_pool()

    assert first is second
    assert WorkerPoolManager().max_workers == CONFIGURED_POOL_SIZE


def test_pool_size_is_not_derived_from_later_requests(monkeypatch) -> None:
    monkeypatch.setenv("WORKER_POOL_SIZE", str(CONFIGURED_POOL_SIZE))
    pool = get_worker_pool()

    assert get_worker_pool(max_workers=50) is pool
    assert WorkerPoolManager().max_workers == CONFIGURED_POOL_SIZE


def test_workers_use_named_threads() -> None:
    import threading

    name = get_worker_pool(max_workers=1).submit(lambda: threading.current_thread().name).result()

    assert name.startswith(THREAD_NAME_PREFIX)


def test_shutdown_waits_for_in_flight_work_then_allows_restart() -> None:
    import time

    pool = get_worker_pool(max_workers=1)
    pending = pool.submit(lambda: time.sleep(0.05) or "written")

    shutdown_worker_pool(wait=True)

    assert pending.result(timeout=0) == "written"
    with pytest.raises(RuntimeError):
        pool.submit(lambda: None)
    assert get_worker_pool(max_workers=1) is not pool


def test_invalid_pool_size_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("WORKER_POOL_SIZE", "0")

    with pytest.raises(ValueError, match="positive"):
        get_worker_pool()
