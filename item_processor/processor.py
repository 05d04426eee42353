"""
Concurrent batch processor: mark every stored item as processed.

Usage:
    from item_processor.processor import BatchProcessor
    from item_processor.store import InMemoryRecordStore

    processor = BatchProcessor(InMemoryRecordStore(items))
    future = processor.process_all()   # returns immediately
    processed = future.result()        # list[Item]

A batch snapshots the store's ids once, fans out one unit of work per id onto
the shared worker pool, and fans in once every unit has resolved. Each unit
returns its own outcome; nothing is accumulated into shared collections.

Result policy is best-effort: `process_all()` resolves to the successfully
processed items only. Items that vanished or whose read/write failed are left
out without raising. Callers that need to see those use
`process_all_detailed()`, which resolves to a `BatchReport`.
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Executor, Future
from typing import Callable, Iterable, List, Optional

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from item_processor.config import get_settings
from item_processor.domain.models import STATUS_PROCESSED, Item
from item_processor.domain.outcomes import Absent, BatchReport, Failure, Outcome, Success
from item_processor.exceptions import StoreUnavailable
from item_processor.infrastructure.executor import get_worker_pool
from item_processor.store.abstract import RecordStore
from item_processor.utils.logging import get_logger

log = get_logger(__name__)


class AtomicCounter:
    """Lock-guarded integer counter."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, amount: int = 1) -> int:
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class _FanIn:
    """Countdown that fires `on_complete` exactly once, after the last unit resolves."""

    def __init__(self, expected: int, on_complete: Callable[[], None]) -> None:
        self._remaining = expected
        self._lock = threading.Lock()
        self._on_complete = on_complete

    def unit_done(self, _unit: Future) -> None:
        with self._lock:
            self._remaining -= 1
            last = self._remaining == 0
        if last:
            self._on_complete()


def _aggregate(outcomes: Iterable[Outcome]) -> BatchReport:
    return BatchReport.from_outcomes(outcomes)


def _resolved(value: object) -> Future:
    future: Future = Future()
    future.set_running_or_notify_cancel()
    future.set_result(value)
    return future


def _chain(source: Future, transform: Callable[[object], object]) -> Future:
    """Derive a future that completes once `source` does, mapping its result."""
    target: Future = Future()
    target.set_running_or_notify_cancel()

    def _relay(done: Future) -> None:
        exc = done.exception()
        if exc is not None:
            target.set_exception(exc)
            return
        try:
            target.set_result(transform(done.result()))
        except Exception as transform_exc:  # noqa: BLE001 - surfaced on the derived future
            target.set_exception(transform_exc)

    source.add_done_callback(_relay)
    return target


class BatchProcessor:
    """
    Fan-out/fan-in processor over a record store.

    Parameters
    ----------
    store : RecordStore
        Backend exposing `list_all_ids`, `get`, and `put`.
    executor : Executor, optional
        Pool that runs units of work. Defaults to the process-wide worker pool,
        looked up per batch so a restarted pool is picked up.
    snapshot_attempts : int, optional
        Attempts for the id snapshot when the store is unavailable. Defaults to
        settings.snapshot_retry_attempts.
    snapshot_wait : tenacity wait strategy, optional
        Backoff between snapshot attempts (exponential 1s..10s by default).
    """

    def __init__(
        self,
        store: RecordStore,
        executor: Optional[Executor] = None,
        snapshot_attempts: Optional[int] = None,
        snapshot_wait: Optional[wait_base] = None,
    ) -> None:
        if snapshot_attempts is None:
            snapshot_attempts = get_settings().snapshot_retry_attempts
        if snapshot_attempts < 1:
            raise ValueError(f"snapshot_attempts must be positive, got {snapshot_attempts}")
        self._store = store
        self._executor = executor
        self._snapshot_retry = Retrying(
            stop=stop_after_attempt(snapshot_attempts),
            wait=snapshot_wait or wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(StoreUnavailable),
            reraise=True,
        )
        self._processed = AtomicCounter()

    @property
    def processed_count(self) -> int:
        """Total successful transitions across every batch run by this processor."""
        return self._processed.value

    def _get_executor(self) -> Executor:
        return self._executor if self._executor is not None else get_worker_pool()

    def process_all(self) -> "Future[List[Item]]":
        """
        Start a batch and return a future of the processed items.

        The future completes once, after every unit has resolved. Absent and
        failed items are dropped from the list; only a broken join or an
        unusable id snapshot fails the future itself.
        """
        return _chain(self.process_all_detailed(), lambda report: list(report.items))

    def process_all_detailed(self) -> "Future[BatchReport]":
        """Start a batch and return a future of the full per-item report."""
        batch: Future = Future()
        batch.set_running_or_notify_cancel()
        try:
            self._get_executor().submit(self._dispatch, batch)
        except Exception as exc:  # noqa: BLE001 - surfaced on the batch future
            log.error("[BATCH REJECTED] worker pool unavailable", extra={"error": str(exc)})
            batch.set_exception(exc)
        return batch

    async def process_all_async(self) -> List[Item]:
        """Await a batch from asyncio code without blocking the event loop."""
        return await asyncio.wrap_future(self.process_all())

    def _snapshot_ids(self) -> List[int]:
        retrying = self._snapshot_retry.copy()
        return list(retrying(self._store.list_all_ids))

    def _dispatch(self, batch: Future) -> None:
        try:
            ids = self._snapshot_ids()
        except Exception as exc:  # noqa: BLE001 - surfaced on the batch future
            log.exception("[BATCH FAILED] could not snapshot item ids")
            batch.set_exception(exc)
            return

        log.info(f"[BATCH START] {len(ids)} item(s)", extra={"items": len(ids)})
        if not ids:
            self._join(batch, [])
            return

        executor = self._get_executor()
        units = [self._submit_unit(executor, item_id) for item_id in ids]
        try:
            fan_in = _FanIn(len(units), lambda: self._join(batch, units))
            for unit in units:
                unit.add_done_callback(fan_in.unit_done)
        except Exception as exc:  # noqa: BLE001 - surfaced on the batch future
            log.exception("[BATCH FAILED] could not wire fan-in")
            if not batch.done():
                batch.set_exception(exc)

    def _submit_unit(self, executor: Executor, item_id: int) -> Future:
        try:
            return executor.submit(self._process_one, item_id)
        except Exception as exc:  # noqa: BLE001 - recorded as this unit's outcome
            log.warning(
                f"[UNIT REJECTED] item {item_id}",
                extra={"item_id": item_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return _resolved(Failure(item_id, exc))

    def _process_one(self, item_id: int) -> Outcome:
        try:
            item = self._store.get(item_id)
            if item is None:
                log.debug(f"[UNIT ABSENT] item {item_id}", extra={"item_id": item_id})
                return Absent(item_id)
            saved = self._store.put(item.with_status(STATUS_PROCESSED))
        except Exception as exc:  # noqa: BLE001 - contained to this unit
            log.warning(
                f"[UNIT FAILED] item {item_id}",
                extra={"item_id": item_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return Failure(item_id, exc)

        self._processed.increment()
        return Success(saved)

    def _join(self, batch: Future, units: List[Future]) -> None:
        try:
            report = _aggregate(unit.result() for unit in units)
        except Exception as exc:  # noqa: BLE001 - fatal to the batch, surfaced to the caller
            log.exception("[BATCH FAILED] aggregation error")
            batch.set_exception(exc)
            return

        log.info(
            f"[BATCH COMPLETE] {len(report.items)}/{report.total} processed",
            extra={
                "processed": len(report.items),
                "absent": len(report.absent_ids),
                "failed": len(report.failures),
                "total": report.total,
            },
        )
        batch.set_result(report)


__all__ = ["AtomicCounter", "BatchProcessor"]
