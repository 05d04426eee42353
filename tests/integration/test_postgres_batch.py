"""
Integration tests for the Postgres record store and batch processor.

These tests run against a real PostgreSQL instance and verify that:
1. The store round-trips items through the `items` table
2. A batch marks every stored item as processed and persists it
3. Rows deleted before the batch are excluded without failing it

Run with: RUN_INTEGRATION_TESTS=1 pytest tests/integration/
"""

from __future__ import annotations

import os
from typing import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from item_processor.domain.models import STATUS_PROCESSED, STATUS_UNPROCESSED, Item
from item_processor.store.postgres import PostgresRecordStore

FUTURE_TIMEOUT = 30
SEEDED_ITEMS = 25
POOL_MAX = 5

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


@pytest.fixture
def pg_store(
    test_dsn: str, clean_items_table, db_connection: psycopg.Connection
) -> Generator[PostgresRecordStore, None, None]:
    pool = ConnectionPool(conninfo=test_dsn, min_size=1, max_size=POOL_MAX, open=True)
    try:
        yield PostgresRecordStore(pool=pool)
    finally:
        pool.close()


class TestPostgresRecordStore:
    def test_insert_assigns_id_and_get_reads_it_back(self, pg_store: PostgresRecordStore):
        saved = pg_store.put(Item(name="valve", email="ops@example.com"))

        assert saved.id is not None
        assert pg_store.get(saved.id) == saved
        assert pg_store.list_all_ids() == [saved.id]

    def test_get_missing_returns_none(self, pg_store: PostgresRecordStore):
        assert pg_store.get(123456) is None

    def test_delete(self, pg_store: PostgresRecordStore):
        saved = pg_store.put(Item(name="gear"))

        assert pg_store.delete(saved.id) is True
        assert pg_store.delete(saved.id) is False


class TestBatchAgainstPostgres:
    def test_batch_processes_every_row(self, pg_store: PostgresRecordStore, make_processor):
        for index in range(SEEDED_ITEMS):
            pg_store.put(Item(name=f"item-{index}"))

        result = make_processor(pg_store).process_all().result(timeout=FUTURE_TIMEOUT)

        assert len(result) == SEEDED_ITEMS
        assert all(item.status == STATUS_PROCESSED for item in pg_store.find_all())

    def test_rows_deleted_before_batch_are_excluded(
        self, pg_store: PostgresRecordStore, make_processor
    ):
        kept = pg_store.put(Item(name="kept"))
        dropped = pg_store.put(Item(name="dropped"))
        pg_store.delete(dropped.id)

        result = make_processor(pg_store).process_all().result(timeout=FUTURE_TIMEOUT)

        assert [item.id for item in result] == [kept.id]
        assert pg_store.get(kept.id).status == STATUS_PROCESSED

    def test_batch_is_idempotent(self, pg_store: PostgresRecordStore, make_processor):
        pg_store.put(Item(name="a", status=STATUS_UNPROCESSED))
        processor = make_processor(pg_store)

        first = processor.process_all().result(timeout=FUTURE_TIMEOUT)
        second = processor.process_all().result(timeout=FUTURE_TIMEOUT)

        assert first == second
