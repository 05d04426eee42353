"""
Pytest configuration for the item batch processor.

Provides fixtures for:
- Settings cache isolation between tests
- A private worker pool per test and a ready-made processor
- Seeded in-memory stores
- Database connection management for integration tests
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Generator

import psycopg
import pytest
from tenacity import wait_none

from item_processor.config import Settings, get_settings
from item_processor.domain.models import Item
from item_processor.infrastructure.executor import shutdown_worker_pool
from item_processor.processor import BatchProcessor
from item_processor.store.memory import InMemoryRecordStore
from item_processor.store.postgres import SCHEMA_SQL

TEST_POOL_SIZE = 4


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def executor() -> Generator[ThreadPoolExecutor, None, None]:
    """A private fixed-size pool so tests never share state through the global one."""
    pool = ThreadPoolExecutor(max_workers=TEST_POOL_SIZE, thread_name_prefix="test-worker")
    try:
        yield pool
    finally:
        pool.shutdown(wait=True)


@pytest.fixture
def shared_pool_cleanup() -> Generator[None, None, None]:
    """Tear down the process-wide worker pool after tests that touch it."""
    shutdown_worker_pool()
    yield
    shutdown_worker_pool()


@pytest.fixture
def make_items() -> Callable[[int], list[Item]]:
    def _make(count: int) -> list[Item]:
        return [Item(name=f"item-{i}", email=f"owner{i}@example.com") for i in range(1, count + 1)]

    return _make


@pytest.fixture
def memory_store(make_items) -> InMemoryRecordStore:
    """Three unprocessed items with ids 1, 2, 3 and no simulated latency."""
    return InMemoryRecordStore(make_items(3))


@pytest.fixture
def make_processor(executor: ThreadPoolExecutor) -> Callable[..., BatchProcessor]:
    def _make(store, **kwargs) -> BatchProcessor:
        kwargs.setdefault("executor", executor)
        kwargs.setdefault("snapshot_wait", wait_none())
        return BatchProcessor(store, **kwargs)

    return _make


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "items"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def clean_items_table(db_connection: psycopg.Connection) -> Generator[None, None, None]:
    """
    Empty the items table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.items RESTART IDENTITY CASCADE;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.items RESTART IDENTITY CASCADE;")
    db_connection.commit()
