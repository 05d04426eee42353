"""
Postgres-backed record store.

Every operation borrows a connection from the shared psycopg pool; the pool's
connection context commits on success and rolls back on error. Driver errors
are translated into the store taxonomy:

- connection/pool failures -> StoreUnavailable
- integrity violations     -> WriteRejected
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from item_processor.domain.models import Item
from item_processor.exceptions import StoreUnavailable, WriteRejected
from item_processor.infrastructure.db_factory import get_sync_pool
from item_processor.store.abstract import AbstractRecordStore

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS public.items (
    id          BIGSERIAL PRIMARY KEY,
    name        TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    status      TEXT NOT NULL DEFAULT 'unprocessed',
    email       TEXT
);
"""

_COLUMNS = "id, name, description, status, email"

LIST_IDS_SQL = "SELECT id FROM public.items ORDER BY id;"
FIND_ALL_SQL = f"SELECT {_COLUMNS} FROM public.items ORDER BY id;"
GET_SQL = f"SELECT {_COLUMNS} FROM public.items WHERE id = %s;"
INSERT_SQL = f"""
INSERT INTO public.items (name, description, status, email)
VALUES (%(name)s, %(description)s, %(status)s, %(email)s)
RETURNING {_COLUMNS};
"""
UPSERT_SQL = f"""
INSERT INTO public.items (id, name, description, status, email)
VALUES (%(id)s, %(name)s, %(description)s, %(status)s, %(email)s)
ON CONFLICT (id) DO UPDATE SET
    name = EXCLUDED.name,
    description = EXCLUDED.description,
    status = EXCLUDED.status,
    email = EXCLUDED.email
RETURNING {_COLUMNS};
"""
DELETE_SQL = "DELETE FROM public.items WHERE id = %s;"


def _to_item(row: Dict[str, Any]) -> Item:
    return Item(**row)


class PostgresRecordStore(AbstractRecordStore):
    """
    Record store over the `public.items` table.

    Parameters
    ----------
    pool : ConnectionPool, optional
        Pool to borrow connections from. Defaults to the process-wide pool
        managed by PoolManager.
    """

    name: str = "postgres"

    def __init__(self, pool: Optional[ConnectionPool] = None) -> None:
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = get_sync_pool()
        return self._pool

    @contextmanager
    def _cursor(self, item_id: Optional[int] = None) -> Generator[psycopg.Cursor, None, None]:
        try:
            with self._get_pool().connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    yield cur
        except psycopg.IntegrityError as exc:
            raise WriteRejected(item_id, str(exc)) from exc
        except (psycopg.OperationalError, psycopg.InterfaceError) as exc:
            raise StoreUnavailable(str(exc)) from exc

    def ensure_schema(self) -> None:
        """Create the items table if it does not exist."""
        with self._cursor() as cur:
            cur.execute(SCHEMA_SQL)

    def list_all_ids(self) -> List[int]:
        with self._cursor() as cur:
            cur.execute(LIST_IDS_SQL)
            return [row["id"] for row in cur.fetchall()]

    def get(self, item_id: int) -> Optional[Item]:
        with self._cursor(item_id) as cur:
            cur.execute(GET_SQL, (item_id,))
            row = cur.fetchone()
        return _to_item(row) if row is not None else None

    def put(self, item: Item) -> Item:
        sql = INSERT_SQL if item.id is None else UPSERT_SQL
        with self._cursor(item.id) as cur:
            cur.execute(sql, item.model_dump())
            row = cur.fetchone()
        if row is None:
            raise WriteRejected(item.id, "no row returned from write")
        return _to_item(row)

    def find_all(self) -> List[Item]:
        with self._cursor() as cur:
            cur.execute(FIND_ALL_SQL)
            return [_to_item(row) for row in cur.fetchall()]

    def delete(self, item_id: int) -> bool:
        with self._cursor(item_id) as cur:
            cur.execute(DELETE_SQL, (item_id,))
            return cur.rowcount > 0


__all__ = ["PostgresRecordStore", "SCHEMA_SQL"]
