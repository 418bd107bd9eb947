"""
PostgreSQL record store backed by a psycopg connection pool.

Outside a `transaction()` block each call borrows a pooled connection and runs
in its own short transaction (the pool commits on clean exit). Inside the
block, every call made from the same thread reuses the connection bound by the
outermost scope, so all writes commit or roll back together. Nested blocks map
to psycopg savepoints.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generic, Iterator, List, Optional, Sequence

from psycopg import Connection, Cursor, sql
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from cargo_ledger.domain.errors import StoreError
from cargo_ledger.domain.models import RecordT
from cargo_ledger.infrastructure.schema import TableSpec
from cargo_ledger.utils.logging import get_logger

log = get_logger(__name__)


class PostgresRecordStore(Generic[RecordT]):
    """
    Create/read store for one table described by a `TableSpec`.

    Parameters
    ----------
    pool : ConnectionPool
        Shared psycopg pool; the store never closes it.
    spec : TableSpec
        Table name, insertable columns and the record model.
    """

    def __init__(self, pool: ConnectionPool, spec: TableSpec[RecordT]) -> None:
        self._pool = pool
        self._spec = spec
        self._local = threading.local()
        self.kind = spec.kind

        table = sql.Identifier("public", spec.table)
        columns = sql.SQL(", ").join(map(sql.Identifier, spec.columns))
        returning = sql.SQL(", ").join(map(sql.Identifier, ("id", *spec.columns)))
        self._insert_sql = sql.SQL("INSERT INTO {} ({}) VALUES ({}) RETURNING {}").format(
            table,
            columns,
            sql.SQL(", ").join(map(sql.Placeholder, spec.columns)),
            returning,
        )
        self._select_all_sql = sql.SQL("SELECT {} FROM {} ORDER BY id").format(returning, table)
        self._select_one_sql = sql.SQL("SELECT {} FROM {} WHERE id = %s").format(
            returning, table
        )

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        bound: Optional[Connection] = getattr(self._local, "conn", None)
        if bound is not None:
            yield bound
            return
        with self._pool.connection() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[None]:
        bound: Optional[Connection] = getattr(self._local, "conn", None)
        if bound is not None:
            with bound.transaction():
                yield
            return
        with self._pool.connection() as conn:
            self._local.conn = conn
            try:
                with conn.transaction():
                    yield
            finally:
                self._local.conn = None

    def _params(self, record: RecordT) -> dict:
        return record.model_dump(include=set(self._spec.columns))

    def _insert(self, cur: Cursor[RecordT], record: RecordT) -> RecordT:
        cur.execute(self._insert_sql, self._params(record))
        row = cur.fetchone()
        if row is None:
            raise StoreError(f"INSERT INTO {self._spec.table} returned no row")
        return row

    def create(self, record: RecordT) -> RecordT:
        with self._connection() as conn:
            with conn.cursor(row_factory=class_row(self._spec.model)) as cur:
                return self._insert(cur, record)

    def create_all(self, records: Sequence[RecordT]) -> List[RecordT]:
        persisted: List[RecordT] = []
        with self.transaction():
            with self._connection() as conn:
                with conn.cursor(row_factory=class_row(self._spec.model)) as cur:
                    for record in records:
                        persisted.append(self._insert(cur, record))
        log.debug(
            "Rows inserted",
            extra={"table": self._spec.table, "count": len(persisted)},
        )
        return persisted

    def find_all(self) -> List[RecordT]:
        with self._connection() as conn:
            with conn.cursor(row_factory=class_row(self._spec.model)) as cur:
                cur.execute(self._select_all_sql)
                return cur.fetchall()

    def find_by_id(self, record_id: int) -> Optional[RecordT]:
        with self._connection() as conn:
            with conn.cursor(row_factory=class_row(self._spec.model)) as cur:
                cur.execute(self._select_one_sql, (record_id,))
                return cur.fetchone()


__all__ = ["PostgresRecordStore"]
