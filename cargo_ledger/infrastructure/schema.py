"""
Table definitions for Cargo Ledger.

Each record kind maps to one table with a store-generated identity column.
The CHECK constraints repeat the positivity rule at the database level so a
non-positive value cannot be stored even by a writer that bypasses the
services.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Tuple, Type

from psycopg import Connection

from cargo_ledger.domain.models import Container, RecordT, Ship
from cargo_ledger.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class TableSpec(Generic[RecordT]):
    """Mapping between a record model and its table."""

    kind: str
    table: str
    columns: Tuple[str, ...]
    model: Type[RecordT]
    ddl: str


SHIPS: TableSpec[Ship] = TableSpec(
    kind="ship",
    table="ships",
    columns=("name", "tonnage"),
    model=Ship,
    ddl="""
        CREATE TABLE IF NOT EXISTS public.ships (
            id      BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            name    TEXT NOT NULL,
            tonnage DOUBLE PRECISION NOT NULL CONSTRAINT ships_tonnage_positive CHECK (tonnage > 0)
        );
    """,
)

CONTAINERS: TableSpec[Container] = TableSpec(
    kind="container",
    table="containers",
    columns=("contents", "weight"),
    model=Container,
    ddl="""
        CREATE TABLE IF NOT EXISTS public.containers (
            id       BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
            contents TEXT NOT NULL,
            weight   DOUBLE PRECISION NOT NULL CONSTRAINT containers_weight_positive CHECK (weight > 0)
        );
    """,
)

TABLES: Tuple[TableSpec, ...] = (SHIPS, CONTAINERS)


def ensure_schema(conn: Connection) -> None:
    """
    Create the ledger tables if they do not exist and commit.
    """
    with conn.cursor() as cur:
        for spec in TABLES:
            cur.execute(spec.ddl)
    conn.commit()
    log.info("Schema ensured", extra={"tables": [spec.table for spec in TABLES]})


__all__ = ["TableSpec", "SHIPS", "CONTAINERS", "TABLES", "ensure_schema"]
