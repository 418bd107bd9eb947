"""
Infrastructure package for Cargo Ledger.

Centralizes database connectivity concerns (connection factory, pooling,
table definitions). Keep this layer focused on I/O and resource management,
decoupled from the batch validation logic in `cargo_ledger.services`.
"""

from cargo_ledger.infrastructure.db_factory import (
    PoolManager,
    build_dsn,
    get_sync_connection,
    wait_for_pool,
)
from cargo_ledger.infrastructure.schema import CONTAINERS, SHIPS, TABLES, TableSpec, ensure_schema

__all__ = [
    "PoolManager",
    "build_dsn",
    "get_sync_connection",
    "wait_for_pool",
    "TableSpec",
    "SHIPS",
    "CONTAINERS",
    "TABLES",
    "ensure_schema",
]
