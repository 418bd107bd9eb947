"""
Repositories package for Cargo Ledger.

Re-exports the store interface and its two implementations so callers can
import from `cargo_ledger.repositories` directly.
"""

from cargo_ledger.repositories.abstract import RecordStore
from cargo_ledger.repositories.memory import InMemoryRecordStore
from cargo_ledger.repositories.postgres import PostgresRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
]
