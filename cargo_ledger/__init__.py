"""
Cargo Ledger - all-or-nothing batch persistence for ships and containers.

Two record kinds are validated and stored through a service layer that wraps
each batch insert in a single transaction:

- Ship: rejected when tonnage <= 0 (`InvalidTonnage`)
- Container: rejected when weight <= 0 (`NegativeWeight`)

If any record in a batch fails, none of the batch is persisted. Records are
stored in PostgreSQL (psycopg + psycopg_pool) or in an in-memory store with
the same transactional semantics.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from cargo_ledger.bootstrap import (
    Services,
    build_memory_services,
    build_postgres_services,
    build_services,
)
from cargo_ledger.config import Settings, get_settings
from cargo_ledger.domain.errors import (
    AlreadyPersisted,
    BatchValidationError,
    CargoLedgerError,
    InvalidTonnage,
    NegativeWeight,
    NotFound,
    StoreError,
)
from cargo_ledger.domain.models import Container, Ship
from cargo_ledger.repositories import InMemoryRecordStore, PostgresRecordStore, RecordStore
from cargo_ledger.services import BatchPersister, ContainerService, ShipService
from cargo_ledger.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Ship",
    "Container",
    "CargoLedgerError",
    "BatchValidationError",
    "InvalidTonnage",
    "NegativeWeight",
    "NotFound",
    "AlreadyPersisted",
    "StoreError",
    # Stores
    "RecordStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    # Services
    "BatchPersister",
    "ShipService",
    "ContainerService",
    "Services",
    "build_services",
    "build_memory_services",
    "build_postgres_services",
    # Logging
    "configure_logging",
    "get_logger",
]
