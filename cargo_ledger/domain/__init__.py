"""
Domain package for Cargo Ledger.

Exports the record models and the error taxonomy used by stores and services.
Keep this package focused on data definitions and validation concerns.
"""

from cargo_ledger.domain.errors import (
    AlreadyPersisted,
    BatchValidationError,
    CargoLedgerError,
    InvalidTonnage,
    NegativeWeight,
    NotFound,
    StoreError,
)
from cargo_ledger.domain.models import Container, LedgerRecord, Ship

__all__ = [
    # Models
    "LedgerRecord",
    "Ship",
    "Container",
    # Errors
    "CargoLedgerError",
    "BatchValidationError",
    "InvalidTonnage",
    "NegativeWeight",
    "NotFound",
    "AlreadyPersisted",
    "StoreError",
]
