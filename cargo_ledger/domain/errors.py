"""
Error taxonomy for Cargo Ledger.

Validation errors are raised inside a store transaction and propagate to the
caller; the propagation itself rolls the batch back. None of these errors is
transient, so nothing in the package retries them.
"""

from __future__ import annotations

from typing import Any


class CargoLedgerError(Exception):
    """Base class for all Cargo Ledger errors."""


class BatchValidationError(CargoLedgerError):
    """
    A record in a batch failed its positivity check.

    Attributes
    ----------
    index : int
        Position of the first offending record in the submitted batch.
    value : float
        The rejected value.
    """

    field_name: str = "value"

    def __init__(self, index: int, value: float) -> None:
        self.index = index
        self.value = value
        super().__init__(
            f"{self.field_name} must be > 0, got {value!r} (batch index {index})"
        )


class InvalidTonnage(BatchValidationError):
    """Raised when a Ship's tonnage is <= 0."""

    field_name = "tonnage"


class NegativeWeight(BatchValidationError):
    """Raised when a Container's weight is <= 0."""

    field_name = "weight"


class NotFound(CargoLedgerError, LookupError):
    """Raised when a lookup by identity finds no persisted record."""

    def __init__(self, kind: str, record_id: Any) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} with id={record_id!r} not found")


class StoreError(CargoLedgerError, RuntimeError):
    """Raised when the store does not return the row it was asked to write."""


class AlreadyPersisted(CargoLedgerError, ValueError):
    """Raised when a batch contains a record that already carries an identity."""

    def __init__(self, kind: str, index: int, record_id: int) -> None:
        self.kind = kind
        self.index = index
        self.record_id = record_id
        super().__init__(
            f"{kind} at batch index {index} already has id={record_id}; "
            "only transient records can be added"
        )


__all__ = [
    "CargoLedgerError",
    "BatchValidationError",
    "InvalidTonnage",
    "NegativeWeight",
    "NotFound",
    "AlreadyPersisted",
    "StoreError",
]
