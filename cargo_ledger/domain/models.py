"""
Domain models for Cargo Ledger.

Defines the two record kinds stored by the ledger, aligned with the tables in
`cargo_ledger.infrastructure.schema`. A record without an `id` is transient;
the store assigns the identity when the record is persisted.

The models accept any float for the constrained field. The positivity rule is
enforced per batch by the services, which raise the typed errors from
`cargo_ledger.domain.errors`.
"""
from __future__ import annotations

from typing import Optional, TypeVar

from pydantic import BaseModel, Field


class LedgerRecord(BaseModel):
    """
    Common base for persisted record kinds.
    """

    id: Optional[int] = Field(None, description="Store-assigned identity; None while transient.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @property
    def is_transient(self) -> bool:
        return self.id is None

    def with_identity(self: RecordT, record_id: int) -> RecordT:
        """Return a persisted copy of this record carrying `record_id`."""
        return self.model_copy(update={"id": record_id})


RecordT = TypeVar("RecordT", bound=LedgerRecord)


class Ship(LedgerRecord):
    """
    Representation of a single row in the `ships` table.
    """

    name: str = Field(..., description="Ship name.")
    tonnage: float = Field(..., description="Tonnage; must be strictly positive to persist.")


class Container(LedgerRecord):
    """
    Representation of a single row in the `containers` table.
    """

    contents: str = Field(..., description="Free-text description of the contents.")
    weight: float = Field(..., description="Weight; must be strictly positive to persist.")


__all__ = ["LedgerRecord", "RecordT", "Ship", "Container"]
