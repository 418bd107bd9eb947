"""
Record store interface for Cargo Ledger.

A store owns one table (one record kind): it creates records with a
store-assigned identity, reads them back, and provides a transactional scope
that commits on normal exit and rolls back when an exception escapes. Services
receive a store explicitly so tests can substitute the in-memory store.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from cargo_ledger.domain.models import RecordT


@runtime_checkable
class RecordStore(Protocol[RecordT]):
    """
    Create/read-by-id/read-all over one record kind.

    Attributes
    ----------
    kind : str
        Machine-friendly record kind, e.g. "ship".
    """

    kind: str

    def create(self, record: RecordT) -> RecordT:
        """Persist one transient record and return it with its identity."""
        ...

    def create_all(self, records: Sequence[RecordT]) -> List[RecordT]:
        """Persist records as one write unit, preserving order."""
        ...

    def find_all(self) -> List[RecordT]:
        """Return every visible record ordered by identity."""
        ...

    def find_by_id(self, record_id: int) -> Optional[RecordT]:
        """Return the record with `record_id`, or None."""
        ...

    def transaction(self) -> AbstractContextManager[None]:
        """
        Open a transactional scope.

        Commits when the block exits normally, rolls back when it raises.
        Nested scopes act as savepoints.
        """
        ...


__all__ = ["RecordStore"]
