"""
All-or-nothing batch persistence for Cargo Ledger records.

A batch is validated in a single left-to-right pass. The first record whose
constrained field is not strictly positive aborts the call with the kind's
typed error; records after it are never examined. Only a fully valid batch is
written, with one `create_all` inside the store's transactional scope, so the
durable state after a call holds either every record of the batch or none.
"""

from __future__ import annotations

import abc
from typing import ClassVar, Generic, List, Sequence, Type

from cargo_ledger.domain.errors import (
    AlreadyPersisted,
    BatchValidationError,
    InvalidTonnage,
    NegativeWeight,
    NotFound,
)
from cargo_ledger.domain.models import Container, RecordT, Ship
from cargo_ledger.repositories.abstract import RecordStore
from cargo_ledger.utils.logging import get_logger

log = get_logger(__name__)


class BatchPersister(abc.ABC, Generic[RecordT]):
    """
    Validate-then-persist service over one record store.

    Subclasses set `error_type` and implement `constrained_value`.
    """

    error_type: ClassVar[Type[BatchValidationError]]

    def __init__(self, store: RecordStore[RecordT]) -> None:
        self._store = store

    @property
    def kind(self) -> str:
        return self._store.kind

    @abc.abstractmethod
    def constrained_value(self, record: RecordT) -> float:  # pragma: no cover - interface only
        """Return the field that must be strictly positive."""
        raise NotImplementedError

    def validate(self, records: Sequence[RecordT]) -> None:
        """
        Check every record in order and raise on the first violation.

        Raises
        ------
        AlreadyPersisted
            A record already carries an identity.
        BatchValidationError
            The subclass's `error_type` for the first non-positive value.
        """
        for index, record in enumerate(records):
            if record.id is not None:
                raise AlreadyPersisted(self.kind, index, record.id)
            value = self.constrained_value(record)
            # NaN fails this comparison too.
            if not value > 0:
                raise self.error_type(index, value)

    def add_all(self, records: Sequence[RecordT]) -> List[RecordT]:
        """
        Persist a batch of transient records as one unit.

        Parameters
        ----------
        records : Sequence
            Transient records of this service's kind.

        Returns
        -------
        list
            Persisted records in input order, each with its assigned identity.
        """
        batch = list(records)
        log.info(f"[BATCH START] {self.kind}", extra={"kind": self.kind, "size": len(batch)})
        try:
            with self._store.transaction():
                self.validate(batch)
                persisted = self._store.create_all(batch)
        except BatchValidationError as exc:
            log.warning(
                f"[BATCH REJECTED] {self.kind}",
                extra={"kind": self.kind, "index": exc.index, "value": exc.value},
            )
            raise
        log.info(
            f"[BATCH COMMIT] {self.kind}",
            extra={"kind": self.kind, "count": len(persisted)},
        )
        return persisted

    def get_all(self) -> List[RecordT]:
        """Return every persisted record of this kind ordered by identity."""
        return self._store.find_all()

    def get_by_id(self, record_id: int) -> RecordT:
        """
        Return the persisted record with `record_id`.

        Raises
        ------
        NotFound
            No record of this kind has that identity.
        """
        record = self._store.find_by_id(record_id)
        if record is None:
            raise NotFound(self.kind, record_id)
        return record


class ShipService(BatchPersister[Ship]):
    """Batch persistence for ships; rejects tonnage <= 0."""

    error_type = InvalidTonnage

    def constrained_value(self, record: Ship) -> float:
        return record.tonnage


class ContainerService(BatchPersister[Container]):
    """Batch persistence for containers; rejects weight <= 0."""

    error_type = NegativeWeight

    def constrained_value(self, record: Container) -> float:
        return record.weight


__all__ = ["BatchPersister", "ShipService", "ContainerService"]
