"""
In-memory record store.

Used as the test double for the services and by `cargo-ledger demo --backend
memory`. Semantics follow the PostgreSQL store:

- identities come from a monotonically increasing counter that rollback never
  rewinds;
- writes made inside `transaction()` are staged per thread and only become
  visible to other threads on commit;
- nested `transaction()` blocks behave as savepoints.
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from typing import Dict, Generic, Iterator, List, Optional, Sequence

from cargo_ledger.domain.models import RecordT
from cargo_ledger.utils.logging import get_logger

log = get_logger(__name__)


class InMemoryRecordStore(Generic[RecordT]):
    """Thread-safe dict-backed store for one record kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._rows: Dict[int, RecordT] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._local = threading.local()

    # -- transaction bookkeeping -------------------------------------------

    def _staged(self) -> Optional[List[RecordT]]:
        return getattr(self._local, "staged", None)

    def _savepoints(self) -> List[int]:
        marks = getattr(self._local, "savepoints", None)
        if marks is None:
            marks = self._local.savepoints = []
        return marks

    @contextmanager
    def transaction(self) -> Iterator[None]:
        savepoints = self._savepoints()
        outermost = not savepoints
        staged = [] if outermost else self._staged()
        if outermost:
            self._local.staged = staged
        savepoints.append(len(staged))
        try:
            yield
        except BaseException:
            mark = savepoints.pop()
            discarded = len(staged) - mark
            del staged[mark:]
            if outermost:
                self._local.staged = None
            log.debug(
                "Transaction rolled back",
                extra={"kind": self.kind, "discarded": discarded, "nested": not outermost},
            )
            raise
        savepoints.pop()
        if outermost:
            self._local.staged = None
            with self._lock:
                for record in staged:
                    self._rows[record.id] = record
            log.debug("Transaction committed", extra={"kind": self.kind, "count": len(staged)})

    # -- RecordStore ---------------------------------------------------------

    def create(self, record: RecordT) -> RecordT:
        with self._lock:
            persisted = record.with_identity(next(self._ids))
            staged = self._staged()
            if staged is None:
                self._rows[persisted.id] = persisted
        if staged is not None:
            staged.append(persisted)
        return persisted

    def create_all(self, records: Sequence[RecordT]) -> List[RecordT]:
        with self.transaction():
            return [self.create(record) for record in records]

    def find_all(self) -> List[RecordT]:
        with self._lock:
            visible = list(self._rows.values())
        visible.extend(self._staged() or ())
        return sorted(visible, key=lambda record: record.id)

    def find_by_id(self, record_id: int) -> Optional[RecordT]:
        for record in self._staged() or ():
            if record.id == record_id:
                return record
        with self._lock:
            return self._rows.get(record_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)


__all__ = ["InMemoryRecordStore"]
