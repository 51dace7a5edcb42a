from __future__ import annotations

import threading
from dataclasses import replace

from app.filters import TransactionFilter
from app.schemas.transaction import TransactionIn, TransactionType
from app.store.base import TransactionRecord, TransactionStore, record_fields


def _matches(r: TransactionRecord, flt: TransactionFilter) -> bool:
    if not (flt.start <= r.transaction_date <= flt.end):
        return False
    if flt.type is not None and r.type != flt.type.value:
        return False
    if flt.title and flt.title.casefold() not in r.title.casefold():
        return False
    return True


class InMemoryTransactionStore(TransactionStore):
    """Lista em memória, some no restart. O lock serializa os handlers (threadpool do FastAPI)."""

    def __init__(self) -> None:
        self._items: list[TransactionRecord] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, data: TransactionIn) -> TransactionRecord:
        with self._lock:
            rec = TransactionRecord(id=self._next_id, **record_fields(data))
            self._next_id += 1
            self._items.append(rec)
            return replace(rec)

    def find_all(self, flt: TransactionFilter, limit: int, offset: int) -> tuple[list[TransactionRecord], int]:
        with self._lock:
            rows = [r for r in self._items if _matches(r, flt)]
        rows.sort(key=lambda r: (r.transaction_date, r.id), reverse=True)
        return [replace(r) for r in rows[offset:offset + limit]], len(rows)

    def list_all(self) -> list[TransactionRecord]:
        with self._lock:
            rows = [replace(r) for r in self._items]
        rows.sort(key=lambda r: r.id, reverse=True)
        return rows

    def _index(self, transaction_id: int) -> int | None:
        for i, r in enumerate(self._items):
            if r.id == transaction_id:
                return i
        return None

    def find_by_id(self, transaction_id: int) -> TransactionRecord | None:
        with self._lock:
            i = self._index(transaction_id)
            return None if i is None else replace(self._items[i])

    def update(self, transaction_id: int, data: TransactionIn) -> TransactionRecord | None:
        with self._lock:
            i = self._index(transaction_id)
            if i is None:
                return None
            self._items[i] = TransactionRecord(id=transaction_id, **record_fields(data))
            return replace(self._items[i])

    def delete(self, transaction_id: int) -> bool:
        with self._lock:
            i = self._index(transaction_id)
            if i is None:
                return False
            del self._items[i]
            return True

    def aggregate_sum(self, flt: TransactionFilter, type_: TransactionType) -> float:
        with self._lock:
            return float(sum(r.amount for r in self._items if r.type == type_.value and _matches(r, flt)))
