from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.filters import TransactionFilter
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionIn, TransactionType
from app.store.base import TransactionStore, record_fields

logger = logging.getLogger(__name__)

# ids fora do INTEGER 64-bit não existem na tabela (e estouram o driver)
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


def _like_escape(s: str) -> str:
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _conditions(flt: TransactionFilter) -> list:
    conds = [
        Transaction.transaction_date >= flt.start,
        Transaction.transaction_date <= flt.end,
    ]
    if flt.type is not None:
        conds.append(Transaction.type == flt.type.value)
    if flt.title:
        conds.append(Transaction.title.ilike(f"%{_like_escape(flt.title)}%", escape="\\"))
    return conds


class SqlTransactionStore(TransactionStore):
    """Store sobre a tabela `transactions`; uma Session por request, um commit por mutação."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, data: TransactionIn) -> Transaction:
        t = Transaction(**record_fields(data))
        self.db.add(t)
        self.db.commit()
        self.db.refresh(t)
        return t

    def find_all(self, flt: TransactionFilter, limit: int, offset: int) -> tuple[list[Transaction], int]:
        conds = _conditions(flt)
        q = (
            select(Transaction)
            .where(*conds)
            .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
            .offset(offset)
            .limit(limit)
        )
        total = self.db.scalar(select(func.count(Transaction.id)).where(*conds)) or 0
        return list(self.db.scalars(q)), int(total)

    def list_all(self) -> list[Transaction]:
        return list(self.db.scalars(select(Transaction).order_by(Transaction.id.desc())))

    def find_by_id(self, transaction_id: int) -> Transaction | None:
        if not _ID_MIN <= transaction_id <= _ID_MAX:
            return None
        return self.db.get(Transaction, transaction_id)

    def update(self, transaction_id: int, data: TransactionIn) -> Transaction | None:
        t = self.find_by_id(transaction_id)
        if t is None:
            return None
        for k, v in record_fields(data).items():
            setattr(t, k, v)
        self.db.commit()
        self.db.refresh(t)
        return t

    def delete(self, transaction_id: int) -> bool:
        # checa existência antes (id ausente não pode virar 500)
        t = self.find_by_id(transaction_id)
        if t is None:
            return False
        self.db.delete(t)
        self.db.commit()
        return True

    def aggregate_sum(self, flt: TransactionFilter, type_: TransactionType) -> float:
        q = (
            select(func.coalesce(func.sum(Transaction.amount), 0))
            .where(*_conditions(flt))
            .where(Transaction.type == type_.value)
        )
        total = self.db.scalar(q)
        logger.debug("aggregate_sum type=%s start=%s end=%s total=%s", type_.value, flt.start, flt.end, total)
        return float(total or 0)
