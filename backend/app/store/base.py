from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from app.filters import TransactionFilter
from app.schemas.transaction import TransactionIn, TransactionType


@dataclass
class TransactionRecord:
    id: int
    title: str
    amount: float
    type: str
    category: str
    payment_method: str
    transaction_date: datetime


def record_fields(data: TransactionIn) -> dict[str, Any]:
    """Campos persistidos (tudo menos o id), com os enums já como str."""
    return {
        "title": data.title,
        "amount": float(data.amount),
        "type": data.type.value,
        "category": data.category.value,
        "payment_method": data.payment_method.value,
        "transaction_date": data.transaction_date,
    }


class TransactionStore(ABC):
    """Dono exclusivo das transações. Handlers só falam com esta interface."""

    @abstractmethod
    def create(self, data: TransactionIn) -> Any:
        """Persiste uma nova transação com id novo e devolve o registro."""

    @abstractmethod
    def find_all(self, flt: TransactionFilter, limit: int, offset: int) -> tuple[Sequence[Any], int]:
        """Página ordenada por transaction_date desc (id desc no empate) + total filtrado."""

    @abstractmethod
    def list_all(self) -> Sequence[Any]:
        """Todas as transações, id desc."""

    @abstractmethod
    def find_by_id(self, transaction_id: int) -> Any | None:
        ...

    @abstractmethod
    def update(self, transaction_id: int, data: TransactionIn) -> Any | None:
        """Substitui todos os campos (menos id). None se não existir."""

    @abstractmethod
    def delete(self, transaction_id: int) -> bool:
        """False se não existir; nunca levanta erro por id ausente."""

    @abstractmethod
    def aggregate_sum(self, flt: TransactionFilter, type_: TransactionType) -> float:
        """Soma de amount das transações filtradas de um tipo (0 quando não há nenhuma)."""
