from sqlalchemy import String, Numeric, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.db import Base
from datetime import datetime

class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200))

    # sempre > 0; o sinal vem de `type`
    amount: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False))

    # "credit" (entrada) ou "debit" (saida)
    type: Mapped[str] = mapped_column(String(6), index=True)

    category: Mapped[str] = mapped_column(String(20))
    payment_method: Mapped[str] = mapped_column(String(20))

    # data do lançamento (base para filtros e resumo)
    transaction_date: Mapped[datetime] = mapped_column(DateTime, index=True)
