from __future__ import annotations

import calendar
from datetime import date, datetime, timezone

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict

from app.schemas.transaction import TransactionType


class TransactionFilter(BaseModel):
    """Filtro montado uma vez por request e repassado ao store sem ser inspecionado no handler."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    type: TransactionType | None = None
    start: datetime
    end: datetime


def _invalid(field: str, message: str, value) -> RequestValidationError:
    return RequestValidationError([
        {"loc": ("query", field), "msg": message, "type": "value_error", "input": value},
    ])


def _day_range(d: date) -> tuple[datetime, datetime]:
    return datetime(d.year, d.month, d.day), datetime(d.year, d.month, d.day, 23, 59, 59, 999999)


def _month_range(year: int, month: int) -> tuple[datetime, datetime]:
    # dezembro fecha em 31/12; não depende de virar o ano
    last = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last, 23, 59, 59, 999999)


def _year_range(year: int) -> tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59, 999999)


def resolve_date_range(
    start_date: date | None = None,
    end_date: date | None = None,
    day: int | None = None,
    month: int | None = None,
    year: int | None = None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Resolve o intervalo [start, end] (inclusivo) do filtro de data.

    Precedência:
      1. start_date + end_date => [start 00:00:00, end 23:59:59.999999]
      2. month + year (day opcional) => o mês inteiro, ou só o dia
      3. year => o ano inteiro
      4. nada disso => ano corrente (vale mesmo sem nenhum filtro de data)
    """
    if start_date is not None and end_date is not None:
        if start_date > end_date:
            raise _invalid("startDate", "startDate cannot be after endDate", start_date.isoformat())
        return _day_range(start_date)[0], _day_range(end_date)[1]

    if month is not None and year is not None:
        if day is not None:
            try:
                d = date(year, month, day)
            except ValueError:
                raise _invalid("day", f"day {day} does not exist in {year}-{month:02d}", day)
            return _day_range(d)
        return _month_range(year, month)

    if year is not None:
        return _year_range(year)

    current = (now or datetime.now(timezone.utc)).year
    return _year_range(current)


def transaction_filters(
    title: str | None = Query(None, max_length=200),
    type_: TransactionType | None = Query(None, alias="type"),
    start_date: date | None = Query(None, alias="startDate", description="YYYY-MM-DD"),
    end_date: date | None = Query(None, alias="endDate", description="YYYY-MM-DD"),
    day: int | None = Query(None, ge=1, le=31),
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None, ge=1900, le=9999),
) -> TransactionFilter:
    start, end = resolve_date_range(start_date, end_date, day, month, year)
    t = (title or "").strip()
    return TransactionFilter(title=t or None, type=type_, start=start, end=end)
