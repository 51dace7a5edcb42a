import logging
import math

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.errors import TransactionNotFound
from app.deps import get_store
from app.filters import TransactionFilter, transaction_filters
from app.schemas.transaction import (
    ErrorResponse,
    Summary,
    SummaryResponse,
    TransactionIn,
    TransactionListResponse,
    TransactionOut,
    TransactionPageResponse,
    TransactionResponse,
    TransactionType,
    ValidationErrorResponse,
)
from app.store.base import TransactionStore

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={400: {"model": ValidationErrorResponse}},
)

logger = logging.getLogger(__name__)

_NOT_FOUND = {404: {"model": ErrorResponse}}

# OFFSET = (page-1)*limit precisa caber em BIGINT com limit=100
MAX_PAGE = (2**63 - 1) // 100


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_transaction(payload: TransactionIn, store: TransactionStore = Depends(get_store)):
    t = store.create(payload)
    logger.info("transaction created id=%s type=%s amount=%s", t.id, t.type, t.amount)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=TransactionPageResponse)
def list_transactions(
    limit: int = Query(10, ge=10, le=100),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    flt: TransactionFilter = Depends(transaction_filters),
    store: TransactionStore = Depends(get_store),
):
    rows, total = store.find_all(flt, limit=limit, offset=(page - 1) * limit)
    return TransactionPageResponse(
        transactions=[TransactionOut.model_validate(r) for r in rows],
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )


@router.get("/all", response_model=TransactionListResponse)
def list_all_transactions(store: TransactionStore = Depends(get_store)):
    """Lista sem paginação nem filtro (id desc)."""
    return TransactionListResponse(transactions=[TransactionOut.model_validate(r) for r in store.list_all()])


@router.get("/summary", response_model=SummaryResponse)
def summary(
    flt: TransactionFilter = Depends(transaction_filters),
    store: TransactionStore = Depends(get_store),
):
    credit = store.aggregate_sum(flt, TransactionType.CREDIT)
    debit = store.aggregate_sum(flt, TransactionType.DEBIT)
    return SummaryResponse(summary=Summary(total_credit=credit, total_debit=debit, net_balance=credit - debit))


@router.get("/{transaction_id}", response_model=TransactionResponse, responses=_NOT_FOUND)
def get_transaction(transaction_id: int, store: TransactionStore = Depends(get_store)):
    t = store.find_by_id(transaction_id)
    if t is None:
        raise TransactionNotFound(transaction_id)
    return TransactionResponse(transaction=TransactionOut.model_validate(t))


@router.put("/{transaction_id}", response_class=Response, responses=_NOT_FOUND)
def update_transaction(transaction_id: int, payload: TransactionIn, store: TransactionStore = Depends(get_store)):
    # substituição completa: o payload traz todos os campos
    t = store.update(transaction_id, payload)
    if t is None:
        raise TransactionNotFound(transaction_id)
    logger.info("transaction updated id=%s", transaction_id)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, responses=_NOT_FOUND)
def delete_transaction(transaction_id: int, store: TransactionStore = Depends(get_store)):
    if not store.delete(transaction_id):
        raise TransactionNotFound(transaction_id)
    logger.info("transaction deleted id=%s", transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
