from datetime import datetime

from app.filters import TransactionFilter
from app.schemas.transaction import TransactionIn, TransactionType

YEAR_2024 = TransactionFilter(start=datetime(2024, 1, 1), end=datetime(2024, 12, 31, 23, 59, 59, 999999))


def _tx(**overrides) -> TransactionIn:
    data = {
        "title": "Conta de luz",
        "amount": 180,
        "type": "debit",
        "category": "UTILITY",
        "paymentMethod": "BANK_SLIP",
        "transactionDate": "2024-07-10",
    }
    data.update(overrides)
    return TransactionIn.model_validate(data)


def test_create_stores_fields_exactly(store):
    t = store.create(_tx())
    got = store.find_by_id(t.id)
    assert got is not None
    assert got.title == "Conta de luz"
    assert got.amount == 180
    assert got.type == "debit"
    assert got.category == "UTILITY"
    assert got.payment_method == "BANK_SLIP"
    assert got.transaction_date == datetime(2024, 7, 10)


def test_missing_ids(store):
    assert store.find_by_id(99) is None
    assert store.update(99, _tx()) is None
    assert store.delete(99) is False
    assert store.list_all() == []


def test_find_all_slices_and_counts(store):
    for d in range(1, 16):
        store.create(_tx(title=f"d{d}", transactionDate=f"2024-01-{d:02d}"))
    store.create(_tx(title="fora", transactionDate="2023-12-31"))

    rows, total = store.find_all(YEAR_2024, limit=10, offset=10)
    assert total == 15
    assert [r.title for r in rows] == ["d5", "d4", "d3", "d2", "d1"]


def test_find_all_breaks_date_ties_by_id_desc(store):
    a = store.create(_tx(title="a"))
    b = store.create(_tx(title="b"))
    rows, _ = store.find_all(YEAR_2024, limit=10, offset=0)
    assert [r.id for r in rows] == [b.id, a.id]


def test_update_is_full_replace(store):
    t = store.create(_tx())
    store.update(t.id, _tx(title="Salário", amount=4000, type="credit", category="SALARY",
                           paymentMethod="PIX", transactionDate="2024-08-01"))
    got = store.find_by_id(t.id)
    assert (got.id, got.title, got.amount, got.type, got.category, got.payment_method) == (
        t.id, "Salário", 4000, "credit", "SALARY", "PIX",
    )
    assert got.transaction_date == datetime(2024, 8, 1)


def test_delete_removes_once(store):
    t = store.create(_tx())
    assert store.delete(t.id) is True
    assert store.delete(t.id) is False
    assert store.find_by_id(t.id) is None


def test_aggregate_sum_per_type(store):
    store.create(_tx(amount=10.5, type="credit"))
    store.create(_tx(amount=20, type="credit"))
    store.create(_tx(amount=7, type="debit"))
    store.create(_tx(amount=1000, type="credit", transactionDate="2020-01-01"))

    assert store.aggregate_sum(YEAR_2024, TransactionType.CREDIT) == 30.5
    assert store.aggregate_sum(YEAR_2024, TransactionType.DEBIT) == 7


def test_aggregate_sum_is_zero_when_empty(store):
    assert store.aggregate_sum(YEAR_2024, TransactionType.CREDIT) == 0
    assert store.aggregate_sum(YEAR_2024, TransactionType.DEBIT) == 0


def test_ids_beyond_int64_are_missing(store):
    store.create(_tx())
    for tx_id in (2**63, -(2**63) - 1, 10**20):
        assert store.find_by_id(tx_id) is None
        assert store.update(tx_id, _tx()) is None
        assert store.delete(tx_id) is False
    assert len(store.list_all()) == 1
