import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base
from app.deps import get_store
from app.main import app
from app.models.transaction import Transaction  # noqa: F401
from app.store.memory import InMemoryTransactionStore
from app.store.sql import SqlTransactionStore


@pytest.fixture
def session_factory():
    # sqlite em memória compartilhado entre threads (TestClient roda handlers sync no threadpool)
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store_factory(request, session_factory):
    """Devolve uma função que abre o store de um request (mesmo banco durante o teste)."""
    if request.param == "memory":
        mem = InMemoryTransactionStore()
        yield lambda: (mem, None)
    else:
        def _open():
            db = session_factory()
            return SqlTransactionStore(db), db
        yield _open


@pytest.fixture
def store(store_factory):
    s, db = store_factory()
    yield s
    if db is not None:
        db.close()


@pytest.fixture
def client(store_factory):
    def _override():
        s, db = store_factory()
        try:
            yield s
        finally:
            if db is not None:
                db.close()

    app.dependency_overrides[get_store] = _override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_tx():
    def _make(**overrides):
        payload = {
            "title": "Mercado",
            "amount": 150.5,
            "type": "debit",
            "category": "FOOD",
            "paymentMethod": "DEBIT_CARD",
            "transactionDate": "2024-03-10",
        }
        payload.update(overrides)
        return payload

    return _make
