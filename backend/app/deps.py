from typing import Iterator

from fastapi import Request

from app.core.settings import settings
from app.db import SessionLocal
from app.store.base import TransactionStore
from app.store.sql import SqlTransactionStore


# dependency padrão FastAPI: store injetado no handler (tests sobrescrevem via dependency_overrides)
def get_store(request: Request) -> Iterator[TransactionStore]:
    if settings.STORE_BACKEND == "memory":
        # instância única da app, criada no startup (app.state)
        yield request.app.state.transaction_store
        return

    db = SessionLocal()
    try:
        yield SqlTransactionStore(db)
    finally:
        db.close()
