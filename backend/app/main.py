import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import TransactionNotFound
from app.core.logging import configure_logging
from app.core.settings import settings
from app.db import Base, engine
from app.models.transaction import Transaction  # noqa: F401  (registra a tabela no metadata)
from app.store.memory import InMemoryTransactionStore

from app.api.transaction import router as transaction_router

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.STORE_BACKEND == "sql" and settings.DB_CREATE_ALL:
        Base.metadata.create_all(bind=engine)
    logger.info("startup env=%s store=%s", settings.ENV, settings.STORE_BACKEND)
    yield


app = FastAPI(title=settings.APP_NAME, version=VERSION, lifespan=lifespan)

# store em memória vive na app (não no módulo); só é usado com STORE_BACKEND=memory
app.state.transaction_store = InMemoryTransactionStore()

app.include_router(transaction_router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


def _issue(err: dict) -> dict:
    loc = [str(p) for p in err.get("loc", ())]
    if loc and loc[0] in ("body", "query", "path", "header"):
        loc = loc[1:]
    return {
        "field": ".".join(loc),
        "message": str(err.get("msg", "")),
        "type": str(err.get("type", "")),
    }


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"message": "Validation error.", "issues": [_issue(e) for e in exc.errors()]},
    )


@app.exception_handler(TransactionNotFound)
async def not_found_handler(request: Request, exc: TransactionNotFound):
    logger.debug("not found id=%s path=%s", exc.transaction_id, request.url.path)
    return JSONResponse(status_code=404, content={"error": TransactionNotFound.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error."})


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "transactions-api",
        "env": settings.ENV,
        "version": VERSION,
        "store": settings.STORE_BACKEND,
    }
