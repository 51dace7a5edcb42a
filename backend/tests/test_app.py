import logging

from fastapi.testclient import TestClient

from app.deps import get_store
from app.main import app


class _BrokenStore:
    def list_all(self):
        raise RuntimeError("db down")


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["service"] == "transactions-api"


def test_unhandled_error_is_generic_500(caplog):
    app.dependency_overrides[get_store] = lambda: _BrokenStore()
    try:
        c = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.ERROR, logger="app.main"):
            r = c.get("/transactions/all")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error."}
    # causa só no log do servidor
    assert "db down" not in r.text
    assert any("Unexpected error" in rec.getMessage() for rec in caplog.records)


def test_every_request_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="app.main"):
        client.get("/transactions/123")
    assert any(rec.getMessage() == "GET /transactions/123" for rec in caplog.records)


def test_transactions_need_no_credentials(client):
    assert client.get("/transactions/all").status_code == 200
    assert client.post("/auth/login", json={"username": "dev", "password": "dev"}).status_code == 404
