import json
import logging
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from sehc.core import results
from sehc.core.database import get_db
from sehc.core.errors import validation_message
from sehc.handlers import inventory as inventory_handlers
from sehc.main import app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_db_check(client):
    assert client.get("/db-check").json() == {"database": "ok"}


def test_failure_envelope_shape():
    result = results.conflict("Username already taken")
    assert result.is_error
    response = result.to_response()
    assert response.status_code == 409
    assert json.loads(response.body) == {"error": "Username already taken"}


def test_no_content_has_empty_body():
    response = results.no_content().to_response()
    assert response.status_code == 204
    assert response.body == b""


def test_validation_message_for_bad_type():
    errors = [{"type": "int_parsing", "loc": ("body", "idClient"), "msg": "Input should be a valid integer"}]
    assert validation_message(errors) == "Invalid value for idClient: Input should be a valid integer"


def test_malformed_json_body(client, auth_headers):
    response = client.post(
        "/inventory",
        content="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Request body is not valid JSON"}


@pytest.fixture()
def lenient_client(client):
    return TestClient(app, raise_server_exceptions=False)


def _assert_internal_error(response):
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "Internal server error"}
    assert "Traceback" not in response.text


def test_unexpected_error_returns_json_envelope(lenient_client, auth_headers, monkeypatch):
    def explode(db, item_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(inventory_handlers, "get_item", explode)
    _assert_internal_error(lenient_client.get("/inventory/1", headers=auth_headers))


def test_out_of_range_ids_return_json_envelope(lenient_client, auth_headers):
    huge = 10**20
    _assert_internal_error(lenient_client.get(f"/inventory/{huge}", headers=auth_headers))


def test_database_outage_during_authentication(lenient_client, auth_headers):
    broken = MagicMock(spec=Session)
    broken.get.side_effect = OperationalError("SELECT users", {}, Exception("connection refused"))

    def broken_db():
        yield broken

    app.dependency_overrides[get_db] = broken_db
    _assert_internal_error(lenient_client.get("/client/getAllClients", headers=auth_headers))


def test_failed_request_is_still_logged(lenient_client, auth_headers, monkeypatch, caplog):
    def explode(db, item_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(inventory_handlers, "get_item", explode)
    with caplog.at_level(logging.INFO, logger="sehc.http"):
        lenient_client.get("/inventory/1", headers=auth_headers)

    lines = [record.getMessage() for record in caplog.records if record.name == "sehc.http"]
    assert any(line.startswith("GET /inventory/1 -> 500") for line in lines)
