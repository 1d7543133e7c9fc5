from unittest.mock import MagicMock

import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from sehc.core.errors import STOCK_CONFLICT_MESSAGE
from sehc.handlers import services as service_handlers
from sehc.models import InventoryItem, Service, ServiceInventoryItem
from sehc.schemas import ServiceCreate


@pytest.fixture()
def service_payload(make_vehicle, registered_user):
    vehicle = make_vehicle()

    def _payload(**overrides):
        payload = {
            "idVehicle": vehicle["id"],
            "idUser": registered_user["id"],
            "idStatus": 1,
            "idType": 2,
            "idPriority": 1,
            "diagnostic": "Brakes squeal on stop",
            "gasLevel": "1/2",
            "km": 48210,
            "serviceDetails": {"checks": ["brakes", "tyres"]},
            "totalCost": 1250.5,
            "serviceNotes": "Customer waits",
        }
        payload.update(overrides)
        return payload

    return _payload


def _quantity(client, headers, item_id):
    return client.get(f"/inventory/{item_id}", headers=headers).json()["quantity"]


def _count(db_session, model):
    return db_session.query(model).count()


def test_brake_pad_scenario(client, auth_headers, make_item, service_payload):
    item = make_item(name="Brake Pad", quantity=10, price=25.0)

    first = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 3}]),
        headers=auth_headers,
    )
    assert first.status_code == 201
    assert first.json()["id"] > 0
    assert _quantity(client, auth_headers, item["id"]) == 7

    second = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 8}]),
        headers=auth_headers,
    )
    assert second.status_code == 409
    assert second.json() == {"error": STOCK_CONFLICT_MESSAGE}
    assert _quantity(client, auth_headers, item["id"]) == 7


def test_created_service_links_each_line(client, auth_headers, make_item, service_payload, db_session):
    pads = make_item(name="Brake Pad", quantity=10)
    oil = make_item(name="Oil 5W-30", quantity=6, price=180)

    response = client.post(
        "/service",
        json=service_payload(
            inventoryItems=[
                {"inventoryItemId": pads["id"], "quantity": 2},
                {"inventoryItemId": oil["id"], "quantity": 4},
            ]
        ),
        headers=auth_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert [(line["inventoryItemId"], line["quantity"]) for line in body["inventoryItems"]] == [
        (pads["id"], 2),
        (oil["id"], 4),
    ]
    assert body["inventoryItems"][0]["name"] == "Brake Pad"
    assert body["serviceDetails"] == {"checks": ["brakes", "tyres"]}
    assert body["totalCost"] == 1250.5

    assert _count(db_session, Service) == 1
    assert _count(db_session, ServiceInventoryItem) == 2
    assert _quantity(client, auth_headers, pads["id"]) == 8
    assert _quantity(client, auth_headers, oil["id"]) == 2


def test_service_without_inventory_lines(client, auth_headers, service_payload):
    response = client.post("/service", json=service_payload(), headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["inventoryItems"] == []


def test_shortfall_on_any_line_leaves_everything_untouched(
    client, auth_headers, make_item, service_payload, db_session
):
    plenty = make_item(name="Filter", quantity=10)
    scarce = make_item(name="Rotor", quantity=1)

    response = client.post(
        "/service",
        json=service_payload(
            inventoryItems=[
                {"inventoryItemId": plenty["id"], "quantity": 5},
                {"inventoryItemId": scarce["id"], "quantity": 2},
            ]
        ),
        headers=auth_headers,
    )
    assert response.status_code == 409
    assert _count(db_session, Service) == 0
    assert _count(db_session, ServiceInventoryItem) == 0
    assert _quantity(client, auth_headers, plenty["id"]) == 10
    assert _quantity(client, auth_headers, scarce["id"]) == 1


def test_repeated_item_lines_are_checked_together(client, auth_headers, make_item, service_payload, db_session):
    item = make_item(quantity=10)
    response = client.post(
        "/service",
        json=service_payload(
            inventoryItems=[
                {"inventoryItemId": item["id"], "quantity": 6},
                {"inventoryItemId": item["id"], "quantity": 6},
            ]
        ),
        headers=auth_headers,
    )
    assert response.status_code == 409
    assert _count(db_session, Service) == 0
    assert _quantity(client, auth_headers, item["id"]) == 10


def test_unknown_inventory_item_is_stock_conflict(client, auth_headers, service_payload):
    response = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": 999, "quantity": 1}]),
        headers=auth_headers,
    )
    assert response.status_code == 409


def test_missing_required_ids(client, auth_headers):
    response = client.post("/service", json={"idVehicle": 1, "idUser": 1}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "idStatus, idType and idPriority are required fields"}


def test_missing_required_ids_never_touch_the_database():
    db = MagicMock(spec=Session)
    result = service_handlers.create_service(db, ServiceCreate(idStatus=0, idType=0, idPriority=0))
    assert result.status == 400
    assert result.body == {"error": "idVehicle and idUser are required fields"}
    assert db.method_calls == []


def test_zero_ids_count_as_present(client, auth_headers, service_payload):
    response = client.post("/service", json=service_payload(idStatus=0), headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["idStatus"] == 0


def test_non_positive_line_quantity_is_rejected(client, auth_headers, make_item, service_payload):
    item = make_item()
    response = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 0}]),
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_unknown_vehicle_or_user(client, auth_headers, service_payload):
    assert client.post("/service", json=service_payload(idVehicle=999), headers=auth_headers).status_code == 404
    assert client.post("/service", json=service_payload(idUser=999), headers=auth_headers).status_code == 404


def test_guarded_decrement_catches_what_the_precheck_missed(
    client, auth_headers, make_item, service_payload, db_session, monkeypatch
):
    item = make_item(quantity=7)
    monkeypatch.setattr(service_handlers, "check_stock", lambda db, totals: None)

    response = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 8}]),
        headers=auth_headers,
    )
    assert response.status_code == 409
    assert _count(db_session, Service) == 0
    assert _count(db_session, ServiceInventoryItem) == 0
    assert _quantity(client, auth_headers, item["id"]) == 7


def test_failure_mid_transaction_rolls_back_earlier_decrements(
    client, auth_headers, make_item, service_payload, db_session, monkeypatch
):
    first = make_item(name="Pads", quantity=5)
    second = make_item(name="Discs", quantity=5)
    real_decrement = service_handlers.decrement_stock

    def flaky_decrement(db, item_id, quantity):
        if item_id == second["id"]:
            raise OperationalError("UPDATE inventory_items", {}, Exception("connection lost"))
        real_decrement(db, item_id, quantity)

    monkeypatch.setattr(service_handlers, "decrement_stock", flaky_decrement)

    response = client.post(
        "/service",
        json=service_payload(
            inventoryItems=[
                {"inventoryItemId": first["id"], "quantity": 2},
                {"inventoryItemId": second["id"], "quantity": 2},
            ]
        ),
        headers=auth_headers,
    )
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert _count(db_session, Service) == 0
    assert _quantity(client, auth_headers, first["id"]) == 5
    assert _quantity(client, auth_headers, second["id"]) == 5


def test_check_constraint_rejects_negative_stock(db_session, make_item):
    item = make_item(quantity=1)
    with pytest.raises(IntegrityError) as excinfo:
        db_session.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item["id"])
            .values(quantity=InventoryItem.quantity - 2)
            .execution_options(synchronize_session=False)
        )
        db_session.commit()
    db_session.rollback()
    assert service_handlers.is_stock_violation(excinfo.value)
    assert db_session.get(InventoryItem, item["id"]).quantity == 1


def test_get_and_list_services(client, auth_headers, make_item, service_payload):
    item = make_item()
    created = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 1}]),
        headers=auth_headers,
    ).json()

    fetched = client.get(f"/service/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["inventoryItems"][0]["inventoryItemId"] == item["id"]

    listed = client.get("/service", params={"idVehicle": created["idVehicle"]}, headers=auth_headers)
    assert [s["id"] for s in listed.json()] == [created["id"]]

    assert client.get("/service", params={"idVehicle": 999}, headers=auth_headers).json() == []
    assert client.get("/service/999", headers=auth_headers).status_code == 404


def test_history_blocks_vehicle_client_and_item_deletion(client, auth_headers, make_item, service_payload):
    item = make_item()
    created = client.post(
        "/service",
        json=service_payload(inventoryItems=[{"inventoryItemId": item["id"], "quantity": 1}]),
        headers=auth_headers,
    ).json()
    vehicle = client.get(f"/vehicle/getVehicle/{created['idVehicle']}", headers=auth_headers).json()

    assert client.delete(f"/vehicle/deleteVehicle/{vehicle['id']}", headers=auth_headers).status_code == 409
    assert client.delete(f"/client/deleteClient/{vehicle['idClient']}", headers=auth_headers).status_code == 409
    assert client.delete(f"/inventory/{item['id']}", headers=auth_headers).status_code == 409
