import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["API_PREFIX"] = ""
os.environ["LOG_DIR"] = ""
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from sehc.core.database import get_db, init_db  # noqa: E402
from sehc.main import app  # noqa: E402
from sehc.models import Base  # noqa: E402


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def registered_user(client):
    response = client.post(
        "/auth/register",
        json={"username": "jaimespartan117", "name": "Jaime", "lastName": "Zaragoza"},
    )
    assert response.status_code == 201
    return response.json()["user"]


@pytest.fixture()
def auth_headers(client, registered_user):
    response = client.post("/auth/login", json={"username": registered_user["username"]})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def make_client(client, auth_headers):
    def _make(**overrides):
        payload = {"name": "Juan", "lastName": "Escutia", "phone": "6692708747", "invoice": False}
        payload.update(overrides)
        response = client.post("/client/newClient", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_vehicle(client, auth_headers, make_client):
    counter = {"n": 0}

    def _make(id_client=None, **overrides):
        counter["n"] += 1
        if id_client is None:
            id_client = make_client()["id"]
        payload = {
            "idClient": id_client,
            "brand": "Honda",
            "model": "Civic",
            "year": 2022,
            "color": "Rojo",
            "plate": f"ABC-{counter['n']:03d}",
            "doors": 4,
            "motor": "2.0L",
        }
        payload.update(overrides)
        response = client.post("/vehicle/newVehicle", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_item(client, auth_headers):
    def _make(**overrides):
        payload = {"name": "Brake Pad", "description": "Front pads", "quantity": 10, "price": 25.0}
        payload.update(overrides)
        response = client.post("/inventory", json=payload, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
