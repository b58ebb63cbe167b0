import pytest
from fastapi.testclient import TestClient

from gestion_alquiler.core.config import Settings
from gestion_alquiler.main import create_app

# 2024-06-20 23:53 and 2024-06-26 00:53 in Madrid, a six-night stay in Q2
CHECK_IN = 1718920414000
CHECK_OUT = 1719356014000


@pytest.fixture
def settings():
    """Settings for an isolated in-memory database."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret-key",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="admin",
        ADMIN_EMAIL="admin@api.com",
        PAGINATION_LIMIT=10,
        LOG_LEVEL="WARNING"
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def anonymous_client(app):
    """Test client with the lifespan running and no credentials."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_token(anonymous_client):
    response = anonymous_client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin"})
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def client(anonymous_client, admin_token):
    """Test client authenticated as the bootstrap admin."""
    anonymous_client.headers.update({"Authorization": f"Bearer {admin_token}"})
    return anonymous_client


@pytest.fixture
def apartment(client):
    response = client.post("/api/v1/apartments", json={
        "name": "Atico Centro",
        "address": "Calle Mayor 1",
        "city": "Madrid",
        "postalCode": "28013",
        "country": "Spain"
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def rate(client, apartment):
    response = client.post("/api/v1/rates", json={
        "apartmentId": apartment["id"],
        "name": "Summer",
        "pricePerNight": 50,
        "iva": 21
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def intermediary(client):
    response = client.post("/api/v1/intermediaries", json={
        "name": "Booking",
        "surname": "Channel",
        "email": "partners@booking.test",
        "phone": "600000000",
        "commission": 15
    })
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def income_payload(apartment, rate, intermediary):
    return {
        "apartmentId": apartment["id"],
        "intermediaryId": intermediary["id"],
        "rateId": rate["id"],
        "checkIn": CHECK_IN,
        "checkOut": CHECK_OUT,
        "clientName": "Ana Garcia",
        "clientNif": "12345678Z",
        "clientPhone": "611111111",
        "numberOfPeople": 2,
        "discount": 10
    }


@pytest.fixture
def income(client, income_payload):
    response = client.post("/api/v1/incomes", json=income_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def expense_payload(apartment):
    return {
        "apartmentId": apartment["id"],
        "concept": "Cleaning",
        "date": 1713799590000,
        "providerNif": "B12345678",
        "expense": 100,
        "iva": 21,
        "paid": True
    }


@pytest.fixture
def expense(client, expense_payload):
    response = client.post("/api/v1/expenses", json=expense_payload)
    assert response.status_code == 201
    return response.json()
