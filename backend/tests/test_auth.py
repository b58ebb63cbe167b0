import jwt

from gestion_alquiler.core.security import create_access_token, decode_token
from gestion_alquiler.services.auth import AuthService


def test_login_returns_token(anonymous_client, settings):
    response = anonymous_client.post("/api/v1/auth/login", json={"username": "admin", "password": "admin"})
    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "admin"
    assert data["expires"] == settings.JWT_EXPIRE_MINUTES * 60

    payload = jwt.decode(data["token"], settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert payload["sub"] == "admin"
    assert payload["role"] == "admin"
    assert "password" not in payload


def test_login_with_wrong_password(anonymous_client):
    response = anonymous_client.post("/api/v1/auth/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password"


def test_login_with_unknown_user(anonymous_client):
    response = anonymous_client.post("/api/v1/auth/login", json={"username": "ghost", "password": "admin"})
    assert response.status_code == 401


def test_invalid_token_is_rejected(anonymous_client):
    response = anonymous_client.get("/api/v1/apartments", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["error"] == "INVALID_TOKEN"


def test_expired_token_is_rejected(anonymous_client, settings):
    expired = settings.model_copy(update={"JWT_EXPIRE_MINUTES": -1})
    token, _ = create_access_token("admin", "admin", expired)
    response = anonymous_client.get("/api/v1/apartments", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "TOKEN_EXPIRED"


def test_token_round_trip(settings):
    token, expires = create_access_token("maria", "user", settings)
    payload = decode_token(token, settings)
    assert payload["sub"] == "maria"
    assert payload["role"] == "user"
    assert payload["exp"] - payload["iat"] == expires


def test_bootstrap_admin_is_created_once(client, app, settings):
    db = app.state.database.session()
    try:
        AuthService(db, app.state.cipher, settings).create_admin_user()
    finally:
        db.close()

    users = client.get("/api/v1/users").json()
    assert users["pagination"]["items"]["total"] == 1
    assert users["results"][0]["username"] == "admin"
    assert users["results"][0]["role"] == "admin"
