import pytest


@pytest.fixture
def user(client):
    response = client.post("/api/v1/users", json={
        "username": "maria",
        "password": "secret",
        "email": "maria@example.com"
    })
    assert response.status_code == 201
    return response.json()


def login(client, username, password):
    return client.post("/api/v1/auth/login", json={"username": username, "password": password})


def test_create_user_defaults_to_user_role(user):
    assert user["username"] == "maria"
    assert user["role"] == "user"
    assert user["deleted"] is False
    assert "password" not in user


def test_duplicate_username_is_a_conflict(client, user):
    response = client.post("/api/v1/users", json={
        "username": "maria", "password": "other", "email": "other@example.com"
    })
    assert response.status_code == 409


@pytest.mark.parametrize("field,value", [("role", "root"), ("email", "not-an-email")])
def test_invalid_role_or_email(client, field, value):
    payload = {"username": "pepe", "password": "secret", "email": "pepe@example.com", field: value}
    assert client.post("/api/v1/users", json=payload).status_code == 422


def test_non_admin_cannot_manage_users(client, user):
    token = login(client, "maria", "secret").json()["token"]
    response = client.get("/api/v1/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


def test_non_admin_can_use_the_rest_of_the_api(client, user):
    token = login(client, "maria", "secret").json()["token"]
    response = client.get("/api/v1/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_list_filters(client, user):
    data = client.get("/api/v1/users", params={"role": "user"}).json()
    assert [u["username"] for u in data["results"]] == ["maria"]
    data = client.get("/api/v1/users", params={"username": "admin"}).json()
    assert [u["role"] for u in data["results"]] == ["admin"]


def test_update_user(client, user):
    data = client.put(f"/api/v1/users/{user['id']}", json={"username": "maria.g", "role": "admin"}).json()
    assert data["username"] == "maria.g"
    assert data["role"] == "admin"
    assert login(client, "maria.g", "secret").status_code == 200


def test_rename_to_taken_username_is_a_conflict(client, user):
    response = client.put(f"/api/v1/users/{user['id']}", json={"username": "admin"})
    assert response.status_code == 409


def test_change_password(client, user):
    response = client.put(f"/api/v1/users/{user['id']}/change-password", json={
        "oldPassword": "secret", "newPassword": "n3w"
    })
    assert response.status_code == 200
    assert login(client, "maria", "secret").status_code == 401
    assert login(client, "maria", "n3w").status_code == 200


def test_change_password_checks_old_password(client, user):
    response = client.put(f"/api/v1/users/{user['id']}/change-password", json={
        "oldPassword": "wrong", "newPassword": "n3w"
    })
    assert response.status_code == 400
    assert response.json()["error"] == "WRONG_PASSWORD"


def test_soft_deleted_user_cannot_log_in(client, user):
    data = client.put(f"/api/v1/users/{user['id']}/set-deleted").json()
    assert data["deleted"] is True
    assert data["deletedAt"] is not None

    response = login(client, "maria", "secret")
    assert response.status_code == 401
    assert response.json()["error"] == "USER_DELETED"


def test_restore_soft_deleted_user(client, user):
    client.put(f"/api/v1/users/{user['id']}/set-deleted")
    data = client.put(f"/api/v1/users/{user['id']}", json={"deleted": False}).json()
    assert data["deleted"] is False
    assert data["deletedAt"] is None


def test_delete_user(client, user):
    assert client.delete(f"/api/v1/users/{user['id']}").json() == {"id": user["id"]}
    assert client.get(f"/api/v1/users/{user['id']}").status_code == 404
