def test_create_intermediary(intermediary):
    assert intermediary["name"] == "Booking"
    assert intermediary["commission"] == 15


def test_invalid_email_is_rejected(client):
    response = client.post("/api/v1/intermediaries", json={"name": "Airbnb", "surname": "Channel", "email": "nope"})
    assert response.status_code == 422


def test_optional_fields_can_be_cleared(client, intermediary):
    data = client.put(f"/api/v1/intermediaries/{intermediary['id']}", json={"phone": None}).json()
    assert data["phone"] is None


def test_required_fields_cannot_be_cleared(client, intermediary):
    response = client.put(f"/api/v1/intermediaries/{intermediary['id']}", json={"surname": None})
    assert response.status_code == 400


def test_list_filters(client, intermediary):
    data = client.get("/api/v1/intermediaries", params={"name": "Booking"}).json()
    assert data["pagination"]["items"]["total"] == 1


def test_delete_intermediary_in_use_is_a_conflict(client, intermediary, income):
    response = client.delete(f"/api/v1/intermediaries/{intermediary['id']}")
    assert response.status_code == 409


def test_delete_intermediary(client, intermediary):
    assert client.delete(f"/api/v1/intermediaries/{intermediary['id']}").json() == {"id": intermediary["id"]}
