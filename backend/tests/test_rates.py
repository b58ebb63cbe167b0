import pytest


def test_create_rate(rate, apartment):
    assert rate["apartmentId"] == apartment["id"]
    assert rate["pricePerNight"] == 50
    assert rate["iva"] == 21


def test_create_rate_for_missing_apartment(client):
    response = client.post("/api/v1/rates", json={"apartmentId": 9999, "name": "Winter", "pricePerNight": 40})
    assert response.status_code == 404


@pytest.mark.parametrize("iva", [-1, 101])
def test_vat_must_be_a_percentage(client, apartment, iva):
    response = client.post("/api/v1/rates", json={
        "apartmentId": apartment["id"], "name": "Winter", "pricePerNight": 40, "iva": iva
    })
    assert response.status_code == 422


def test_update_name_keeps_pricing(client, rate):
    data = client.put(f"/api/v1/rates/{rate['id']}", json={"name": "High season"}).json()
    assert data["name"] == "High season"
    assert data["pricePerNight"] == 50


def test_moving_a_used_rate_to_another_apartment_is_a_conflict(client, rate, income):
    other = client.post("/api/v1/apartments", json={
        "name": "Playa", "address": "Paseo 2", "city": "Cadiz", "postalCode": "11001", "country": "Spain"
    }).json()
    response = client.put(f"/api/v1/rates/{rate['id']}", json={"apartmentId": other["id"]})
    assert response.status_code == 409


def test_delete_rate_in_use_is_a_conflict(client, rate, income):
    response = client.delete(f"/api/v1/rates/{rate['id']}")
    assert response.status_code == 409
    assert response.json()["details"] == {"incomes": 1}


def test_delete_unused_rate(client, rate):
    assert client.delete(f"/api/v1/rates/{rate['id']}").status_code == 200


def test_list_by_apartment(client, rate, apartment):
    data = client.get("/api/v1/rates", params={"apartmentId": apartment["id"]}).json()
    assert [r["id"] for r in data["results"]] == [rate["id"]]
