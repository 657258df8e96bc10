from __future__ import annotations

from bson import ObjectId

from restaurant_directory.store import RestaurantIn

NEW_RESTAURANT = {
    "title": "Spice House",
    "description": "North Indian and Chinese",
    "image_url": "https://img.test/spice.jpg",
    "rating": 4.2,
}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_restaurants_empty(client):
    resp = client.get("/api/restaurants")
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_restaurant_returns_record_with_id(client):
    resp = client.post("/api/restaurants", json=NEW_RESTAURANT)
    assert resp.status_code == 200
    body = resp.json()
    assert ObjectId.is_valid(body["_id"])
    for key, value in NEW_RESTAURANT.items():
        assert body[key] == value


def test_created_restaurant_can_be_fetched(client):
    created = client.post("/api/restaurants", json=NEW_RESTAURANT).json()
    resp = client.get(f"/api/restaurants/{created['_id']}")
    assert resp.status_code == 200
    assert resp.json() == created


def test_list_includes_created_restaurants(client, repository):
    repository.create_restaurant(RestaurantIn(title="One"))
    repository.create_restaurant(RestaurantIn(title="Two"))
    body = client.get("/api/restaurants").json()
    assert sorted(r["title"] for r in body) == ["One", "Two"]


def test_create_restaurant_with_missing_fields(client):
    resp = client.post("/api/restaurants", json={"title": "Bare"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Bare"
    assert body["description"] is None
    assert body["rating"] is None


def test_get_unknown_restaurant(client):
    resp = client.get(f"/api/restaurants/{ObjectId()}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Restaurant doesn't exist!"}


def test_get_malformed_id(client):
    resp = client.get("/api/restaurants/not-an-object-id")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Restaurant doesn't exist!"}


def test_delete_restaurant(client, repository):
    created = repository.create_restaurant(RestaurantIn(title="Closing down"))
    resp = client.delete(f"/api/restaurants/{created.id}")
    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert client.get(f"/api/restaurants/{created.id}").status_code == 404


def test_delete_absent_restaurant_still_succeeds(client):
    resp = client.delete(f"/api/restaurants/{ObjectId()}")
    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}


def test_delete_malformed_id(client):
    resp = client.delete("/api/restaurants/garbage")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Restaurant doesn't exist!"}


def test_create_restaurant_form_encoded(client):
    resp = client.post(
        "/api/restaurants",
        data={"title": "Form Place", "description": "Posted as a form", "rating": "4.5"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Form Place"
    assert body["rating"] == 4.5
    assert client.get(f"/api/restaurants/{body['_id']}").json() == body


def test_create_restaurant_numeric_title_is_stored_as_text(client):
    resp = client.post("/api/restaurants", json={"title": 123, "rating": 4})
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "123"
    assert body["rating"] == 4.0


def test_create_restaurant_unreadable_rating(client):
    resp = client.post("/api/restaurants", json={"title": "X", "rating": "five stars"})
    assert resp.status_code == 422
    assert "error" in resp.json()
    assert client.get("/api/restaurants").json() == []
