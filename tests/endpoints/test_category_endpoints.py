from fastapi.testclient import TestClient

from tests.helpers.asserts import api_call, assert_error, auth_headers


def test_public_category_listing(client: TestClient, admin):
    api_call(client, "POST", "/categories/", headers=auth_headers(admin), json={"name": "Música", "icon": "🎵"})

    response = api_call(client, "GET", "/categories/")

    assert [c["name"] for c in response.json()["data"]] == ["Música"]


def test_create_category_returns_created(client: TestClient, admin):
    response = client.post("/categories/", headers=auth_headers(admin), json={"name": "Cine"})
    assert response.status_code == 201
    assert response.json()["data"]["active"] is True


def test_update_category_invalidates_listing(client: TestClient, admin, cache):
    created = api_call(client, "POST", "/categories/", headers=auth_headers(admin), json={"name": "Cine"}).json()["data"]
    api_call(client, "GET", "/categories/")
    assert "categories" in cache

    api_call(client, "PUT", f"/categories/{created['id']}", headers=auth_headers(admin), json={"active": False})

    assert "categories" not in cache
    assert api_call(client, "GET", "/categories/").json()["data"] == []


def test_category_management_forbidden_for_moderators(client: TestClient, moderator):
    response = client.post("/categories/", headers=auth_headers(moderator), json={"name": "Cine"})
    assert_error(response, 403, "FORBIDDEN")


def test_update_missing_category(client: TestClient, admin):
    response = client.put("/categories/missing", headers=auth_headers(admin), json={"name": "Nada"})
    assert_error(response, 404, "NOT_FOUND")
