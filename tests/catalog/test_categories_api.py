import pytest

BASE = "/api/v1/categories"


@pytest.fixture()
def electronics(catalog_client):
    resp = catalog_client.post(f"{BASE}/", json={"name": "Electronics", "description": "Gadgets"})
    assert resp.status_code == 201
    return resp.json()["data"]


class TestCategories:
    def test_create_wraps_in_envelope(self, catalog_client, electronics):
        assert electronics["name"] == "Electronics"
        resp = catalog_client.get(f"{BASE}/{electronics['id']}")
        body = resp.json()
        assert resp.status_code == 200
        assert body["status"] == 200
        assert body["message"] == "Category retrieved successfully"
        assert body["data"]["description"] == "Gadgets"

    def test_duplicate_name_conflicts(self, catalog_client, electronics):
        resp = catalog_client.post(f"{BASE}/", json={"name": "Electronics"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "DUPLICATE_RESOURCE"

    def test_unknown_id_not_found(self, catalog_client):
        resp = catalog_client.get(f"{BASE}/999")
        assert resp.status_code == 404
        assert resp.json() == {
            "status": 404,
            "message": "Category not found with ID: 999",
            "error": "RESOURCE_NOT_FOUND",
        }

    def test_non_positive_id_is_invalid(self, catalog_client):
        resp = catalog_client.get(f"{BASE}/0")
        assert resp.status_code == 400
        assert resp.json()["error"] == "INVALID_INPUT"

    def test_update(self, catalog_client, electronics):
        resp = catalog_client.put(f"{BASE}/{electronics['id']}", json={"name": "Devices", "description": ""})
        assert resp.status_code == 200
        assert resp.json()["data"]["name"] == "Devices"

    def test_list_sorted_by_name(self, catalog_client, electronics):
        catalog_client.post(f"{BASE}/", json={"name": "Books"})
        names = [c["name"] for c in catalog_client.get(f"{BASE}/").json()["data"]]
        assert names == ["Books", "Electronics"]

    def test_delete_empty_category(self, catalog_client, electronics):
        resp = catalog_client.delete(f"{BASE}/{electronics['id']}")
        assert resp.status_code == 200
        assert "data" not in resp.json()
        assert catalog_client.get(f"{BASE}/{electronics['id']}").status_code == 404

    def test_delete_blocked_while_products_reference_it(self, catalog_client, electronics):
        catalog_client.post("/api/v1/products/", json={
            "name": "Phone", "price": "199.00", "brand": "Acme",
            "sku": "PH-1", "category_name": "Electronics",
        })
        resp = catalog_client.delete(f"{BASE}/{electronics['id']}")
        assert resp.status_code == 400
        assert resp.json()["error"] == "BUSINESS_RULE_VIOLATION"

    def test_blank_name_fails_validation(self, catalog_client):
        resp = catalog_client.post(f"{BASE}/", json={"name": ""})
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "VALIDATION_FAILED"
        assert body["message"].startswith("Validation failed: name - ")
