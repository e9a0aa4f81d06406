import pytest


@pytest.mark.parametrize("client_fixture,path,name", [
    ("catalog_client", "/health", "Product Service"),
    ("catalog_client", "/api/v1/products/health", "Product Service"),
    ("catalog_client", "/api/v1/categories/health", "Product Service"),
    ("inventory_api", "/health", "Inventory Service"),
    ("order_client", "/api/v1/order/health", "Order Service"),
    ("order_client", "/api/v1/cart/health", "Order Service"),
])
def test_health(request, client_fixture, path, name):
    client = request.getfixturevalue(client_fixture)
    resp = client.get(path)
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "UP"
    assert body["service"] == name
    assert body["timestamp"]


def test_info(catalog_client):
    assert catalog_client.get("/v1/_info").json() == {"service": "catalog", "version": "0.1.0"}
