from decimal import Decimal

import pytest
from sqlalchemy import func, select

from storefront.order.db.models import Order, OrderStatus
from storefront.order.db.session import SessionLocal
from storefront.order.services import checkout as checkout_service

CHECKOUT = "/api/v1/order/checkout"


def order_count():
    with SessionLocal() as db:
        return db.execute(select(func.count(Order.id))).scalar_one()


def load_order(order_id):
    with SessionLocal() as db:
        order = db.get(Order, order_id)
        return order.status, [(i.sku, i.quantity, i.unit_price, i.product_name) for i in order.items]


@pytest.fixture()
def cart_c1(order_client):
    order_client.post("/api/v1/cart/", json={"customer_id": "c1"})
    order_client.post("/api/v1/cart/c1",
                      json={"sku": "A1", "product_name": "Widget", "unit_price": "10.00", "quantity": 2})


def a1_checkout(client, **extra):
    body = {"customer_id": "c1",
            "items": [{"sku": "A1", "product_name": "Widget", "unit_price": "10.00", "quantity": 2}]}
    body.update(extra)
    return client.post(CHECKOUT, json=body)


class TestCheckout:
    def test_empty_items(self, order_client, cart_c1):
        resp = order_client.post(CHECKOUT, json={"customer_id": "c1", "items": []})
        assert resp.status_code == 400
        assert resp.json()["status"] == "FAILED"
        assert resp.json()["message"] == "Cart is empty"
        assert order_count() == 0

    def test_no_cart(self, order_client):
        resp = a1_checkout(order_client, customer_id="nobody")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Cart not found for customerId: nobody"
        assert order_count() == 0

    def test_sku_not_in_cart_fails_whole_checkout(self, order_client, cart_c1, fake_gateway):
        resp = order_client.post(CHECKOUT, json={"customer_id": "c1", "items": [
            {"sku": "A1", "unit_price": "10.00", "quantity": 1},
            {"sku": "B2", "unit_price": "5.00", "quantity": 1},
        ]})
        assert resp.status_code == 404
        assert resp.json()["message"] == "Missing cart items: ['B2']"
        assert order_count() == 0
        assert fake_gateway.requests == []

    def test_successful_checkout(self, order_client, cart_c1, fake_gateway):
        resp = a1_checkout(order_client)
        body = resp.json()
        assert resp.status_code == 200
        assert body["status"] == "PENDING_PAYMENT"
        assert Decimal(str(body["total"])) == Decimal("20.00")
        assert body["session_id"] == "cs_test_1"
        assert body["message"] == "Payment session created: https://checkout.stripe.com/c/pay/cs_test_1"

        status, items = load_order(body["order_id"])
        assert status == OrderStatus.PENDING_PAYMENT
        assert items == [("A1", 2, Decimal("10.00"), "Widget")]

        [request] = fake_gateway.requests
        assert request.name == f"Order-{body['order_id']}"
        assert request.amount == 2000
        assert request.quantity == 1
        assert request.currency == "USD"
        assert request.client_reference_id == str(body["order_id"])

    def test_order_items_survive_cart_changes(self, order_client, cart_c1):
        order_id = a1_checkout(order_client).json()["order_id"]
        order_client.delete("/api/v1/cart/c1/A1")
        order_client.delete("/api/v1/cart/c1")
        _, items = load_order(order_id)
        assert items == [("A1", 2, Decimal("10.00"), "Widget")]
        assert order_client.get(f"/api/v1/order/{order_id}").json()["data"]["items"][0]["sku"] == "A1"

    def test_missing_price_and_quantity_count_as_zero(self, order_client, cart_c1, fake_gateway):
        resp = order_client.post(CHECKOUT, json={"customer_id": "c1", "items": [{"sku": "A1"}]})
        assert Decimal(str(resp.json()["total"])) == 0
        assert fake_gateway.requests[0].amount == 0

    def test_insufficient_stock(self, order_client, cart_c1, monkeypatch, fake_gateway):
        monkeypatch.setattr(checkout_service.inventory_client, "reserve_stock", lambda items: False)
        resp = a1_checkout(order_client)
        assert resp.status_code == 400
        assert resp.json()["status"] == "FAILED"
        assert resp.json()["message"] == "Insufficient stock for one or more items"
        assert resp.json()["order_id"] is None
        assert order_count() == 0
        assert fake_gateway.requests == []

    def test_gateway_error_marks_payment_failed(self, order_client, cart_c1, fake_gateway):
        fake_gateway.fail_with = "Network unreachable"
        resp = a1_checkout(order_client)
        body = resp.json()
        assert resp.status_code == 400
        assert body["status"] == "FAILED"
        assert body["message"] == "Payment failed: Stripe error: Network unreachable"
        status, _ = load_order(body["order_id"])
        assert status == OrderStatus.PAYMENT_FAILED

    def test_unexpected_gateway_exception_marks_payment_failed(self, order_client, cart_c1, fake_gateway, monkeypatch):
        def explode(request):
            raise TimeoutError("gateway timed out")
        monkeypatch.setattr(fake_gateway, "create_checkout_session", explode)

        resp = a1_checkout(order_client)
        body = resp.json()
        assert resp.status_code == 400
        assert body["status"] == "FAILED"
        assert body["message"] == "Payment failed: Stripe error: gateway timed out"
        status, _ = load_order(body["order_id"])
        assert status == OrderStatus.PAYMENT_FAILED


class TestGetOrder:
    def test_get(self, order_client, cart_c1):
        order_id = a1_checkout(order_client).json()["order_id"]
        resp = order_client.get(f"/api/v1/order/{order_id}")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["status"] == "PENDING_PAYMENT"
        assert data["customer_id"] == "c1"
        assert data["session_id"] == "cs_test_1"

    def test_unknown(self, order_client):
        resp = order_client.get("/api/v1/order/404")
        assert resp.status_code == 404
        assert resp.json()["message"] == "Order not found with ID: 404"
