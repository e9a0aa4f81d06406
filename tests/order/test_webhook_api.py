import json

import pytest

from storefront.order.db.models import Order, OrderStatus
from storefront.order.db.session import SessionLocal
from storefront.order.services import gateway as gateway_module
from storefront.order.services.gateway import StripeGateway

WEBHOOK = "/api/v1/order/webhook"


@pytest.fixture()
def order_id():
    with SessionLocal() as db:
        order = Order(customer_id="c1", total_amount=20, status=OrderStatus.PENDING_PAYMENT)
        db.add(order)
        db.commit()
        return order.id


def status_of(order_id):
    with SessionLocal() as db:
        return db.get(Order, order_id).status


def completed(reference):
    return json.dumps({
        "id": "evt_1",
        "type": "checkout.session.completed",
        "data": {"object": {"id": "cs_test_1", "client_reference_id": reference}},
    })


class TestUnverifiedWebhook:
    def test_completed_marks_order_paid(self, order_client, order_id):
        resp = order_client.post(WEBHOOK, content=completed(str(order_id)))
        assert resp.status_code == 200
        assert resp.text == "received"
        assert status_of(order_id) == OrderStatus.PAID

    def test_other_event_types_ignored(self, order_client, order_id):
        payload = json.dumps({"type": "checkout.session.expired",
                              "data": {"object": {"client_reference_id": str(order_id)}}})
        assert order_client.post(WEBHOOK, content=payload).status_code == 200
        assert status_of(order_id) == OrderStatus.PENDING_PAYMENT

    @pytest.mark.parametrize("reference", [None, "not-a-number", "9999"])
    def test_unusable_reference_still_acknowledged(self, order_client, order_id, reference):
        resp = order_client.post(WEBHOOK, content=completed(reference))
        assert resp.status_code == 200
        assert status_of(order_id) == OrderStatus.PENDING_PAYMENT

    def test_invalid_json(self, order_client):
        resp = order_client.post(WEBHOOK, content="{not json")
        assert resp.status_code == 400
        assert resp.text == "Invalid payload"

    def test_undecodable_body(self, order_client):
        resp = order_client.post(WEBHOOK, content=b"\xff\xfe{")
        assert resp.status_code == 400
        assert resp.text == "Invalid payload"

    def test_signature_ignored_without_secret(self, order_client, order_id):
        resp = order_client.post(WEBHOOK, content=completed(str(order_id)),
                                 headers={"Stripe-Signature": "t=1,v1=bogus"})
        assert resp.status_code == 200
        assert status_of(order_id) == OrderStatus.PAID


class TestVerifiedWebhook:
    @pytest.fixture(autouse=True)
    def stripe_gateway(self):
        gateway_module.set_gateway(StripeGateway("sk_test_123", "whsec_test"))

    def test_valid_signature(self, order_client, order_id, sign):
        payload = completed(str(order_id))
        resp = order_client.post(WEBHOOK, content=payload,
                                 headers={"Stripe-Signature": sign(payload, "whsec_test")})
        assert resp.status_code == 200
        assert status_of(order_id) == OrderStatus.PAID

    def test_invalid_signature(self, order_client, order_id, sign):
        payload = completed(str(order_id))
        resp = order_client.post(WEBHOOK, content=payload,
                                 headers={"Stripe-Signature": sign(payload, "whsec_wrong")})
        assert resp.status_code == 400
        assert resp.text == "Invalid signature"
        assert status_of(order_id) == OrderStatus.PENDING_PAYMENT

    def test_signed_but_not_json(self, order_client, sign):
        payload = "not json"
        resp = order_client.post(WEBHOOK, content=payload,
                                 headers={"Stripe-Signature": sign(payload, "whsec_test")})
        assert resp.status_code == 400
        assert resp.text == "Invalid payload"

    def test_missing_header_rejected_when_secret_configured(self, order_client, order_id):
        resp = order_client.post(WEBHOOK, content=completed(str(order_id)))
        assert resp.status_code == 400
        assert resp.text == "Invalid signature"
        assert status_of(order_id) == OrderStatus.PENDING_PAYMENT

    def test_undecodable_body(self, order_client, order_id):
        resp = order_client.post(WEBHOOK, content=b"\xff\xfe{",
                                 headers={"Stripe-Signature": "t=1,v1=bogus"})
        assert resp.status_code == 400
        assert resp.text == "Invalid payload"


class TestOrderStatusTransitions:
    def make_order(self, status):
        with SessionLocal() as db:
            order = Order(customer_id="c1", total_amount=20, status=status)
            db.add(order)
            db.commit()
            return order.id

    @pytest.mark.parametrize("status", [OrderStatus.CREATED, OrderStatus.PAYMENT_FAILED, OrderStatus.FAILED])
    def test_only_pending_payment_becomes_paid(self, order_client, status):
        order_id = self.make_order(status)
        resp = order_client.post(WEBHOOK, content=completed(str(order_id)))
        assert resp.status_code == 200
        assert status_of(order_id) == status

    def test_repeated_delivery_keeps_paid(self, order_client):
        order_id = self.make_order(OrderStatus.PENDING_PAYMENT)
        for _ in range(2):
            assert order_client.post(WEBHOOK, content=completed(str(order_id))).status_code == 200
        assert status_of(order_id) == OrderStatus.PAID
