BASE = "/api/v1/payment"


class TestPaymentEndpoint:
    def test_session_created(self, order_client, fake_gateway):
        resp = order_client.post(f"{BASE}/", json={"name": "Gift card", "amount": 2500, "quantity": 2})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "PENDING_PAYMENT"
        assert body["session_url"] == "https://checkout.stripe.com/c/pay/cs_test_1"
        [request] = fake_gateway.requests
        assert (request.name, request.amount, request.quantity) == ("Gift card", 2500, 2)

    def test_gateway_failure(self, order_client, fake_gateway):
        fake_gateway.fail_with = "Invalid API Key provided"
        resp = order_client.post(f"{BASE}/", json={"name": "Gift card", "amount": 2500})
        assert resp.status_code == 400
        assert resp.json() == {
            "status": "FAILED",
            "message": "Stripe error: Invalid API Key provided",
            "session_id": None,
            "session_url": None,
        }

    def test_amount_must_be_positive(self, order_client):
        assert order_client.post(f"{BASE}/", json={"name": "x", "amount": 0}).status_code == 400

    def test_success_and_cancel_pages(self, order_client):
        assert order_client.get(f"{BASE}/success").text == "Payment successful. Thank you!"
        assert order_client.get(f"{BASE}/cancel").text == "Payment was cancelled."
