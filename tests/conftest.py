import hashlib
import hmac
import os
import time

os.environ["POSTGRES_DSN"] = "sqlite://"
os.environ["CONSUMER_ENABLED"] = "false"
os.environ["INVENTORY_RESERVATION_ENABLED"] = "false"
os.environ["STRIPE_WEBHOOK_SECRET"] = ""

import pytest
from fastapi.testclient import TestClient

from storefront.catalog.db import session as catalog_session
from storefront.inventory.db import session as inventory_session
from storefront.order.db import session as order_session
import storefront.catalog.db.models  # noqa
import storefront.inventory.db.models  # noqa
import storefront.order.db.models  # noqa
from storefront.catalog.messaging import producer as catalog_producer
from storefront.inventory.messaging import producer as inventory_producer
from storefront.order.services import gateway
from storefront.order.services.gateway import FAILED, PENDING_PAYMENT, PaymentSession

DATABASES = (catalog_session, inventory_session, order_session)


class FakeProducer:
    """Records what would have been sent to Kafka."""

    def __init__(self):
        self.sent = []

    def send(self, topic, key=None, value=None):
        self.sent.append((topic, key, value))

    def flush(self, timeout=None):
        pass

    def topic(self, name):
        return [(k, v) for t, k, v in self.sent if t == name]


class FakeGateway:
    webhook_secret = ""

    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.requests = []

    def create_checkout_session(self, request):
        self.requests.append(request)
        if self.fail_with:
            return PaymentSession(status=FAILED, message=f"Stripe error: {self.fail_with}")
        session_id = f"cs_test_{len(self.requests)}"
        return PaymentSession(
            status=PENDING_PAYMENT,
            message="Payment session created",
            session_id=session_id,
            session_url=f"https://checkout.stripe.com/c/pay/{session_id}",
        )


@pytest.fixture(autouse=True)
def databases():
    for s in DATABASES:
        s.Base.metadata.create_all(s.engine)
    yield
    for s in DATABASES:
        s.Base.metadata.drop_all(s.engine)


@pytest.fixture(autouse=True)
def kafka(monkeypatch):
    fake = FakeProducer()
    monkeypatch.setattr(catalog_producer, "get_producer", lambda: fake)
    monkeypatch.setattr(inventory_producer, "get_producer", lambda: fake)
    return fake


@pytest.fixture(autouse=True)
def fake_gateway():
    fake = FakeGateway()
    gateway.set_gateway(fake)
    yield fake
    gateway.reset_gateway()


@pytest.fixture()
def catalog_client():
    from storefront.catalog.main import app
    return TestClient(app)


@pytest.fixture()
def inventory_api():
    from storefront.inventory.main import app
    return TestClient(app)


@pytest.fixture()
def order_client():
    from storefront.order.main import app
    return TestClient(app)


@pytest.fixture()
def inventory_db():
    db = inventory_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def order_db():
    db = order_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def stripe_signature(payload: str, secret: str, timestamp: int = None) -> str:
    timestamp = int(time.time()) if timestamp is None else timestamp
    digest = hmac.new(secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256)
    return f"t={timestamp},v1={digest.hexdigest()}"


@pytest.fixture()
def sign():
    return stripe_signature
