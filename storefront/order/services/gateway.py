"""Stripe checkout-session gateway.

``get_gateway()`` / ``set_gateway()`` hold the active implementation so tests
can install a fake without touching the Stripe API.
"""
from dataclasses import dataclass
from typing import Optional
import json
import stripe
from storefront.order.core.config import settings
from storefront.common.logging import get_logger

logger = get_logger(__name__)

PENDING_PAYMENT = "PENDING_PAYMENT"
FAILED = "FAILED"


@dataclass
class PaymentRequest:
    name: str
    amount: int
    quantity: int = 1
    currency: Optional[str] = None
    client_reference_id: Optional[str] = None


@dataclass
class PaymentSession:
    status: str
    message: str
    session_id: Optional[str] = None
    session_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == PENDING_PAYMENT


class InvalidSignature(Exception):
    pass


class StripeGateway:
    def __init__(self, api_key: str, webhook_secret: str):
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_checkout_session(self, request: PaymentRequest) -> PaymentSession:
        currency = (request.currency or settings.PAYMENT_CURRENCY).lower()
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=[{
                    "price_data": {
                        "currency": currency,
                        "unit_amount": request.amount,
                        "product_data": {"name": request.name},
                    },
                    "quantity": request.quantity,
                }],
                success_url=settings.PAYMENT_SUCCESS_URL,
                cancel_url=settings.PAYMENT_CANCEL_URL,
                client_reference_id=request.client_reference_id,
            )
        except stripe.StripeError as e:
            logger.warning("stripe_session_failed", name=request.name, error=str(e))
            return PaymentSession(status=FAILED, message=f"Stripe error: {e}")

        url = getattr(session, "url", None) or f"https://checkout.stripe.com/c/pay/{session.id}"
        logger.info("stripe_session_created", session_id=session.id, client_reference_id=request.client_reference_id)
        return PaymentSession(status=PENDING_PAYMENT, message="Payment session created",
                              session_id=session.id, session_url=url)

    def verify_webhook(self, payload: str, sig_header: str) -> dict:
        """Check the Stripe-Signature header and return the decoded event."""
        try:
            stripe.WebhookSignature.verify_header(payload, sig_header, self.webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise InvalidSignature(str(e)) from e
        return json.loads(payload)


_current_gateway: Optional[StripeGateway] = None


def get_gateway() -> StripeGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = StripeGateway(settings.STRIPE_SECRET_KEY, settings.STRIPE_WEBHOOK_SECRET)
    return _current_gateway


def set_gateway(gateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
